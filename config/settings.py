from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.models.currency import QuotaTier


class Settings(BaseSettings):
	# Providers: an empty credential leaves the provider registered but failing fast
	EXCHANGERATE_API_KEY: str = ''
	OPENEXCHANGERATES_APP_ID: str = ''
	FIXER_API_KEY: str = ''

	EXCHANGERATE_API_TIER: QuotaTier = QuotaTier.HIGH
	OPENEXCHANGERATES_TIER: QuotaTier = QuotaTier.HIGH
	FIXER_TIER: QuotaTier = QuotaTier.LOW

	PROVIDER_TIMEOUT_SECONDS: float = 5
	PROVIDER_RETRY_ATTEMPTS: int = 2

	# Aggregation
	CACHE_TTL_SECONDS: float = 3600
	FRESHNESS_THRESHOLD_SECONDS: float = 3600

	# Application
	APP_NAME: str = 'FX Rate Aggregator'
	DEBUG: bool = False
	HOST: str = '0.0.0.0'
	PORT: int = 8000
	CORS_ORIGINS: list[str] = ['*']

	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
