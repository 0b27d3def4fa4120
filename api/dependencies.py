import logging
from typing import Annotated

from fastapi import Depends, Request

from application.services import ConversionService, ProviderRegistry, RateService
from config.settings import Settings
from infrastructure.cache.memory_cache import SnapshotCache
from infrastructure.providers import (
	ExchangeRateAPIProvider,
	FixerIOProvider,
	OpenExchangeProvider,
)

logger = logging.getLogger(__name__)


def build_rate_service(settings: Settings) -> RateService:
	"""Wire the providers, registry and cache into one engine. Called once at startup."""
	client_options = {
		'timeout': settings.PROVIDER_TIMEOUT_SECONDS,
		'retry_attempts': settings.PROVIDER_RETRY_ATTEMPTS,
	}
	providers = [
		(ExchangeRateAPIProvider(settings.EXCHANGERATE_API_KEY, **client_options), settings.EXCHANGERATE_API_TIER),
		(OpenExchangeProvider(settings.OPENEXCHANGERATES_APP_ID, **client_options), settings.OPENEXCHANGERATES_TIER),
		(FixerIOProvider(settings.FIXER_API_KEY, **client_options), settings.FIXER_TIER),
	]

	for provider, tier in providers:
		if not provider.api_key:
			logger.warning(f'{provider.name} has no credential configured ({provider.CREDENTIAL_NAME})')
		logger.info(f'Registered provider {provider.name} ({tier.value} quota)')

	return RateService(
		registry=ProviderRegistry(providers),
		cache=SnapshotCache(default_ttl=settings.CACHE_TTL_SECONDS),
		freshness_threshold=settings.FRESHNESS_THRESHOLD_SECONDS,
	)


def get_rate_service(request: Request) -> RateService:
	rate_service = getattr(request.app.state, 'rate_service', None)
	if rate_service is None:
		raise RuntimeError('Rate service not initialized')
	return rate_service


def get_conversion_service(
	rate_service: Annotated[RateService, Depends(get_rate_service)],
) -> ConversionService:
	return ConversionService(rate_service=rate_service)
