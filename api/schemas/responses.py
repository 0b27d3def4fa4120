from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from domain.models.currency import Freshness, ProviderStatus


class RatesResponse(BaseModel):
	rates: dict[str, float] = Field(..., description='Conversion factor per currency code, relative to base')
	base: str = Field(..., description='Base currency code')
	source: str = Field(..., description='Provider that produced the rates')
	timestamp: int = Field(..., description='Epoch seconds the provider last updated the rates')
	updated_at_local: str = Field(..., description='ISO-8601 time the rates were retrieved')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'rates': {'EUR': 0.92, 'GBP': 0.79},
				'base': 'USD',
				'source': 'ExchangeRate-API',
				'timestamp': 1760832001,
				'updated_at_local': '2025-10-19T00:15:04.120000+00:00',
			}
		}
	)


class ProviderStatusResponse(BaseModel):
	name: str = Field(..., description='Provider name, usable as the source parameter')
	status: ProviderStatus = Field(..., description='unknown, active or down')
	last_success_at: datetime | None = Field(None, description='Last successful fetch')
	last_failure_at: datetime | None = Field(None, description='Last failed fetch')


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	original_amount: Decimal = Field(..., description='Original amount requested')
	converted_amount: Decimal = Field(..., description='Converted amount')
	exchange_rate: Decimal = Field(..., description='Exchange rate used for conversion')
	timestamp: int = Field(..., description='Epoch seconds the provider last updated the rate')
	source: str = Field(..., description='Provider of the rate')
	freshness: Freshness = Field(..., description='fresh, recent or stale')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'from_currency': 'USD',
				'to_currency': 'EUR',
				'original_amount': 100.00,
				'converted_amount': 92.00,
				'exchange_rate': 0.92,
				'timestamp': 1760832001,
				'source': 'ExchangeRate-API',
				'freshness': 'fresh',
			}
		}
	)


class HealthResponse(BaseModel):
	status: str
