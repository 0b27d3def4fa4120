from .responses import ConversionResponse, HealthResponse, ProviderStatusResponse, RatesResponse

__all__ = [
	'ConversionResponse',
	'HealthResponse',
	'ProviderStatusResponse',
	'RatesResponse',
]
