from .conversion_service import ConversionService
from .provider_registry import ProviderRecord, ProviderRegistry
from .rate_service import RateService

__all__ = ['ConversionService', 'ProviderRecord', 'ProviderRegistry', 'RateService']
