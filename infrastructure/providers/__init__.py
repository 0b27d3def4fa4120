from .base import ExchangeRateProvider
from .exchangerate_api import ExchangeRateAPIProvider
from .fixerio import FixerIOProvider
from .openexchange import OpenExchangeProvider

__all__ = ['ExchangeRateProvider', 'ExchangeRateAPIProvider', 'FixerIOProvider', 'OpenExchangeProvider']
