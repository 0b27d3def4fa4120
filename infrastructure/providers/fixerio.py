from typing import Any

from domain.exceptions.currency import ProviderRejectedError
from domain.models.currency import RateSnapshot

from .base import ExchangeRateProvider


class FixerIOProvider(ExchangeRateProvider):
	"""Fixer.io latest rates. The free plan only quotes against EUR."""

	BASE_URL = 'http://data.fixer.io/api'
	SUPPORTED_BASE = 'EUR'
	CREDENTIAL_NAME = 'FIXER_API_KEY'

	@property
	def name(self) -> str:
		return 'Fixer.io'

	def _build_request(self, base: str) -> tuple[str, dict]:
		return f'{self.BASE_URL}/latest', {'access_key': self.api_key}

	def _check_payload(self, data: dict[str, Any]) -> None:
		if not data.get('success', False):
			error = data.get('error') or {}
			info = error.get('info', 'API Error') if isinstance(error, dict) else str(error)
			raise ProviderRejectedError(self.name, f'Fixer.io API error: {info}')

	def _parse_snapshot(self, data: dict[str, Any], base: str) -> RateSnapshot:
		return self._make_snapshot(data['rates'], data.get('base', base), data['timestamp'])
