from typing import Any

from domain.exceptions.currency import ProviderRejectedError
from domain.models.currency import RateSnapshot

from .base import ExchangeRateProvider


class ExchangeRateAPIProvider(ExchangeRateProvider):
    """ExchangeRate-API v6. Serves any base currency; the key is part of the path."""

    BASE_URL = "https://v6.exchangerate-api.com/v6"
    CREDENTIAL_NAME = "EXCHANGERATE_API_KEY"

    @property
    def name(self) -> str:
        return "ExchangeRate-API"

    def _build_request(self, base: str) -> tuple[str, dict]:
        return f"{self.BASE_URL}/{self.api_key}/latest/{base}", {}

    def _check_payload(self, data: dict[str, Any]) -> None:
        if data.get("result") != "success":
            error_type = data.get("error-type", "unknown-error")
            raise ProviderRejectedError(self.name, f"ExchangeRate-API error: {error_type}")

    def _parse_snapshot(self, data: dict[str, Any], base: str) -> RateSnapshot:
        return self._make_snapshot(
            data["conversion_rates"],
            data.get("base_code", base),
            data["time_last_update_unix"],
        )
