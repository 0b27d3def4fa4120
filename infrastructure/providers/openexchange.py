from typing import Any

from domain.exceptions.currency import ProviderRejectedError
from domain.models.currency import RateSnapshot

from .base import ExchangeRateProvider


class OpenExchangeProvider(ExchangeRateProvider):
    """
    Open Exchange Rates latest rates.
    Can't change base currency on the free plan, it is always USD,
    see https://docs.openexchangerates.org/reference/set-base-currency
    """

    BASE_URL = "https://openexchangerates.org/api"
    SUPPORTED_BASE = "USD"
    CREDENTIAL_NAME = "OPENEXCHANGERATES_APP_ID"

    @property
    def name(self) -> str:
        return "Open Exchange Rates"

    def _build_request(self, base: str) -> tuple[str, dict]:
        return f"{self.BASE_URL}/latest.json", {"app_id": self.api_key}

    def _check_payload(self, data: dict[str, Any]) -> None:
        if data.get("error"):
            message = data.get("description", data.get("message", "API Error"))
            raise ProviderRejectedError(self.name, f"OpenExchange API error: {message}")

    def _parse_snapshot(self, data: dict[str, Any], base: str) -> RateSnapshot:
        return self._make_snapshot(data["rates"], data.get("base", base), data["timestamp"])
