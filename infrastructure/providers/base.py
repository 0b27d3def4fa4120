import logging
import math
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from domain.exceptions.currency import (
    MissingCredentialError,
    ProviderRejectedError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)
from domain.models.currency import RateSnapshot

logger = logging.getLogger(__name__)


class ExchangeRateProvider(ABC):
    """A base class for rate providers, handling credential checks and HTTP errors.

    Subclasses describe where the latest rates live and how the provider's
    payload maps onto a RateSnapshot. ``fetch_rates`` returns None when the
    provider cannot serve the requested base at all.
    """

    BASE_URL: str
    SUPPORTED_BASE: str | None = None
    CREDENTIAL_NAME: str = 'api_key'

    def __init__(
        self,
        api_key: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 5,
        retry_attempts: int = 2,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.retry_attempts = max(1, retry_attempts)
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={'accept': 'application/json'},
        )

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def _build_request(self, base: str) -> tuple[str, dict]:
        """Return the url and query params for the latest rates of ``base``."""

    @abstractmethod
    def _check_payload(self, data: dict[str, Any]) -> None:
        """Raise ProviderRejectedError if the payload reports an error."""

    @abstractmethod
    def _parse_snapshot(self, data: dict[str, Any], base: str) -> RateSnapshot:
        ...

    def supports(self, base: str) -> bool:
        return self.SUPPORTED_BASE is None or base == self.SUPPORTED_BASE

    async def fetch_rates(self, base: str) -> RateSnapshot | None:
        if not self.api_key:
            raise MissingCredentialError(self.name, f'{self.name}: missing {self.CREDENTIAL_NAME}')

        if not self.supports(base):
            logger.info(f'{self.name} only supports {self.SUPPORTED_BASE} base, skipping {base}')
            return None

        url, params = self._build_request(base)
        data = await self._get_json(url, params)
        self._check_payload(data)

        try:
            return self._parse_snapshot(data, base)
        except (AttributeError, KeyError, OverflowError, TypeError, ValueError) as e:
            raise ProviderRejectedError(
                self.name, f'{self.name} response parsing error: {str(e)}'
            ) from e

    async def _get_json(self, url: str, params: dict) -> dict[str, Any]:
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.retry_attempts),
                wait=wait_exponential(multiplier=0.1, max=1),
                retry=retry_if_exception_type(httpx.ConnectError),
                reraise=True,
            ):
                with attempt:
                    response = await self._client.get(url, params=params)
            response.raise_for_status()
            data = response.json()

        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                self.name, f'{self.name} timed out after {self.timeout}s'
            ) from e
        except httpx.HTTPStatusError as e:
            raise ProviderRejectedError(
                self.name,
                f'{self.name} HTTP error {e.response.status_code}: {e.response.text[:200]}',
            ) from e
        except httpx.RequestError as e:
            raise ProviderUnavailableError(
                self.name, f'{self.name} request failed: {e.__class__.__name__}'
            ) from e
        except ValueError as e:
            raise ProviderRejectedError(
                self.name, f'{self.name} response parsing error: {str(e)}'
            ) from e

        if not isinstance(data, dict):
            raise ProviderRejectedError(self.name, f'{self.name} returned an unexpected payload')
        return data

    def _make_snapshot(self, rates: dict, base: str, provider_timestamp: Any) -> RateSnapshot:
        if not isinstance(rates, dict):
            raise ProviderRejectedError(self.name, f'{self.name} returned malformed rates')

        cleaned = {}
        for code, rate in rates.items():
            if isinstance(rate, bool) or not isinstance(rate, (int, float)):
                continue
            if math.isfinite(rate) and rate > 0:
                cleaned[code] = float(rate)

        if not cleaned:
            raise ProviderRejectedError(self.name, f'{self.name} returned no usable rates')

        return RateSnapshot(
            rates=cleaned,
            base=base,
            source=self.name,
            provider_timestamp=int(provider_timestamp),
            retrieved_at=datetime.now(UTC),
        )

    async def close(self) -> None:
        """Cleanly close the HTTP client."""
        await self._client.aclose()
