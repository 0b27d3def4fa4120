import logging
import random
from dataclasses import dataclass
from datetime import datetime

from domain.exceptions.currency import UnknownProviderError
from domain.models.currency import ProviderStatus, ProviderStatusView, QuotaTier
from infrastructure.providers.base import ExchangeRateProvider

logger = logging.getLogger(__name__)


@dataclass
class ProviderRecord:
    """Mutable health state for one configured provider. Only the registry writes it."""

    name: str
    quota_tier: QuotaTier
    provider: ExchangeRateProvider
    status: ProviderStatus = ProviderStatus.UNKNOWN
    last_success_at: datetime | None = None
    last_failure_at: datetime | None = None


class ProviderRegistry:
    """Fixed set of providers plus their health bookkeeping."""

    def __init__(
        self,
        providers: list[tuple[ExchangeRateProvider, QuotaTier]],
        rng: random.Random | None = None,
    ):
        self._records: dict[str, ProviderRecord] = {}
        for provider, tier in providers:
            if provider.name in self._records:
                raise ValueError(f"Provider {provider.name} registered twice")
            self._records[provider.name] = ProviderRecord(
                name=provider.name, quota_tier=QuotaTier(tier), provider=provider
            )
        self._rng = rng or random.Random()

    def all_providers(self) -> list[ProviderRecord]:
        return list(self._records.values())

    def get(self, name: str) -> ProviderRecord:
        record = self._records.get(name)
        if record is None:
            raise UnknownProviderError(f"Unknown provider: {name}")
        return record

    def candidate_order(self, exclude_source: str | None = None) -> list[ProviderRecord]:
        """
        High quota providers first, shuffled on every call so no single one
        takes every request; low quota providers follow in configured order.
        """
        records = [r for r in self._records.values() if r.name != exclude_source]

        high = [r for r in records if r.quota_tier == QuotaTier.HIGH]
        low = [r for r in records if r.quota_tier == QuotaTier.LOW]
        self._rng.shuffle(high)

        return high + low

    def record_outcome(self, name: str, success: bool, at: datetime) -> None:
        record = self._records.get(name)
        if record is None:
            logger.warning(f"Ignoring outcome for unknown provider {name}")
            return

        if success:
            record.status = ProviderStatus.ACTIVE
            if record.last_success_at is None or at > record.last_success_at:
                record.last_success_at = at
        else:
            record.status = ProviderStatus.DOWN
            if record.last_failure_at is None or at > record.last_failure_at:
                record.last_failure_at = at

    def status_snapshot(self) -> list[ProviderStatusView]:
        return [
            ProviderStatusView(
                name=r.name,
                status=r.status,
                last_success_at=r.last_success_at,
                last_failure_at=r.last_failure_at,
            )
            for r in self._records.values()
        ]

    async def close(self) -> None:
        for record in self._records.values():
            await record.provider.close()
