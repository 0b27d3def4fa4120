import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime

from application.services.provider_registry import ProviderRecord, ProviderRegistry
from domain.exceptions.currency import (
    AllProvidersExhaustedError,
    ProviderError,
    ProviderNoDataError,
)
from domain.models.currency import ProviderStatusView, RateSnapshot
from infrastructure.cache.memory_cache import SnapshotCache

logger = logging.getLogger(__name__)


class RateService:
    """Serves full rate sets for a base currency from the cache or the providers.

    Providers are tried one at a time. The first snapshot younger than
    ``freshness_threshold`` seconds wins; otherwise the freshest stale snapshot
    is returned once every candidate has been tried.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        cache: SnapshotCache,
        freshness_threshold: float = 3600,
        clock: Callable[[], float] = time.time,
    ):
        self.registry = registry
        self.cache = cache
        self.freshness_threshold = freshness_threshold
        self._clock = clock

    async def fetch_rates(self, base: str, source: str | None = None) -> RateSnapshot:
        key = self.cache.make_key(base, source)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"Serving {key} from cache")
            return cached

        if source:
            return await self._fetch_from_source(base, source)
        return await self._select_provider(base)

    def get_provider_status(self) -> list[ProviderStatusView]:
        return self.registry.status_snapshot()

    def now(self) -> float:
        """Current epoch seconds, the same clock snapshot ages are measured against."""
        return self._clock()

    async def _fetch_from_source(self, base: str, source: str) -> RateSnapshot:
        # An explicit source gets that provider's answer or its error, never a fallback
        record = self.registry.get(source)

        try:
            snapshot = await record.provider.fetch_rates(base)
        except ProviderError as e:
            logger.warning(f"Provider {record.name} failed: {e}")
            self.registry.record_outcome(record.name, False, self._now())
            raise

        if snapshot is None:
            raise ProviderNoDataError(f"{record.name} returned no data for {base}")

        self.registry.record_outcome(record.name, True, self._now())
        self._store(base, record.name, snapshot)
        return snapshot

    async def _select_provider(self, base: str) -> RateSnapshot:
        errors: list[str] = []
        best_candidate: RateSnapshot | None = None
        best_name: str | None = None

        for record in self.registry.candidate_order():
            snapshot = await self._try_provider(record, base, errors)
            if snapshot is None:
                continue

            age = snapshot.age_seconds(self._clock())
            logger.info(f"Provider {record.name} returned data for {base}. Age: {age:.0f}s")

            if age < self.freshness_threshold:
                self._store(base, record.name, snapshot)
                return snapshot

            if best_candidate is None or snapshot.provider_timestamp > best_candidate.provider_timestamp:
                best_candidate = snapshot
                best_name = record.name

        if best_candidate is not None:
            logger.warning(
                f"All providers checked for {base}. Returning best candidate from {best_name} "
                f"(Age: {best_candidate.age_seconds(self._clock()):.0f}s)"
            )
            self._store(base, best_name, best_candidate)
            return best_candidate

        logger.error(f"All providers failed for {base}: {errors}")
        raise AllProvidersExhaustedError(base, errors)

    async def _try_provider(
        self, record: ProviderRecord, base: str, errors: list[str]
    ) -> RateSnapshot | None:
        try:
            snapshot = await record.provider.fetch_rates(base)
        except ProviderError as e:
            errors.append(str(e))
            logger.warning(f"Provider {record.name} failed: {e}")
            self.registry.record_outcome(record.name, False, self._now())
            return None

        if snapshot is not None:
            self.registry.record_outcome(record.name, True, self._now())
        return snapshot

    def _store(self, base: str, source: str, snapshot: RateSnapshot) -> None:
        self.cache.put(self.cache.make_key(base), snapshot)
        self.cache.put(self.cache.make_key(base, source), snapshot)

    def _now(self) -> datetime:
        return datetime.fromtimestamp(self._clock(), tz=UTC)

    async def close(self) -> None:
        await self.registry.close()
