import logging
import time
from collections.abc import Callable

from domain.models.currency import RateSnapshot

logger = logging.getLogger(__name__)


class SnapshotCache:
    """Process-local TTL store for rate snapshots.

    Expired entries are dropped on the lookup that finds them; there is no
    background sweeper. Every write is a single dict assignment, so writes to
    one key are last-write-wins under concurrent requests.
    """

    def __init__(self, default_ttl: float = 3600, clock: Callable[[], float] = time.monotonic):
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, tuple[RateSnapshot, float]] = {}

    @staticmethod
    def make_key(base: str, source: str | None = None) -> str:
        return f"{base}_{source}" if source else base

    def get(self, key: str) -> RateSnapshot | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        snapshot, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            logger.debug(f"Cache entry {key} expired")
            return None

        return snapshot

    def put(self, key: str, snapshot: RateSnapshot, ttl: float | None = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        self._entries[key] = (snapshot, self._clock() + ttl)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
