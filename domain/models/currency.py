from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping

# Labels compare whole elapsed minutes
FRESH_MAX_AGE_MINUTES = 5
RECENT_MAX_AGE_MINUTES = 60


class QuotaTier(str, Enum):
    HIGH = "high"
    LOW = "low"


class ProviderStatus(str, Enum):
    UNKNOWN = "unknown"
    ACTIVE = "active"
    DOWN = "down"


class Freshness(str, Enum):
    FRESH = "fresh"
    RECENT = "recent"
    STALE = "stale"


@dataclass(frozen=True)
class RateSnapshot:
    """One provider's full rate set for a base currency."""

    rates: Mapping[str, float]
    base: str
    source: str
    provider_timestamp: int  # epoch seconds reported by the provider
    retrieved_at: datetime

    def __post_init__(self):
        if not self.rates:
            raise ValueError(f"Snapshot from {self.source} has no rates")
        for code, rate in self.rates.items():
            if rate <= 0:
                raise ValueError(f"Rate for {code} must be positive, got {rate}")
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    def age_seconds(self, now: float) -> float:
        return now - self.provider_timestamp

    def freshness(self, now: float) -> Freshness:
        minutes = self.age_seconds(now) // 60
        if minutes <= FRESH_MAX_AGE_MINUTES:
            return Freshness.FRESH
        if minutes <= RECENT_MAX_AGE_MINUTES:
            return Freshness.RECENT
        return Freshness.STALE


@dataclass(frozen=True)
class ProviderStatusView:
    """Read-only projection of a provider's health, safe to hand out."""

    name: str
    status: ProviderStatus
    last_success_at: datetime | None = None
    last_failure_at: datetime | None = None
