"""Cache entry, statistics and tier models."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, TypedDict

from tiercache.domain.models.common import Timestamp, TtlSeconds

DEFAULT_TTL_SECONDS = TtlSeconds(300)  # 5 minutes, the profile tier


class CacheTier(str, Enum):
    """TTL classes grouping entries by how volatile their source data is."""

    PROFILE = "profile"        # Upstream profile facts change often
    INSIGHTS = "insights"      # AI-generated text is expensive to regenerate
    COMPARISON = "comparison"  # Head-to-head verdicts


# Default TTL per tier. Callers enforce these; the store itself does not.
TIER_DEFAULT_TTLS = {
    CacheTier.PROFILE: TtlSeconds(5 * 60),
    CacheTier.INSIGHTS: TtlSeconds(24 * 60 * 60),
    CacheTier.COMPARISON: TtlSeconds(24 * 60 * 60),
}


@dataclass
class CacheEntry:
    """Internal representation of a cache entry with expiry."""
    value: Any
    created_at: Timestamp
    expires_at: Optional[Timestamp] = None  # None means the entry never expires

    def is_expired(self, now: float) -> bool:
        """Expired iff an expiry is set and now >= expires_at."""
        return self.expires_at is not None and now >= self.expires_at


@dataclass
class CacheStats:
    """Mutable counters owned by a cache store."""
    hits: int = 0
    misses: int = 0
    sets: int = 0
    expirations: int = 0  # Entries removed because they were found expired

    @property
    def lookups(self) -> int:
        return self.hits + self.misses

    def hit_rate(self) -> float:
        """Hit rate as a percentage, 0.0 before any lookup."""
        if self.lookups == 0:
            return 0.0
        return self.hits / self.lookups * 100


class CacheStatsSnapshot(TypedDict):
    """Point-in-time statistics as reported by CacheStore.get_stats()."""
    hits: int
    misses: int
    sets: int
    hit_rate: str  # e.g. "50.00%"
    size: int


def format_hit_rate(rate: float) -> str:
    """Formats a percentage with two decimals, e.g. 50.0 -> '50.00%'."""
    return f"{rate:.2f}%"
