"""Concrete implementation of the in-memory Cache Store.

Keeps entries in a dict keyed by string, stamps them with a TTL from the
injected clock and expires them lazily on read. Hit, miss and set counters
are kept alongside the entries; one lock guards both.
"""

import logging
import math
import threading
from typing import Any, Dict, Optional

from tiercache.domain.interfaces.cache import CacheStore
from tiercache.domain.interfaces.clock import Clock
from tiercache.domain.models.cache import (
    DEFAULT_TTL_SECONDS,
    CacheEntry,
    CacheStats,
    CacheStatsSnapshot,
    format_hit_rate,
)
from tiercache.domain.models.common import CacheKey, Timestamp
from tiercache.domain.models.errors import InvalidArgumentError, InvalidKeyError
from tiercache.infrastructure.clock.system_clock import SystemClock, verify_clock

logger = logging.getLogger(__name__)


def _validate_key(key: Any) -> None:
    if not isinstance(key, str):
        raise InvalidKeyError(f"Cache key must be a string, got {type(key).__name__}")
    if not key:
        raise InvalidKeyError("Cache key must not be empty")


class InMemoryCacheStore(CacheStore):
    """Process-local TTL cache with lazy expiry and hit/miss accounting."""

    def __init__(self, clock: Optional[Clock] = None):
        """Initializes the store.

        Args:
            clock: Time source. Defaults to SystemClock.

        Raises:
            ClockUnavailableError: If the clock cannot produce a valid reading.
        """
        self._clock = clock or SystemClock()
        verify_clock(self._clock)
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._stats = CacheStats()
        self._lock = threading.RLock()
        logger.info(f"InMemoryCacheStore initialized with clock: {self._clock.__class__.__name__}")

    def _now(self) -> Timestamp:
        return self._clock.now()

    def _remove_if_same(self, key: CacheKey, entry: CacheEntry) -> bool:
        """Removes key only if it still maps to this exact entry."""
        if self._entries.get(key) is entry:
            del self._entries[key]
            return True
        return False

    # --- CacheStore Interface Implementation ---

    def get(self, key: CacheKey) -> Optional[Any]:
        _validate_key(key)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats.misses += 1
                logger.debug(f"Cache MISS: {key}")
                return None

            if entry.is_expired(self._now()):
                if self._remove_if_same(key, entry):
                    self._stats.expirations += 1
                self._stats.misses += 1
                logger.debug(f"Cache EXPIRED: {key}")
                return None

            self._stats.hits += 1
            logger.debug(f"Cache HIT: {key}")
            return entry.value

    def set(
        self,
        key: CacheKey,
        value: Any,
        ttl_seconds: Optional[float] = DEFAULT_TTL_SECONDS,
    ) -> None:
        _validate_key(key)
        # Only None means "never expires"; inf and nan are rejected.
        if ttl_seconds is not None and (not math.isfinite(ttl_seconds) or ttl_seconds < 0):
            raise InvalidArgumentError(f"ttl_seconds must be a finite non-negative number, got {ttl_seconds}")

        with self._lock:
            now = self._now()
            expires_at = Timestamp(now + ttl_seconds) if ttl_seconds is not None else None
            self._entries[key] = CacheEntry(value=value, created_at=now, expires_at=expires_at)
            self._stats.sets += 1
        logger.debug(f"Cache SET: {key} (TTL: {ttl_seconds}s)")

    def delete(self, key: CacheKey) -> None:
        _validate_key(key)
        with self._lock:
            self._entries.pop(key, None)
        logger.debug(f"Cache DELETE: {key}")

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"Cache CLEAR: removed {count} entries")

    def get_stats(self) -> CacheStatsSnapshot:
        with self._lock:
            return CacheStatsSnapshot(
                hits=self._stats.hits,
                misses=self._stats.misses,
                sets=self._stats.sets,
                hit_rate=format_hit_rate(self._stats.hit_rate()),
                size=len(self._entries),
            )

    # --- Extensions ---

    def purge_expired(self) -> int:
        with self._lock:
            now = self._now()
            expired = [(k, e) for k, e in self._entries.items() if e.is_expired(now)]
            removed = sum(1 for k, e in expired if self._remove_if_same(k, e))
            self._stats.expirations += removed
        if removed:
            logger.debug(f"Purged {removed} expired cache entries")
        return removed

    def reset_stats(self) -> None:
        with self._lock:
            self._stats = CacheStats()
        logger.info("Cache statistics reset")

    @property
    def expirations(self) -> int:
        """Number of entries removed because they were found expired."""
        with self._lock:
            return self._stats.expirations

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # Does not touch the hit/miss counters.
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
            return entry is not None and not entry.is_expired(self._now())
