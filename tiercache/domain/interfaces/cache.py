"""Interface for caching mechanisms.

Defines the contract for storing, retrieving, and managing cached data
with per-entry TTLs and lazy expiry.
"""

import abc
from typing import Any, Optional

from ..models.cache import DEFAULT_TTL_SECONDS, CacheStatsSnapshot
from ..models.common import CacheKey


class CacheStore(abc.ABC):
    """Abstract Base Class for cache store operations."""

    @abc.abstractmethod
    def get(self, key: CacheKey) -> Optional[Any]:
        """Retrieves an item from the cache.

        An expired entry is removed and reported as a miss.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached item if found and not expired, otherwise None.
        """
        pass

    @abc.abstractmethod
    def set(
        self,
        key: CacheKey,
        value: Any,
        ttl_seconds: Optional[float] = DEFAULT_TTL_SECONDS,
    ) -> None:
        """Stores an item, overwriting any existing entry under the key.

        Args:
            key: The cache key to store the item under.
            value: The item to store.
            ttl_seconds: Time-to-live in seconds. 0 expires immediately,
                None never expires.
        """
        pass

    @abc.abstractmethod
    def delete(self, key: CacheKey) -> None:
        """Deletes an item from the cache. Missing keys are ignored.

        Args:
            key: The cache key to delete.
        """
        pass

    @abc.abstractmethod
    def clear(self) -> None:
        """Removes all entries. Statistics are kept."""
        pass

    @abc.abstractmethod
    def get_stats(self) -> CacheStatsSnapshot:
        """Returns hits, misses, sets, formatted hit rate and physical size."""
        pass

    # Optional extensions with no-op defaults so simple stores stay small.
    def purge_expired(self) -> int:
        """Removes every expired entry and returns how many were removed."""
        return 0

    def reset_stats(self) -> None:
        """Zeroes the statistics counters."""
        pass
