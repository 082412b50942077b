"""Core service implementing the cache-aside pattern over a CacheStore.

Callers hand in the expensive operation (an upstream fetch, an AI call) as
a callable; the service derives the key, serves hits from the store and
populates it on misses with the TTL of the matching tier.
"""

import logging
from typing import Any, Callable, Optional, TypeVar

from tiercache.domain import keys
from tiercache.domain.interfaces.cache import CacheStore
from tiercache.domain.models.cache import CacheTier
from tiercache.domain.models.common import CacheKey
from tiercache.infrastructure.config.settings import CacheSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CachedLookupService:
    """Serves derived results from the cache, computing them on a miss."""

    def __init__(self, cache_store: CacheStore, settings: Optional[CacheSettings] = None):
        self.cache_store = cache_store
        self.settings = settings or CacheSettings()

    def get_or_compute(
        self,
        key: CacheKey,
        compute: Callable[[], T],
        ttl_seconds: Optional[float] = None,
    ) -> T:
        """Returns the cached value for key, or computes, stores and returns it.

        A None result is returned but not stored, since None reads as a miss.
        Exceptions raised by compute propagate and nothing is cached.

        Args:
            key: Cache key, normally built with tiercache.domain.keys.
            compute: Zero-argument callable producing the value on a miss.
            ttl_seconds: TTL for the new entry (settings default if None).
        """
        cached = self.cache_store.get(key)
        if cached is not None:
            return cached

        logger.debug(f"Computing value for cache miss: {key}")
        value = compute()
        if value is None:
            logger.debug(f"Not caching None result for key: {key}")
            return value

        ttl = ttl_seconds if ttl_seconds is not None else self.settings.default_ttl_seconds
        self.cache_store.set(key, value, ttl)
        return value

    def profile(self, identifier: str, fetch: Callable[[str], Any], source: str = keys.DEFAULT_PROFILE_SOURCE) -> Any:
        """Profile tier: short TTL, upstream data changes often."""
        return self.get_or_compute(
            keys.profile_key(identifier, source),
            lambda: fetch(identifier),
            self.settings.ttl_for(CacheTier.PROFILE),
        )

    def insights(self, identifier: str, generate: Callable[[str], Any]) -> Any:
        """Insights tier: long TTL, generation is slow and rate-limited."""
        return self.get_or_compute(
            keys.insights_key(identifier),
            lambda: generate(identifier),
            self.settings.ttl_for(CacheTier.INSIGHTS),
        )

    def comparison(self, identifier_a: str, identifier_b: str, judge: Callable[[str, str], Any]) -> Any:
        """Comparison tier: one entry serves both orderings of the pair.

        judge receives the identifiers in the caller's order.
        """
        return self.get_or_compute(
            keys.comparison_key(identifier_a, identifier_b),
            lambda: judge(identifier_a, identifier_b),
            self.settings.ttl_for(CacheTier.COMPARISON),
        )

    def invalidate_profile(self, identifier: str, source: str = keys.DEFAULT_PROFILE_SOURCE) -> None:
        """Drops the cached profile so the next lookup refetches it."""
        key = keys.profile_key(identifier, source)
        self.cache_store.delete(key)
        logger.info(f"Invalidated profile cache entry: {key}")
