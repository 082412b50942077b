from unittest.mock import MagicMock

import pytest

from tiercache.core.services.cached_lookup_service import CachedLookupService
from tiercache.infrastructure.config.settings import CacheSettings


@pytest.fixture
def lookup_service(store):
    return CachedLookupService(cache_store=store, settings=CacheSettings())


def test_get_or_compute_populates_on_miss_and_serves_hit(lookup_service: CachedLookupService, store):
    compute = MagicMock(return_value={"followers": 10})

    first = lookup_service.get_or_compute("github:octo:profile", compute, 300)
    second = lookup_service.get_or_compute("github:octo:profile", compute, 300)

    assert first == second == {"followers": 10}
    compute.assert_called_once_with()
    stats = store.get_stats()
    assert (stats["hits"], stats["misses"], stats["sets"]) == (1, 1, 1)


def test_get_or_compute_does_not_cache_none(lookup_service: CachedLookupService, store):
    compute = MagicMock(return_value=None)
    assert lookup_service.get_or_compute("k", compute) is None
    assert store.get_stats()["sets"] == 0


def test_get_or_compute_propagates_errors_without_caching(lookup_service: CachedLookupService, store):
    compute = MagicMock(side_effect=RuntimeError("upstream rate limited"))
    with pytest.raises(RuntimeError):
        lookup_service.get_or_compute("k", compute)
    assert store.get_stats()["size"] == 0


def test_profile_uses_short_tier(lookup_service: CachedLookupService, store, clock):
    fetch = MagicMock(side_effect=lambda name: {"login": name, "calls": fetch.call_count})

    lookup_service.profile("Octo", fetch)
    clock.advance(299)
    lookup_service.profile("octo", fetch)
    assert fetch.call_count == 1

    clock.advance(1)
    lookup_service.profile("octo", fetch)
    assert fetch.call_count == 2
    assert "github:octo:profile" in store


def test_insights_uses_long_tier(lookup_service: CachedLookupService, clock):
    generate = MagicMock(return_value="Prolific Rust contributor")

    lookup_service.insights("octo", generate)
    clock.advance(23 * 60 * 60)
    assert lookup_service.insights("OCTO", generate) == "Prolific Rust contributor"
    generate.assert_called_once_with("octo")


def test_comparison_shares_entry_across_orderings(lookup_service: CachedLookupService):
    judge = MagicMock(return_value="alice wins")

    assert lookup_service.comparison("alice", "bob", judge) == "alice wins"
    assert lookup_service.comparison("Bob", "ALICE", judge) == "alice wins"
    judge.assert_called_once_with("alice", "bob")


def test_invalidate_profile_forces_refetch(lookup_service: CachedLookupService):
    fetch = MagicMock(return_value={"followers": 1})
    lookup_service.profile("octo", fetch)
    lookup_service.invalidate_profile("OCTO")
    lookup_service.profile("octo", fetch)
    assert fetch.call_count == 2


def test_configured_tier_ttl_is_used(store, clock):
    service = CachedLookupService(store, CacheSettings(profile_ttl_seconds=10))
    fetch = MagicMock(return_value="p")
    service.profile("octo", fetch)
    clock.advance(10)
    service.profile("octo", fetch)
    assert fetch.call_count == 2
