"""Tests for the search results cache."""

from datetime import date

from hotelsearch.cache import SearchCache
from hotelsearch.models import SearchStatus
from hotelsearch.services.results import CachedResult, SearchSnapshot
from tests.factories import hotel_result


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _payload(search_id: str = "s1") -> CachedResult:
    snapshot = SearchSnapshot(
        id=search_id,
        user_id="u",
        location_id="loc",
        starts_on=date(2025, 6, 1),
        ends_on=date(2025, 6, 3),
        capacity=2,
        status=SearchStatus.COMPLETED,
        results=1,
    )
    return CachedResult(search=snapshot, hotels=(hotel_result("h1"),))


def test_put_then_get() -> None:
    cache = SearchCache(maxsize=10, default_ttl_seconds=60)
    payload = _payload()

    cache.put("k", payload)

    assert cache.has("k")
    assert cache.get("k") is payload
    assert cache.get("missing") is None
    assert not cache.has("missing")


def test_entries_expire_after_ttl() -> None:
    clock = FakeClock()
    cache = SearchCache(maxsize=10, default_ttl_seconds=3600, timer=clock)
    cache.put("default", _payload())
    cache.put("short", _payload(), ttl_seconds=10)

    clock.now += 11
    assert not cache.has("short")
    assert cache.has("default")

    clock.now += 3600
    assert cache.get("default") is None


def test_alias_resolves_to_target_and_expires_with_it() -> None:
    clock = FakeClock()
    cache = SearchCache(maxsize=10, default_ttl_seconds=100, timer=clock)
    payload = _payload("winner")
    cache.put("k", payload)

    clock.now += 50
    cache.alias("loser", "k")

    resolved = cache.resolve("loser")
    assert resolved is not None
    assert resolved.search.id == "winner"

    clock.now += 51
    assert cache.resolve("loser") is None


def test_alias_to_missing_entry_is_ignored() -> None:
    cache = SearchCache(maxsize=10, default_ttl_seconds=100)

    cache.alias("loser", "nothing-here")

    assert cache.resolve("loser") is None


def test_alias_keys_are_not_results() -> None:
    cache = SearchCache(maxsize=10, default_ttl_seconds=100)
    cache.put("k", _payload())
    cache.alias("s2", "k")

    assert cache.get("alias:s2") is None
