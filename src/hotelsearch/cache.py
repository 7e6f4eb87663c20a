"""In-process cache of published search results.

Entries are immutable CachedResult payloads keyed by a content hash of the
search parameters (never the search id), so identical queries by the same
user share one entry until it expires. Backed by cachetools' TLRUCache so
each entry carries its own expiry.
"""

import hashlib
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from cachetools import TLRUCache

from hotelsearch.config import settings
from hotelsearch.services.results import CachedResult

_ALIAS_PREFIX = "alias:"


def search_cache_key(
    user_id: str,
    location_id: str,
    starts_on: date,
    ends_on: date,
    capacity: int,
) -> str:
    """SHA-256 hex digest of the search parameters."""
    data = "|".join([user_id, location_id, starts_on.isoformat(), ends_on.isoformat(), str(capacity)])
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


@dataclass(frozen=True, slots=True)
class _Entry:
    value: object
    expires_at: float


def _time_to_use(_key: str, entry: _Entry, _now: float) -> float:
    return entry.expires_at


class SearchCache:
    """has / get / put over a TLRU cache, plus id aliases for deduplicated searches."""

    def __init__(
        self,
        maxsize: int,
        default_ttl_seconds: int,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl_seconds = default_ttl_seconds
        self._timer = timer
        self._entries: TLRUCache[str, _Entry] = TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=timer)

    def has(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> CachedResult | None:
        entry = self._entries.get(key)
        if entry is None or not isinstance(entry.value, CachedResult):
            return None
        return entry.value

    def put(self, key: str, value: CachedResult, ttl_seconds: int | None = None) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._entries[key] = _Entry(value=value, expires_at=self._timer() + ttl)

    def alias(self, search_id: str, key: str) -> None:
        """Point ``search_id`` at the entry under ``key`` for the rest of its lifetime."""
        target = self._entries.get(key)
        if target is None:
            return
        self._entries[_ALIAS_PREFIX + search_id] = _Entry(value=key, expires_at=target.expires_at)

    def resolve(self, search_id: str) -> CachedResult | None:
        """Return the cached payload a deduplicated search id was redirected to."""
        entry = self._entries.get(_ALIAS_PREFIX + search_id)
        if entry is None:
            return None
        return self.get(str(entry.value))

    def clear(self) -> None:
        self._entries.clear()


search_cache = SearchCache(
    maxsize=settings.search_cache_maxsize,
    default_ttl_seconds=settings.search_cache_ttl_seconds,
)


def get_search_cache() -> SearchCache:
    """FastAPI dependency returning the process-wide search cache."""
    return search_cache
