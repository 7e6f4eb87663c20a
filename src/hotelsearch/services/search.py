"""Search business logic for the HTTP layer.

Creating a search only records it; matching happens in the search job.
Reading a search returns its cached payload once the job has published,
and follows duplicate redirects for searches the job folded into an
identical earlier one.
"""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from hotelsearch.cache import SearchCache, search_cache_key
from hotelsearch.exceptions import DomainError, NotFoundError, SearchExpiredError
from hotelsearch.logging import get_logger
from hotelsearch.models import Search, SearchStatus
from hotelsearch.repositories.location import get_location
from hotelsearch.repositories.search import get_search, save_search
from hotelsearch.services.results import HotelResult, SearchSnapshot

logger = get_logger(__name__)

PUBLISHED_STATUSES = frozenset({SearchStatus.COMPLETED, SearchStatus.NO_RESULTS})


@dataclass
class CreatedSearch:
    search_id: str
    cached: bool


@dataclass
class SearchDetail:
    search: SearchSnapshot
    hotels: tuple[HotelResult, ...] = field(default_factory=tuple)


async def create_search(
    db: AsyncSession,
    cache: SearchCache,
    *,
    user_id: str,
    location_id: str,
    starts_on: date,
    ends_on: date,
    capacity: int,
) -> CreatedSearch:
    """Record a pending search, or return the cached one for identical parameters.

    ``cached=True`` means no job needs to run.
    """
    if ends_on <= starts_on:
        raise DomainError("ends_on must be after starts_on")
    if capacity < 1:
        raise DomainError("capacity must be at least 1")
    if await get_location(db, location_id) is None:
        raise NotFoundError("Location", location_id)

    cached = cache.get(search_cache_key(user_id, location_id, starts_on, ends_on, capacity))
    if cached is not None:
        logger.info("search_cache_hit", search_id=cached.search.id)
        return CreatedSearch(search_id=cached.search.id, cached=True)

    search = await save_search(
        db,
        Search(
            user_id=user_id,
            location_id=location_id,
            starts_on=starts_on,
            ends_on=ends_on,
            capacity=capacity,
            status=SearchStatus.PENDING,
            results=0,
        ),
    )
    logger.info("search_created", search_id=search.id, location_id=location_id)
    return CreatedSearch(search_id=search.id, cached=False)


async def get_search_detail(db: AsyncSession, cache: SearchCache, search_id: str) -> SearchDetail:
    """Return the search and, once published, its ranked hotels.

    - pending / started / failed: the search with no hotels
    - completed / no_results: the cached payload; SearchExpiredError once it expired
    - completed / no_results, entry not written yet: reported as started, no hotels
    - deleted as a duplicate: the payload of the search it was folded into
    """
    search = await get_search(db, search_id)

    if search is None:
        redirected = cache.resolve(search_id)
        if redirected is None:
            raise NotFoundError("Search", search_id)
        return SearchDetail(search=redirected.search, hotels=redirected.hotels)

    if search.status not in PUBLISHED_STATUSES:
        return SearchDetail(search=SearchSnapshot.from_model(search))

    cached = cache.get(
        search_cache_key(search.user_id, search.location_id, search.starts_on, search.ends_on, search.capacity)
    )
    if cached is None:
        if _may_still_be_publishing(search, cache.default_ttl_seconds):
            # Status is committed before the cache entry is written.
            snapshot = SearchSnapshot.from_model(search)
            return SearchDetail(search=replace(snapshot, status=SearchStatus.STARTED, results=0))
        raise SearchExpiredError(search_id)
    return SearchDetail(search=cached.search, hotels=cached.hotels)


def _may_still_be_publishing(search: Search, ttl_seconds: int) -> bool:
    """True while an entry written when ``search`` was published could still be live."""
    published_at = search.updated_at
    if published_at.tzinfo is None:
        # SQLite hands back naive UTC timestamps.
        published_at = published_at.replace(tzinfo=UTC)
    return datetime.now(UTC) < published_at + timedelta(seconds=ttl_seconds)
