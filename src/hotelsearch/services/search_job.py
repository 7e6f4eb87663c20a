"""Search job: matches, ranks and publishes the results of one search.

Status transitions are ``pending → started → completed | no_results | failed``.
A job owns its Search row; nothing else writes to it while the job runs.

Publishing commits the final status first and writes the cache entry once
the commit returns. Other requests can read the committed row before the
entry lands, so readers treat a finished search whose entry is missing, but
cannot have expired yet, as still publishing (see services.search).

A duplicate stores its redirect alias before its row is deleted.

``run()`` reports errors as a JobFailure instead of raising. Retrying and
calling ``mark_failed`` once retries are exhausted is the runner's job
(see hotelsearch.jobs).
"""

import enum
from collections.abc import Callable
from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hotelsearch.cache import SearchCache, search_cache_key
from hotelsearch.exceptions import NotFoundError
from hotelsearch.logging import get_logger
from hotelsearch.models import Search, SearchStatus
from hotelsearch.repositories.catalog import SqlCatalogReader
from hotelsearch.repositories.search import delete_search, get_search
from hotelsearch.services.assembly import CatalogReader, assemble
from hotelsearch.services.ranking import rank_hotels
from hotelsearch.services.results import CachedResult, HotelResult, SearchSnapshot

logger = get_logger(__name__)

ReaderFactory = Callable[[AsyncSession], CatalogReader]


class OutcomeKind(enum.StrEnum):
    COMPLETED = "completed"
    NO_RESULTS = "no_results"
    DUPLICATE = "duplicate"


@dataclass(frozen=True, slots=True)
class JobOutcome:
    """A finished job.

    ``canonical_search_id`` is the search whose payload is cached under
    ``cache_key``; for duplicates it differs from ``search_id``.
    """

    search_id: str
    kind: OutcomeKind
    results: int
    cache_key: str
    canonical_search_id: str


@dataclass(frozen=True, slots=True)
class JobFailure:
    search_id: str
    attempt: int
    error: str


SearchJobResult = JobOutcome | JobFailure


class SearchJob:
    def __init__(
        self,
        search_id: str,
        *,
        session_factory: async_sessionmaker[AsyncSession],
        cache: SearchCache,
        ttl_seconds: int,
        reader_factory: ReaderFactory = SqlCatalogReader,
    ) -> None:
        self.search_id = search_id
        self.session_factory = session_factory
        self.cache = cache
        self.ttl_seconds = ttl_seconds
        self.reader_factory = reader_factory

    async def run(self, attempt: int = 1) -> SearchJobResult:
        with structlog.contextvars.bound_contextvars(search_id=self.search_id, attempt=attempt):
            try:
                async with self.session_factory() as db:
                    return await self._execute(db)
            except Exception as exc:
                logger.exception("search_job_attempt_failed")
                return JobFailure(search_id=self.search_id, attempt=attempt, error=repr(exc))

    async def mark_failed(self, failure: JobFailure) -> None:
        """Record a permanent failure. No cache entry is written."""
        with structlog.contextvars.bound_contextvars(search_id=self.search_id, attempt=failure.attempt):
            async with self.session_factory() as db:
                search = await get_search(db, self.search_id)
                if search is None:
                    logger.warning("search_job_failed_search_missing", error=failure.error)
                    return
                search.status = SearchStatus.FAILED
                await db.commit()
            logger.error("search_job_failed", error=failure.error)

    async def _execute(self, db: AsyncSession) -> JobOutcome:
        search = await get_search(db, self.search_id)
        if search is None:
            raise NotFoundError("Search", self.search_id)

        key = search_cache_key(
            search.user_id, search.location_id, search.starts_on, search.ends_on, search.capacity
        )

        cached = self.cache.get(key)
        if cached is not None:
            return await self._defer_to_cached(db, search, key, cached)

        search.status = SearchStatus.STARTED
        await db.commit()
        logger.info("search_job_started", location_id=search.location_id, capacity=search.capacity)

        hotels = await assemble(
            self.reader_factory(db),
            search.location_id,
            search.starts_on,
            search.ends_on,
            search.capacity,
        )
        ranked = rank_hotels(hotels)

        # An identical search may have published while this one was matching.
        cached = self.cache.get(key)
        if cached is not None:
            return await self._defer_to_cached(db, search, key, cached)

        return await self._publish(db, search, key, ranked)

    async def _publish(
        self,
        db: AsyncSession,
        search: Search,
        key: str,
        hotels: list[HotelResult],
    ) -> JobOutcome:
        search.status = SearchStatus.COMPLETED if hotels else SearchStatus.NO_RESULTS
        search.results = len(hotels)
        await db.commit()
        self.cache.put(key, CachedResult(search=SearchSnapshot.from_model(search), hotels=tuple(hotels)), self.ttl_seconds)

        logger.info("search_job_completed", status=str(search.status), results=search.results)
        return JobOutcome(
            search_id=search.id,
            kind=OutcomeKind.COMPLETED if hotels else OutcomeKind.NO_RESULTS,
            results=search.results,
            cache_key=key,
            canonical_search_id=search.id,
        )

    async def _defer_to_cached(
        self,
        db: AsyncSession,
        search: Search,
        key: str,
        cached: CachedResult,
    ) -> JobOutcome:
        if cached.search.id == search.id:
            # Re-dispatched after it already published; nothing to redo.
            return JobOutcome(
                search_id=search.id,
                kind=OutcomeKind(cached.search.status.value),
                results=cached.search.results,
                cache_key=key,
                canonical_search_id=search.id,
            )

        # Redirect first so a reader never finds the row gone without its alias.
        self.cache.alias(search.id, key)
        await delete_search(db, search.id)
        await db.commit()

        logger.info("search_job_duplicate", canonical_search_id=cached.search.id)
        return JobOutcome(
            search_id=search.id,
            kind=OutcomeKind.DUPLICATE,
            results=cached.search.results,
            cache_key=key,
            canonical_search_id=cached.search.id,
        )
