"""Background execution of search jobs.

The runner is the job scheduler the search job is written against: it runs
one attempt, retries a failed attempt after a fixed delay, and calls the
job's ``mark_failed`` once retries are exhausted. Routers hand
``SearchJobRunner.dispatch`` to FastAPI's BackgroundTasks.
"""

import asyncio
from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hotelsearch.cache import SearchCache, search_cache
from hotelsearch.config import settings
from hotelsearch.db.session import async_session
from hotelsearch.logging import get_logger
from hotelsearch.repositories.catalog import SqlCatalogReader
from hotelsearch.services.search_job import (
    JobFailure,
    JobOutcome,
    ReaderFactory,
    SearchJob,
    SearchJobResult,
)

logger = get_logger(__name__)


class SearchJobRunner:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: SearchCache,
        *,
        ttl_seconds: int,
        max_retries: int = 1,
        retry_delay_seconds: float = 30.0,
        timeout_seconds: float | None = None,
        reader_factory: ReaderFactory = SqlCatalogReader,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.session_factory = session_factory
        self.cache = cache
        self.ttl_seconds = ttl_seconds
        self.max_retries = max_retries
        self.retry_delay_seconds = retry_delay_seconds
        self.timeout_seconds = timeout_seconds
        self.reader_factory = reader_factory
        self._sleep = sleep

    def job_for(self, search_id: str) -> SearchJob:
        return SearchJob(
            search_id,
            session_factory=self.session_factory,
            cache=self.cache,
            ttl_seconds=self.ttl_seconds,
            reader_factory=self.reader_factory,
        )

    async def dispatch(self, search_id: str) -> SearchJobResult:
        """Run the job for ``search_id`` to an outcome or a recorded failure."""
        job = self.job_for(search_id)
        attempt = 1

        while True:
            result = await self._attempt(job, attempt)
            if isinstance(result, JobOutcome):
                return result
            if attempt > self.max_retries:
                await job.mark_failed(result)
                return result

            logger.warning(
                "search_job_retry_scheduled",
                search_id=search_id,
                attempt=attempt,
                delay_seconds=self.retry_delay_seconds,
            )
            await self._sleep(self.retry_delay_seconds)
            attempt += 1

    async def _attempt(self, job: SearchJob, attempt: int) -> SearchJobResult:
        if self.timeout_seconds is None:
            return await job.run(attempt)
        try:
            async with asyncio.timeout(self.timeout_seconds):
                return await job.run(attempt)
        except TimeoutError:
            logger.warning("search_job_timed_out", search_id=job.search_id, attempt=attempt)
            return JobFailure(
                search_id=job.search_id,
                attempt=attempt,
                error=f"timed out after {self.timeout_seconds}s",
            )


job_runner = SearchJobRunner(
    async_session,
    search_cache,
    ttl_seconds=settings.search_cache_ttl_seconds,
    max_retries=settings.search_job_max_retries,
    retry_delay_seconds=settings.search_job_retry_delay_seconds,
    timeout_seconds=settings.search_job_timeout_seconds,
)


def get_job_runner() -> SearchJobRunner:
    """FastAPI dependency returning the process-wide job runner."""
    return job_runner
