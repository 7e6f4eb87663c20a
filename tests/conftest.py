import os
from collections.abc import AsyncIterator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from hotelsearch.cache import SearchCache, get_search_cache
from hotelsearch.db.session import Base, get_db
from hotelsearch.jobs import SearchJobRunner, get_job_runner
from hotelsearch.main import app

# Fixtures in tests/seeds.py are only visible to pytest when registered here.
pytest_plugins = ["tests.seeds"]

# In-memory SQLite by default; point at Postgres with e.g.
# TEST_DATABASE_URL=postgresql+asyncpg://hotelsearch@localhost:5432/hotelsearch_test
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


async def _no_sleep(_seconds: float) -> None:
    return None


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Create tables on a fresh engine, drop them after the test."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory database.
        test_engine = create_async_engine(
            TEST_DATABASE_URL, poolclass=StaticPool, connect_args={"check_same_thread": False}
        )
    else:
        test_engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def cache() -> SearchCache:
    return SearchCache(maxsize=1000, default_ttl_seconds=3600)


@pytest_asyncio.fixture
async def runner(session_factory: async_sessionmaker[AsyncSession], cache: SearchCache) -> SearchJobRunner:
    """Job runner on the test database; retries happen without waiting."""
    return SearchJobRunner(
        session_factory,
        cache,
        ttl_seconds=3600,
        max_retries=1,
        retry_delay_seconds=30,
        sleep=_no_sleep,
    )


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    cache: SearchCache,
    runner: SearchJobRunner,
) -> AsyncIterator[AsyncClient]:
    """HTTP client wired to the test database, cache and job runner.

    Background search jobs finish before the response reaches the client.
    """

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_search_cache] = lambda: cache
    app.dependency_overrides[get_job_runner] = lambda: runner

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
