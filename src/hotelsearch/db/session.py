from collections.abc import AsyncGenerator

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from hotelsearch.config import settings

# Naming conventions for database constraints.
# Alembic needs deterministic names to autogenerate drops and alters of the
# check constraints on offers, searches and bookings across migrations.
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",  # Index
    "uq": "uq_%(table_name)s_%(column_0_name)s",  # Unique constraint
    "ck": "ck_%(table_name)s_%(constraint_name)s",  # Check constraint
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",  # Foreign key
    "pk": "pk_%(table_name)s",  # Primary key
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    Every table in hotelsearch.models inherits from this class, so
    Base.metadata is the single registry Alembic and the test suite use to
    create or diff the schema.

    The naming_convention gives every constraint a predictable name, which
    migrations rely on when they drop or rename one.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# Async engine with connection pooling.
# Request handlers and background search jobs draw connections from the same pool.
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,  # Connections kept open between requests
    max_overflow=settings.db_max_overflow,  # Extra connections during bursts of search jobs
    pool_timeout=settings.db_pool_timeout,  # Seconds to wait for a free connection
    pool_recycle=settings.db_pool_recycle,  # Replace connections older than this
    pool_pre_ping=settings.db_pool_pre_ping,  # Check the connection is alive on checkout
    echo=settings.db_echo,  # SQL logging
    # Passed through to asyncpg.connect()
    connect_args={"command_timeout": settings.db_statement_timeout},  # Abort slow queries
)

# Session factory for requests and search jobs.
# expire_on_commit=False keeps objects readable after commit without implicit
# (sync) refresh I/O. Search jobs rely on this to log and cache after publishing.
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides a database session per request.

    Commits on success, rolls back on exception. Services and repositories
    never commit; routers only do so when a background job must see the row
    before the response is sent.

    Usage in endpoints:
        @router.get("/search/{search_id}")
        async def get_search(search_id: str, db: DB, cache: Cache) -> SearchDetailResponse:
            ...
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def shutdown() -> None:
    """Dispose the engine's pooled connections on application shutdown.

    Called from the FastAPI lifespan in main.py so the process exits without
    leaving connections open on the server.
    """
    await engine.dispose()
