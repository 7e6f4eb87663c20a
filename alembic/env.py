"""Alembic environment for the async SQLAlchemy engine.

Runs for every alembic command. It points Alembic at the same DATABASE_URL
the service uses and at hotelsearch's model metadata for --autogenerate.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

# Model metadata and the database URL come from the application package
import hotelsearch.models  # noqa: F401 - registers models with Base.metadata
from hotelsearch.config import settings
from hotelsearch.db.session import Base

# Access to the values in alembic.ini
config = context.config

# Migrations and the running service must target the same database,
# so the URL in alembic.ini is replaced by the one from Settings
config.set_main_option("sqlalchemy.url", settings.database_url)

# Python logging from the [loggers] section of alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Tables tracked by --autogenerate: locations, hotels, rooms, offers, searches, bookings
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting to a database.

    Handy for reviewing DDL before it runs against production.

    Usage: alembic upgrade head --sql > migration.sql
    """
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """Run migrations in one transaction on an already open connection."""
    # compare_type picks up column type changes such as Numeric precision on prices
    context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Open an async engine, run the migrations, dispose it.

    NullPool: a migration run needs a single connection and no reuse.
    """
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """Connect to the database and apply pending migrations."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
