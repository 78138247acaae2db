"""
ContactBook Backend — Alembic Environment
===========================================

Runs the revisions in alembic/versions against the same database the API
uses: the URL is read from app.config.settings (DATABASE_URL), so alembic.ini
never holds credentials. Only the `contacts` table is tracked.

Usage (from backend/):
    alembic upgrade head          # apply pending revisions
    alembic upgrade head --sql    # print the DDL instead of executing it
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from app.config import settings
from app.database import Base

# Registers the contacts table on Base.metadata for --autogenerate
from app.models.contact import Contact  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# DATABASE_URL wins over anything in alembic.ini
config.set_main_option("sqlalchemy.url", settings.database_url)


def run_migrations_offline() -> None:
    """`--sql` mode: render revision DDL as text; no connection is opened."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    # Sync half of the bridge; invoked through AsyncConnection.run_sync()
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,  # catch JSON <-> JSONB drift on --autogenerate
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Apply revisions over a one-off asyncpg connection (NullPool: nothing outlives the run)."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
