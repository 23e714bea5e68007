# 📄 File: migrations/env.py
# 🧭 Purpose (Layman Explanation):
# Tells Alembic how to reach the marketplace database and which tables it owns, so schema
# changes can be applied the same way in development and production.
# 🧪 Purpose (Technical Summary):
# Alembic environment: resolves the database URL from settings/environment, loads every ORM
# model onto DatabaseBase.metadata and runs migrations offline, synchronously or through an
# async engine (ALEMBIC_ASYNC=true).
# 🔗 Dependencies:
# - alembic (migration tool)
# - SQLAlchemy (ORM, async engine)
# - python-dotenv (environment variables)
# 🔄 Connected Modules / Calls From:
# - alembic CLI commands (upgrade, downgrade, revision)
# - Deployment scripts

import asyncio
import os
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import engine_from_config, pool
from sqlalchemy.ext.asyncio import async_engine_from_config

load_dotenv()

from app.shared.config.database import DatabaseBase, import_all_models  # noqa: E402

import_all_models()

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = DatabaseBase.metadata

ASYNC_DRIVERS = {
    "postgresql+asyncpg://": "postgresql://",
    "sqlite+aiosqlite://": "sqlite://",
}


def get_database_url(async_driver: bool = False) -> str:
    """
    Get the database URL from the environment.

    Args:
        async_driver: Keep the async driver in the URL

    Returns:
        str: Database connection URL
    """
    database_url = os.getenv("DATABASE_URL") or config.get_main_option("sqlalchemy.url")
    if async_driver:
        return database_url
    for async_prefix, sync_prefix in ASYNC_DRIVERS.items():
        if database_url.startswith(async_prefix):
            return database_url.replace(async_prefix, sync_prefix, 1)
    return database_url


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode, emitting SQL to the script output.
    """
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """
    Run migrations through an async engine.
    """
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_database_url(async_driver=True)

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """
    Run migrations in 'online' mode against a live connection.
    """
    if os.getenv("ALEMBIC_ASYNC", "false").lower() == "true":
        asyncio.run(run_async_migrations())
        return

    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_database_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        do_run_migrations(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
