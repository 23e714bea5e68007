# 📄 File: app/shared/config/database.py
#
# 🧭 Purpose (Layman Explanation):
# Configuration for connecting to the marketplace database, managing connections efficiently,
# so that many customers, restaurants and riders can use the app at the same time.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy async engine configuration with dialect-aware pooling (PostgreSQL via
# asyncpg in production, SQLite via aiosqlite for tests), the declarative base with
# a constraint naming convention, and a database health probe.
#
# 🔗 Dependencies:
# - SQLAlchemy async engine and session
# - app.shared.config.settings
# - asyncpg / aiosqlite drivers
#
# 🔄 Connected Modules / Calls From:
# - app.shared.infrastructure.database.session
# - All module SQLAlchemy models (DatabaseBase)
# - app.api.v1.health, app.main lifespan, migrations/env.py, tests

import logging
from typing import Any, Dict, Optional

from sqlalchemy import MetaData, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from .settings import get_settings

logger = logging.getLogger(__name__)


# =============================================================================
# DATABASE CONFIGURATION
# =============================================================================

class DatabaseConfig:
    """Database configuration class with environment-specific settings."""

    def __init__(self):
        self.settings = get_settings()
        self._async_engine: Optional[AsyncEngine] = None
        self._async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def database_url(self) -> str:
        """Get the database URL for async connections."""
        return self.settings.database_url

    @property
    def engine_kwargs(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine configuration based on dialect and environment."""
        base_config: Dict[str, Any] = {
            "echo": self.settings.DB_ECHO,
            "future": True,
        }

        if self.settings.is_sqlite:
            # SQLite has no server-side pool tuning
            base_config["connect_args"] = {"check_same_thread": False}
            return base_config

        base_config.update({
            "pool_size": self.settings.DB_POOL_SIZE,
            "max_overflow": self.settings.DB_MAX_OVERFLOW,
            "pool_timeout": self.settings.DB_POOL_TIMEOUT,
            "pool_recycle": self.settings.DB_POOL_RECYCLE,
            "pool_pre_ping": True,
            "connect_args": {
                "server_settings": {
                    "application_name": f"food_delivery_{self.settings.ENVIRONMENT}",
                    "timezone": "UTC",
                }
            },
        })

        if self.settings.is_production:
            base_config["connect_args"]["command_timeout"] = 30

        return base_config

    def create_async_engine(self) -> AsyncEngine:
        """Create and configure async database engine."""
        if self._async_engine is None:
            self._async_engine = create_async_engine(
                self.database_url,
                **self.engine_kwargs
            )
            logger.info(
                f"Database engine created for "
                f"{self._async_engine.url.render_as_string(hide_password=True)}"
            )
        return self._async_engine

    def create_async_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Create async session factory."""
        if self._async_session_factory is None:
            engine = self.create_async_engine()
            self._async_session_factory = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._async_session_factory

    async def close_async_engine(self) -> None:
        """Close the async database engine."""
        if self._async_engine:
            await self._async_engine.dispose()
            self._async_engine = None
            self._async_session_factory = None
            logger.info("Database engine disposed")


# =============================================================================
# DATABASE MODELS BASE CLASS
# =============================================================================

# Naming convention for database constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=convention)


class DatabaseBase(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Every module's tables register on this metadata so Alembic and the
    test suite see the complete schema.
    """
    metadata = metadata


# =============================================================================
# GLOBAL DATABASE CONFIGURATION INSTANCE
# =============================================================================

db_config = DatabaseConfig()


def get_async_engine() -> AsyncEngine:
    """Get the async database engine."""
    return db_config.create_async_engine()


def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the async session factory."""
    return db_config.create_async_session_factory()


def import_all_models() -> None:
    """Import every module's SQLAlchemy models so they register on the metadata."""
    from app.modules.user_management.infrastructure.database import models as _users  # noqa: F401
    from app.modules.restaurants.infrastructure.database import models as _restaurants  # noqa: F401
    from app.modules.delivery_partners.infrastructure.database import models as _partners  # noqa: F401
    from app.modules.orders.infrastructure.database import models as _orders  # noqa: F401


async def create_tables() -> None:
    """Create all tables (development and test databases only)."""
    import_all_models()
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(DatabaseBase.metadata.create_all)


async def drop_tables() -> None:
    """Drop all tables (test databases only)."""
    if get_settings().is_production:
        raise RuntimeError("Dropping tables is not allowed in production")

    import_all_models()
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(DatabaseBase.metadata.drop_all)


# =============================================================================
# DATABASE HEALTH CHECK
# =============================================================================

async def check_database_health() -> Dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dict containing database health status
    """
    try:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            value = result.scalar()

        return {
            "status": "healthy" if value == 1 else "unhealthy",
            "dialect": engine.dialect.name,
        }

    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "error": str(e),
            "type": type(e).__name__,
        }
