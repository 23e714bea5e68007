# 📄 File: app/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Manages database sessions (like conversations with the database) so each request gets its
# own clean session and either saves all of its changes or none of them.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy session lifecycle for FastAPI: one session per request, commit on success,
# rollback on any error, translation of stale-version and unexpected SQLAlchemy failures
# into the application's exception hierarchy while domain exceptions pass through untouched.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession)
# - app.shared.config.database (session factory)
# - app.shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - All module repository implementations (Depends(get_db_session))
# - Tests (direct session access)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.shared.config.database import get_async_session_factory
from app.shared.core.exceptions import ConcurrencyConflictError, DatabaseError, MarketplaceException

logger = logging.getLogger(__name__)


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get an async database session with automatic transaction management.

    Yields:
        AsyncSession: Database session

    Raises:
        ConcurrencyConflictError: If an optimistic version check failed
        DatabaseError: If an unexpected SQLAlchemy error occurred
    """
    session: AsyncSession = get_async_session_factory()()

    try:
        yield session
        await session.commit()

    except MarketplaceException:
        await session.rollback()
        raise

    except StaleDataError as e:
        await session.rollback()
        logger.warning(f"Stale write detected, transaction rolled back: {e}")
        raise ConcurrencyConflictError()

    except exc.SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Database error occurred, transaction rolled back: {e}")
        raise DatabaseError("Database operation failed")

    except BaseException:
        await session.rollback()
        raise

    finally:
        await session.close()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides database sessions.

    Usage:
        async def endpoint(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with get_session() as session:
        yield session
