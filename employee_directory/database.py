"""
Employee Directory API - Async SQLAlchemy Engine & Sessions
============================================================

What:  Engine construction, session factory and a transactional session scope
       for the SQL document store.
Who:   Used by SqlDocumentRepository only; the other adapters never import it.
When:  The engine is created when the SQL repository is constructed, not at import.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:     Persistent connections for normal load
    max_overflow=10:  Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:    Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    SQLite URLs (tests, single-file deployments) use SQLAlchemy's default pool;
    the sizing arguments are not accepted there.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from employee_directory.config import settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shares one metadata object)."""
    pass


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine, applying pool sizing only where the dialect supports it."""
    options = {"echo": settings.log_level == "DEBUG"}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(database_url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: ORM objects stay readable after the commit
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a session that commits on success and rolls back on error.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the caller
        3. On success: commits the transaction
        4. On error: rolls back and re-raises
        5. Always: closes the session (returns connection to pool)
    """
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
