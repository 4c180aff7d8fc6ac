"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and FastAPI dependency
for database session injection.

Dependencies: sqlalchemy, ragchat.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ragchat.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    pool_pre_ping=True verifies connections before use to detect
    stale/broken connections early. Pool sizing only applies to server
    databases; SQLite URLs get SQLAlchemy's default pool.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    settings = get_settings()
    db_config = settings.database
    url = db_config.async_database_url

    if url.startswith("sqlite"):
        return create_async_engine(url, echo=db_config.echo_sql)

    return create_async_engine(
        url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    autoflush=False and expire_on_commit=False keep loaded rows usable after
    a commit, which the services rely on when returning models to callers.

    Returns:
        async_sessionmaker: Async session factory configured for manual transaction control

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)

    Usage:
        @app.get("/sessions/{id}")
        async def get_session(id: UUID, db: AsyncSession = Depends(get_async_db)):
            return await session_crud.get_by_id(db, id)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session
