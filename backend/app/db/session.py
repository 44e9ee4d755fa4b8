# backend/app/db/session.py
"""
Async database session management for SQLAlchemy.

- asyncpg for PostgreSQL (production), with a pre-pinged connection pool
- aiosqlite for SQLite (local development and tests), without pooling

Every request gets its own AsyncSession; no session is shared between
concurrent requests.
"""
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, AsyncAdaptedQueuePool

from backend.app.core.config import settings

# Seconds a SQLite writer waits on a locked database before giving up
SQLITE_BUSY_TIMEOUT = 15


def _create_async_engine() -> AsyncEngine:
    """
    Create the async engine for the configured DATABASE_URL.

    SQLite uses NullPool (one connection per session) so concurrent writers
    are serialized by SQLite's own file locking. PostgreSQL keeps a small
    pool and recycles connections every 5 minutes.
    """
    if settings.is_sqlite:
        return create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            poolclass=NullPool,
            connect_args={
                "check_same_thread": False,
                "timeout": SQLITE_BUSY_TIMEOUT,
            },
        )

    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        poolclass=AsyncAdaptedQueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=300,
    )


engine: AsyncEngine = _create_async_engine()


# expire_on_commit=False: attributes stay readable after commit
# autoflush=False: writes only happen on explicit flush/commit
AsyncSessionLocal: async_sessionmaker[AsyncSession] = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a per-request session.

    Does NOT auto-commit: services commit explicitly. Anything left
    uncommitted when the endpoint raises is rolled back.

    Usage:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
