# users_api/app/db/session.py
"""
Async database session management for SQLAlchemy.

- aiosqlite for local development and tests (no pooling)
- asyncpg for PostgreSQL deployments (queue pool with pre-ping)
"""
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, AsyncAdaptedQueuePool

from users_api.app.core.config import Settings, settings


def create_engine_for(config: Settings) -> AsyncEngine:
    """
    Build an async engine for the configured database.

    SQLite gets NullPool and ``check_same_thread=False``; PostgreSQL gets a
    small pre-pinged pool that recycles connections every five minutes.
    """
    if config.is_sqlite:
        return create_async_engine(
            config.DATABASE_URL,
            echo=config.DATABASE_ECHO,
            poolclass=NullPool,
            connect_args={"check_same_thread": False},
        )

    return create_async_engine(
        config.DATABASE_URL,
        echo=config.DATABASE_ECHO,
        poolclass=AsyncAdaptedQueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=300,
    )


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps attributes readable after commit
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Process-wide engine and session factory
# ─────────────────────────────────────────────────────────────────────────────
engine: AsyncEngine = create_engine_for(settings)

AsyncSessionLocal: async_sessionmaker[AsyncSession] = create_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one session per request.

    The session does not auto-commit; repository methods commit their own
    unit of work.
    """
    async with AsyncSessionLocal() as session:
        yield session
