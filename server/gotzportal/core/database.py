"""Database configuration and async session management."""

from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from .config import settings


# Create declarative base for models
Base = declarative_base()

# Built on first use so a process without DATABASE_URL never touches a driver
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def has_db() -> bool:
    """
    Report whether a live database is configured for this process.

    Every data path consults this before choosing between the database and
    the fallback/in-memory storage.
    """
    return bool(settings.database_url)


def get_engine() -> AsyncEngine:
    """Return the process-wide async engine, creating it on first use."""
    global _engine
    if _engine is None:
        if not has_db():
            raise RuntimeError("DATABASE_URL is not configured")
        url = settings.database_url
        _engine = create_async_engine(
            url,
            echo=settings.debug and settings.log_level == "DEBUG",
            pool_pre_ping=True,
            # Use StaticPool for SQLite in-memory databases (if needed for testing)
            poolclass=StaticPool if "sqlite" in url else None,
            connect_args={"check_same_thread": False} if "sqlite" in url else {},
        )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the async session factory bound to the process engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


async def get_async_session() -> AsyncGenerator[Optional[AsyncSession], None]:
    """
    Dependency function that yields database sessions.

    Yields ``None`` when no database is configured so handlers can take the
    fallback path without a connection attempt.

    Yields:
        AsyncSession | None: Database session
    """
    if not has_db():
        yield None
        return

    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# Alias for FastAPI dependency injection
get_db = get_async_session


async def init_db() -> None:
    """Initialize the database by creating all tables."""
    if not has_db():
        return
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
