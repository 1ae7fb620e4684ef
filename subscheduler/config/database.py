"""
Database configuration and connection management.
"""

from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from subscheduler.config.logging import get_logger
from subscheduler.config.settings import settings

logger = get_logger(__name__)


def get_database_url() -> str:
    """Get database URL from settings."""
    return str(settings.DATABASE_URL)


def create_engine(database_url: str = None) -> AsyncEngine:
    """Create async SQLAlchemy engine."""
    url = database_url or get_database_url()

    if url.startswith("sqlite"):
        # SQLite pools do not accept sizing arguments
        return create_async_engine(url, echo=settings.DATABASE_ECHO)

    if settings.ENVIRONMENT == "test":
        return create_async_engine(
            url, echo=settings.DATABASE_ECHO, poolclass=NullPool
        )

    return create_async_engine(
        url,
        echo=settings.DATABASE_ECHO,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_timeout=settings.DATABASE_POOL_TIMEOUT,
        pool_recycle=settings.DATABASE_POOL_RECYCLE,
        pool_pre_ping=True,
    )


def get_async_session_factory(
    database_url: str = None,
) -> async_sessionmaker[AsyncSession]:
    """Get async session factory."""
    engine = create_engine(database_url)
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@lru_cache(maxsize=1)
def get_default_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the configured database, created on first use."""
    logger.info("Creating database session factory")
    return get_async_session_factory()

