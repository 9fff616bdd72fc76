"""Database connection and session management."""

from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from directory_api.config import get_settings

settings = get_settings()


def _build_engine() -> AsyncEngine:
    """Create the async engine for the configured database."""
    if settings.is_sqlite:
        # SQLite has no server-side pool to size
        return create_async_engine(settings.async_database_url, echo=False)

    return create_async_engine(
        settings.async_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        # Validate connections before checkout to detect stale connections
        pool_pre_ping=True,
        # Recycle connections after 1 hour (important for cloud proxies)
        pool_recycle=3600,
        # Security: Never echo SQL statements as they may contain sensitive data
        echo=False,
    )


engine = _build_engine()

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def check_database() -> bool:
    """Check that the database answers a trivial query.

    Returns:
        True if the database is reachable
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError):
        return False
