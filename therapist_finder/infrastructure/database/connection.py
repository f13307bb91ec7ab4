"""Database connection management.

Read-only access to the directory's PostgreSQL database.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from therapist_finder.core.config.settings import settings

# Async engine (read-only)
engine: AsyncEngine = create_async_engine(
    str(settings.database_url).replace("postgresql://", "postgresql+psycopg://"),
    echo=settings.debug,  # SQL output in debug mode only
    pool_pre_ping=True,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
)

# Async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory dependency for operations that read concurrently.

    An `AsyncSession` cannot run two statements at once, so concurrent
    reads each open their own session from this factory.
    """
    return AsyncSessionLocal
