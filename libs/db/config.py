from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from libs.common.config import get_settings

settings = get_settings()


def engine_options(url: str) -> dict[str, Any]:
    """Pool options for the configured backend.

    SQLite (used by the test-suite and quick local runs) does not take
    queue-pool sizing arguments.
    """
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,  # Test connections before using
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
    }


# Create async engine
# echo=True for local dev to see SQL queries
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=(settings.ENVIRONMENT == "local" and settings.LOG_LEVEL.upper() == "DEBUG"),
    **engine_options(settings.DATABASE_URL),
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)
