"""
Database Session Management

Owns the process-wide async engine and the session factory.

Lifecycle
---------
Application start → ``init_db()`` verifies the connection (and creates the
tables in development) → each request gets its own ``AsyncSession`` from
``get_session()`` → application shutdown → ``close_db()`` disposes the pool.

Repositories never open connections themselves; they receive a session.
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from sqlalchemy import make_url, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool, StaticPool

from deal_monitor.core.config import settings
from deal_monitor.core.logging import get_logger

logger = get_logger(__name__)


# ================================
# Database Engine Configuration
# ================================

def _is_memory_database(url: str) -> bool:
    database = make_url(url).database
    return not database or database == ":memory:"


def get_engine_config(database_url: str | None = None) -> dict[str, Any]:
    """
    Engine keyword arguments for the configured dialect and environment.

    - SQLite in memory: a single shared connection (``StaticPool``)
    - SQLite file: queue pool without server settings
    - PostgreSQL: queue pool sized from settings, ``application_name`` set
    - staging/test environments: ``NullPool`` for isolation
    """
    url = database_url or settings.DATABASE_URL
    config: dict[str, Any] = {
        "echo": settings.DB_ECHO,
    }

    if url.startswith("sqlite") and _is_memory_database(url):
        logger.info("configuring_database_engine", dialect="sqlite", pool_type="StaticPool")
        config["poolclass"] = StaticPool
        return config

    if settings.APP_ENV in ("staging", "test"):
        logger.info(
            "configuring_database_engine",
            environment=settings.APP_ENV,
            pool_type="NullPool",
        )
        config["poolclass"] = NullPool
        return config

    logger.info(
        "configuring_database_engine",
        environment=settings.APP_ENV,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )
    config.update({
        "poolclass": AsyncAdaptedQueuePool,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        # Detect connections dropped by the server before handing them out
        "pool_pre_ping": True,
        "pool_recycle": 7200 if settings.is_production else 3600,
        "pool_timeout": 30,
    })

    if url.startswith("postgresql"):
        config["connect_args"] = {
            "server_settings": {
                "application_name": settings.APP_NAME,
            }
        }

    return config


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """Create the async database engine."""
    url = database_url or settings.DATABASE_URL
    engine_config = get_engine_config(url)

    engine = create_async_engine(url, **engine_config)

    logger.info(
        "database_engine_created",
        dialect=engine.dialect.name,
        pool_size=engine_config.get("pool_size", engine_config["poolclass"].__name__),
    )

    return engine


# ================================
# Global Engine Instance
# ================================
# Creating the engine does not connect; the first session does.
engine: AsyncEngine = create_engine()

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    # Entities returned from repositories stay readable after commit
    expire_on_commit=False,
)


# ================================
# Session Lifecycle Functions
# ================================

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session for a single request.

    Rolls back on error and re-raises; the ``async with`` block closes the
    session and returns its connection to the pool.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(
                "database_session_error",
                error=str(e),
                error_type=type(e).__name__,
            )
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Verify the database connection during startup.

    In development the tables are created directly from the models; other
    environments are expected to run ``alembic upgrade head``.
    """
    logger.info("initializing_database")

    url = settings.DATABASE_URL
    if settings.is_sqlite and not _is_memory_database(url):
        # SQLite creates the file but not its directory
        Path(make_url(url).database).parent.mkdir(parents=True, exist_ok=True)

    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))

        logger.info("database_connection_successful")

        if settings.is_development:
            # Register every table on Base.metadata
            import deal_monitor.models  # noqa: F401
            from deal_monitor.db.base import Base

            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            logger.info("database_tables_created")

    except Exception as e:
        logger.error(
            "database_initialization_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise


async def close_db() -> None:
    """Dispose of the connection pool during shutdown."""
    logger.info("closing_database_connections")

    try:
        await engine.dispose()
        logger.info("database_connections_closed")

    except Exception as e:
        logger.error(
            "database_closure_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        # Don't raise - we're shutting down anyway


# ================================
# Database Health Check
# ================================

async def check_db_health() -> bool:
    """Return True if a trivial query succeeds."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    except Exception as e:
        logger.error(
            "database_health_check_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        return False
