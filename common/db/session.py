from uuid import uuid4

from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
)
from sqlalchemy import pool
from fastapi import Request

from common.core.config import Settings
from common.core.otel_axiom_exporter import get_logger

logger = get_logger(__name__)


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Build the async engine for the configured Postgres database.

    NullPool (db_use_nullpool=True): No pooling, new connection per operation
    Default pool: Connection pooling (for API servers with concurrent requests)
    """
    # Replace postgresql:// with postgresql+asyncpg:// for async support
    async_database_url = settings.database_url.replace(
        "postgresql://", "postgresql+asyncpg://"
    )

    engine_kwargs = {
        "echo": settings.debug,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "connect_args": {
            "prepared_statement_name_func": lambda: f"__asyncpg_{uuid4()}__",
        },
    }

    if settings.db_use_nullpool:
        logger.info("Using NullPool - no connection pooling")
        engine_kwargs["poolclass"] = pool.NullPool
    else:
        logger.info(
            f"Using connection pooling - pool_size={settings.db_pool_size}, max_overflow={settings.db_pool_overflow}"
        )
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = settings.db_pool_overflow

    return create_async_engine(async_database_url, **engine_kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request):
    """Request-scoped session from the factory built in the app lifespan."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Rolling back due to error {e}")
            await session.rollback()
            raise
