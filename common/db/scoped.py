"""
Operation-scoped database sessions.

Provides lazy session acquisition that releases connections immediately
after each operation, preventing connection holding during external calls
(payment provider, HTTP, etc.)

Usage:
    async with get_session(session_factory) as session:
        result = await session.execute(query)
    # Committed and released here
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from common.core.otel_axiom_exporter import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def get_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Get a session for a single DB operation.

    Acquires a new session, commits on success, rolls back on error and
    releases the connection when the block exits.

    Yields:
        A session for the operation
    """
    start = time.perf_counter()
    async with session_factory() as session:
        acquire_time = time.perf_counter() - start
        logger.debug(f"Operation session acquire: {acquire_time * 1000:.2f}ms")

        try:
            yield session
            commit_start = time.perf_counter()
            await session.commit()
            commit_time = time.perf_counter() - commit_start
            logger.debug(f"Operation commit: {commit_time * 1000:.2f}ms")
        except Exception as e:
            logger.error(f"Operation rollback due to: {e}")
            await session.rollback()
            raise
        # Connection released here when context manager exits
