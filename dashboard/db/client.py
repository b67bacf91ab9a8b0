"""
asyncpg connection pool for the dashboard backend.

One pool is shared process-wide. It is created once at application startup
(see the lifespan handler in dashboard/main.py) and closed at shutdown.

Every data function checks a connection out with ``async with pool.acquire()``
so the connection goes back to the pool on both the success and the failure
path.
"""

import logging
import uuid
from typing import Any, Dict, Mapping, Optional

import asyncpg

from dashboard.config import settings

logger = logging.getLogger(__name__)

_pool: Optional[asyncpg.Pool] = None


class DatabaseError(Exception):
    """
    Generic failure of a single data-access operation.

    The message names the operation that failed (e.g. "Failed to fetch
    invoice."). The underlying driver error is logged by the caller and kept
    as ``__cause__``; it is never part of the message.
    """


async def init_pool() -> asyncpg.Pool:
    """
    Create the process-wide connection pool.

    Calling this twice returns the already-created pool.

    Returns:
        The shared asyncpg pool.
    """
    global _pool

    if _pool is not None:
        return _pool

    logger.info(
        f"Creating connection pool for {settings.POSTGRES_HOST}:{settings.POSTGRES_PORT}"
        f"/{settings.POSTGRES_DB} "
        f"(min_size={settings.DB_POOL_MIN_SIZE}, max_size={settings.DB_POOL_MAX_SIZE})"
    )

    _pool = await asyncpg.create_pool(
        host=settings.POSTGRES_HOST,
        port=settings.POSTGRES_PORT,
        database=settings.POSTGRES_DB,
        user=settings.POSTGRES_USER,
        password=settings.POSTGRES_PASSWORD,
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
    )
    return _pool


async def close_pool() -> None:
    """Close the shared pool, waiting for checked-out connections to be released."""
    global _pool

    if _pool is None:
        return

    await _pool.close()
    _pool = None
    logger.info("Connection pool closed")


def get_pool() -> asyncpg.Pool:
    """
    Return the shared pool.

    Used directly by scripts and as a FastAPI dependency by the routes.

    Raises:
        RuntimeError: If init_pool() has not been awaited yet.
    """
    if _pool is None:
        raise RuntimeError(
            "Database pool is not initialized. "
            "Call init_pool() during application startup."
        )
    return _pool


def record_to_dict(record: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert an asyncpg Record into a plain dict.

    uuid columns are rendered as strings so the result can be passed straight
    to the pydantic response models.
    """
    return {
        key: str(value) if isinstance(value, uuid.UUID) else value
        for key, value in dict(record).items()
    }
