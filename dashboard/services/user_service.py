"""
User lookup service.

Only lookup-by-email exists; credential checking belongs to the auth layer
that calls this. The returned row contains the password column, so it is
never logged and never exposed through an HTTP endpoint.
"""

import logging
from typing import Any, Dict, Optional

import asyncpg

from dashboard.db.client import DatabaseError, record_to_dict

logger = logging.getLogger(__name__)


async def get_user(pool: asyncpg.Pool, email: str) -> Optional[Dict[str, Any]]:
    """
    Fetch a user by email.

    Returns:
        The user row as a dict, or None if no user has that email.

    Raises:
        DatabaseError: "Failed to fetch user."
    """
    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow("SELECT * FROM users WHERE email = $1", email)
    except Exception as e:
        logger.error(f"Failed to fetch user: {e}", exc_info=True)
        raise DatabaseError("Failed to fetch user.") from e

    if row is None:
        return None

    return record_to_dict(row)
