"""
Dashboard overview service: revenue chart and summary cards.
"""

import asyncio
import logging
from typing import Any, Dict, List

import asyncpg

from dashboard.config import settings
from dashboard.db.client import DatabaseError, record_to_dict
from dashboard.utils.currency import format_currency

logger = logging.getLogger(__name__)


async def fetch_revenue(pool: asyncpg.Pool) -> List[Dict[str, Any]]:
    """
    Fetch the precomputed monthly revenue rows.

    The response is delayed by settings.REVENUE_FETCH_DELAY_SECONDS to
    demonstrate streaming/loading states in the frontend.

    Returns:
        List of {month, revenue} dicts in the order the store returns them.

    Raises:
        DatabaseError: "Failed to fetch revenue data."
    """
    delay = settings.REVENUE_FETCH_DELAY_SECONDS

    try:
        async with pool.acquire() as conn:
            # Artificial delay for demo purposes only
            logger.info("Fetching revenue data...")
            await asyncio.sleep(delay)

            rows = await conn.fetch("SELECT month, revenue FROM revenue")

            logger.info(f"Data fetch completed after {delay:g} seconds.")
    except Exception as e:
        logger.error(f"Database Error: {e}", exc_info=True)
        raise DatabaseError("Failed to fetch revenue data.") from e

    return [record_to_dict(row) for row in rows]


async def _fetch_one(pool: asyncpg.Pool, sql: str) -> asyncpg.Record:
    async with pool.acquire() as conn:
        return await conn.fetchrow(sql)


async def fetch_card_data(pool: asyncpg.Pool) -> Dict[str, Any]:
    """
    Fetch the four summary-card figures.

    Three independent aggregate queries run concurrently, each on its own
    pooled connection, and are awaited together. If any of them fails the
    whole call fails; there is no partial result.

    Returns:
        Dict with number_of_invoices, number_of_customers (ints) and
        total_paid_invoices, total_pending_invoices (currency strings).
        Missing aggregates count as 0.

    Raises:
        DatabaseError: "Failed to fetch card data."
    """
    invoice_count_sql = "SELECT COUNT(*) AS count FROM invoices"
    customer_count_sql = "SELECT COUNT(*) AS count FROM customers"
    invoice_status_sql = """
        SELECT
          SUM(CASE WHEN status = 'paid' THEN amount ELSE 0 END) AS paid,
          SUM(CASE WHEN status = 'pending' THEN amount ELSE 0 END) AS pending
        FROM invoices
    """

    # Wait for all three before failing so no query still holds a connection
    results = await asyncio.gather(
        _fetch_one(pool, invoice_count_sql),
        _fetch_one(pool, customer_count_sql),
        _fetch_one(pool, invoice_status_sql),
        return_exceptions=True,
    )

    try:
        for result in results:
            if isinstance(result, BaseException):
                raise result
        invoice_count, customer_count, invoice_status = results
    except Exception as e:
        logger.error(f"Database Error: {e}", exc_info=True)
        raise DatabaseError("Failed to fetch card data.") from e

    return {
        "number_of_customers": int(customer_count["count"] or 0),
        "number_of_invoices": int(invoice_count["count"] or 0),
        "total_paid_invoices": format_currency(invoice_status["paid"]),
        "total_pending_invoices": format_currency(invoice_status["pending"]),
    }
