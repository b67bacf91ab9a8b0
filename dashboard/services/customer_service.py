"""
Customer read service.

Customers are read-only from this backend's perspective. The customers table
aggregates per-customer invoice totals, formatted as currency for display.
"""

import logging
from typing import Any, Dict, List

import asyncpg

from dashboard.db.client import DatabaseError, record_to_dict
from dashboard.utils.currency import format_currency

logger = logging.getLogger(__name__)


async def fetch_customers(pool: asyncpg.Pool) -> List[Dict[str, Any]]:
    """
    Fetch every customer as an {id, name} pair, ordered by name.

    Used to populate the customer picker of the invoice forms.

    Raises:
        DatabaseError: "Failed to fetch all customers."
    """
    sql = """
        SELECT
          id,
          name
        FROM customers
        ORDER BY name ASC
    """

    try:
        async with pool.acquire() as conn:
            rows = await conn.fetch(sql)
    except Exception as e:
        logger.error(f"Database Error: {e}", exc_info=True)
        raise DatabaseError("Failed to fetch all customers.") from e

    return [record_to_dict(row) for row in rows]


async def fetch_filtered_customers(pool: asyncpg.Pool, query: str) -> List[Dict[str, Any]]:
    """
    Fetch the customers table filtered by name or email.

    Customers without invoices are included (LEFT JOIN) with zero totals.

    Args:
        pool: Shared asyncpg pool
        query: Case-insensitive substring matched against name and email

    Returns:
        List of dicts with id, name, email, image_url, total_invoices and
        total_pending / total_paid as currency strings, ordered by name.

    Raises:
        DatabaseError: "Failed to fetch customer table."
    """
    sql = """
        SELECT
          customers.id,
          customers.name,
          customers.email,
          customers.image_url,
          COUNT(invoices.id) AS total_invoices,
          SUM(CASE WHEN invoices.status = 'pending' THEN invoices.amount ELSE 0 END) AS total_pending,
          SUM(CASE WHEN invoices.status = 'paid' THEN invoices.amount ELSE 0 END) AS total_paid
        FROM customers
        LEFT JOIN invoices ON customers.id = invoices.customer_id
        WHERE
          customers.name ILIKE $1 OR
          customers.email ILIKE $1
        GROUP BY customers.id, customers.name, customers.email, customers.image_url
        ORDER BY customers.name ASC
    """

    try:
        async with pool.acquire() as conn:
            rows = await conn.fetch(sql, f"%{query}%")
    except Exception as e:
        logger.error(f"Database Error: {e}", exc_info=True)
        raise DatabaseError("Failed to fetch customer table.") from e

    customers = []
    for row in rows:
        customer = record_to_dict(row)
        customer["total_invoices"] = int(customer["total_invoices"] or 0)
        customer["total_pending"] = format_currency(customer["total_pending"])
        customer["total_paid"] = format_currency(customer["total_paid"])
        customers.append(customer)

    logger.debug(f"Fetched {len(customers)} customers for query={query!r}")

    return customers
