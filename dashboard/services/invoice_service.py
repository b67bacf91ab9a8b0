"""
Invoice persistence service.

RULES:
1. invoices.amount is stored in integer cents. Conversion to dollars or to a
   currency string happens only when mapping rows for display.
2. Every function checks out one pooled connection and releases it on both
   the success and the failure path (``async with pool.acquire()``).
3. Any driver error is logged and replaced with a DatabaseError whose message
   names the failed operation. No retries.
4. Free-text search uses ILIKE '%query%' on every searchable column,
   including non-text columns coerced with ::text.
"""

import logging
import math
from datetime import date
from typing import Any, Dict, List, Literal, Optional, Union

import asyncpg

from dashboard.db.client import DatabaseError, record_to_dict
from dashboard.utils.constants import ITEMS_PER_PAGE, LATEST_INVOICES_LIMIT
from dashboard.utils.currency import format_currency

logger = logging.getLogger(__name__)

InvoiceStatus = Literal["pending", "paid"]

# Shared by the page query and the count query so both always agree on
# which rows match.
INVOICE_SEARCH_CONDITION = """
        customers.name ILIKE $1 OR
        customers.email ILIKE $1 OR
        invoices.amount::text ILIKE $1 OR
        invoices.date::text ILIKE $1 OR
        invoices.status ILIKE $1"""


def _search_pattern(query: str) -> str:
    """Wrap a free-text query for case-insensitive substring matching."""
    return f"%{query}%"


async def insert_invoice(
    pool: asyncpg.Pool,
    customer_id: str,
    amount_in_cents: int,
    status: InvoiceStatus,
    invoice_date: Union[str, date],
) -> None:
    """
    Insert a new invoice.

    Args:
        pool: Shared asyncpg pool
        customer_id: UUID of the customer the invoice belongs to
        amount_in_cents: Invoice amount in integer cents
        status: "pending" or "paid"
        invoice_date: ISO-8601 date string (YYYY-MM-DD) or a date

    Raises:
        DatabaseError: "Failed to insert the invoice."
    """
    sql = """
        INSERT INTO invoices (customer_id, amount, status, date)
        VALUES ($1, $2, $3, $4)
    """

    try:
        if isinstance(invoice_date, str):
            invoice_date = date.fromisoformat(invoice_date)

        async with pool.acquire() as conn:
            await conn.execute(sql, customer_id, amount_in_cents, status, invoice_date)
    except Exception as e:
        logger.error(f"Database Error: {e}", exc_info=True)
        raise DatabaseError("Failed to insert the invoice.") from e

    logger.info(f"Invoice inserted for customer {customer_id} (status={status})")


async def update_invoice(
    pool: asyncpg.Pool,
    customer_id: str,
    amount_in_cents: int,
    status: InvoiceStatus,
    invoice_id: str,
) -> None:
    """
    Update customer, amount and status of an existing invoice.

    The invoice id and date are left untouched.

    Raises:
        DatabaseError: "Failed to edit the invoice."
    """
    sql = """
        UPDATE invoices
        SET customer_id = $1, amount = $2, status = $3
        WHERE id = $4
    """

    try:
        async with pool.acquire() as conn:
            await conn.execute(sql, customer_id, amount_in_cents, status, invoice_id)
    except Exception as e:
        logger.error(f"Database Error: {e}", exc_info=True)
        raise DatabaseError("Failed to edit the invoice.") from e

    logger.info(f"Invoice {invoice_id} updated (status={status})")


async def delete_invoice(pool: asyncpg.Pool, invoice_id: str) -> None:
    """
    Delete an invoice by id.

    Deleting an id that does not exist is not an error.

    Raises:
        DatabaseError: "Failed to delete the invoice."
    """
    try:
        async with pool.acquire() as conn:
            await conn.execute("DELETE FROM invoices WHERE id = $1", invoice_id)
    except Exception as e:
        logger.error(f"Database Error: {e}", exc_info=True)
        raise DatabaseError("Failed to delete the invoice.") from e

    logger.info(f"Invoice {invoice_id} deleted")


async def fetch_latest_invoices(pool: asyncpg.Pool) -> List[Dict[str, Any]]:
    """
    Fetch the most recent invoices joined with their customer.

    Returns:
        Up to LATEST_INVOICES_LIMIT dicts with keys id, amount (currency
        string), name, email, image_url; newest first.

    Raises:
        DatabaseError: "Failed to fetch the latest invoices."
    """
    sql = """
        SELECT invoices.amount, customers.name, customers.image_url, customers.email, invoices.id
        FROM invoices
        JOIN customers ON invoices.customer_id = customers.id
        ORDER BY invoices.date DESC
        LIMIT $1
    """

    try:
        async with pool.acquire() as conn:
            rows = await conn.fetch(sql, LATEST_INVOICES_LIMIT)
    except Exception as e:
        logger.error(f"Database Error: {e}", exc_info=True)
        raise DatabaseError("Failed to fetch the latest invoices.") from e

    latest_invoices = []
    for row in rows:
        invoice = record_to_dict(row)
        invoice["amount"] = format_currency(invoice["amount"])
        latest_invoices.append(invoice)

    return latest_invoices


async def fetch_filtered_invoices(
    pool: asyncpg.Pool,
    query: str,
    current_page: int,
) -> List[Dict[str, Any]]:
    """
    Fetch one page of invoices matching a free-text query.

    Matches customer name, customer email, amount, date and status
    (case-insensitive substring). current_page is 1-based and is not
    validated here.

    Args:
        pool: Shared asyncpg pool
        query: Free-text search; "" matches every invoice
        current_page: 1-based page number

    Returns:
        Up to ITEMS_PER_PAGE dicts (id, amount in cents, date, status, name,
        email, image_url), newest first.

    Raises:
        DatabaseError: "Failed to fetch invoices."
    """
    offset = (current_page - 1) * ITEMS_PER_PAGE

    sql = f"""
        SELECT
          invoices.id,
          invoices.amount,
          invoices.date,
          invoices.status,
          customers.name,
          customers.email,
          customers.image_url
        FROM invoices
        JOIN customers ON invoices.customer_id = customers.id
        WHERE {INVOICE_SEARCH_CONDITION}
        ORDER BY invoices.date DESC
        LIMIT $2 OFFSET $3
    """

    logger.debug(f"Fetching invoices (query={query!r}, page={current_page}, offset={offset})")

    try:
        async with pool.acquire() as conn:
            rows = await conn.fetch(sql, _search_pattern(query), ITEMS_PER_PAGE, offset)
    except Exception as e:
        logger.error(f"Database Error: {e}", exc_info=True)
        raise DatabaseError("Failed to fetch invoices.") from e

    return [record_to_dict(row) for row in rows]


async def fetch_invoices_pages(pool: asyncpg.Pool, query: str) -> int:
    """
    Count the pages needed to show every invoice matching a query.

    Returns:
        ceil(match_count / ITEMS_PER_PAGE); 0 when nothing matches.

    Raises:
        DatabaseError: "Failed to fetch total number of invoices."
    """
    sql = f"""
        SELECT COUNT(*)
        FROM invoices
        JOIN customers ON invoices.customer_id = customers.id
        WHERE {INVOICE_SEARCH_CONDITION}
    """

    try:
        async with pool.acquire() as conn:
            count = await conn.fetchval(sql, _search_pattern(query))
    except Exception as e:
        logger.error(f"Database Error: {e}", exc_info=True)
        raise DatabaseError("Failed to fetch total number of invoices.") from e

    match_count = int(count or 0)
    return math.ceil(match_count / ITEMS_PER_PAGE)


async def fetch_invoice_by_id(
    pool: asyncpg.Pool,
    invoice_id: str,
) -> Optional[Dict[str, Any]]:
    """
    Fetch a single invoice for the edit form.

    Returns:
        Dict with id, customer_id, amount (dollars, i.e. cents / 100) and
        status, or None if no invoice has that id.

    Raises:
        DatabaseError: "Failed to fetch invoice."
    """
    sql = """
        SELECT
          invoices.id,
          invoices.customer_id,
          invoices.amount,
          invoices.status
        FROM invoices
        WHERE invoices.id = $1
    """

    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow(sql, invoice_id)
    except Exception as e:
        logger.error(f"Database Error: {e}", exc_info=True)
        raise DatabaseError("Failed to fetch invoice.") from e

    if row is None:
        logger.debug(f"Invoice {invoice_id} not found")
        return None

    invoice = record_to_dict(row)
    # Convert amount from cents to dollars
    invoice["amount"] = invoice["amount"] / 100
    return invoice
