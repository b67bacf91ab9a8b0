"""
Service layer for the dashboard backend.

Each function:
- Checks out one connection from the shared asyncpg pool (released on every path)
- Runs one parameterized statement (the card summary runs three concurrently)
- Maps rows into display records (currency formatting, cents -> dollars)
- Raises DatabaseError with an operation-specific message on any failure

Services act as the glue between routes (HTTP layer) and the database.
"""

from .customer_service import fetch_customers, fetch_filtered_customers
from .dashboard_service import fetch_card_data, fetch_revenue
from .invoice_service import (
    delete_invoice,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
    insert_invoice,
    update_invoice,
)
from .user_service import get_user

__all__ = [
    "insert_invoice",
    "update_invoice",
    "delete_invoice",
    "fetch_latest_invoices",
    "fetch_filtered_invoices",
    "fetch_invoices_pages",
    "fetch_invoice_by_id",
    "fetch_revenue",
    "fetch_card_data",
    "fetch_customers",
    "fetch_filtered_customers",
    "get_user",
]
