"""
Customer API endpoints.

Endpoints:
- GET /customers - All customers (id, name) for the invoice form picker
- GET /customers/table - Searchable customers table with invoice totals
"""

import logging
from typing import Annotated

import asyncpg
from fastapi import APIRouter, Depends, Query

from dashboard.db.client import DatabaseError, get_pool
from dashboard.routes.errors import database_error
from dashboard.services.customer_service import fetch_customers, fetch_filtered_customers
from dashboard.schemas.customers import (
    CustomerField,
    CustomerListResponse,
    CustomerTableResponse,
    CustomerTableRow,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get(
    "",
    response_model=CustomerListResponse,
    summary="List customers",
)
async def list_customers(
    pool: Annotated[asyncpg.Pool, Depends(get_pool)],
) -> CustomerListResponse:
    """Return every customer ordered by name."""
    try:
        rows = await fetch_customers(pool)
    except DatabaseError as e:
        raise database_error(e)

    customers = [CustomerField(**row) for row in rows]
    return CustomerListResponse(customers=customers, count=len(customers))


@router.get(
    "/table",
    response_model=CustomerTableResponse,
    summary="Customers table",
    description="Customers whose name or email contains the query, with invoice count and paid/pending totals.",
)
async def get_customers_table(
    pool: Annotated[asyncpg.Pool, Depends(get_pool)],
    query: Annotated[str, Query(description="Free-text search")] = "",
) -> CustomerTableResponse:
    """Return the filtered customers table."""
    try:
        rows = await fetch_filtered_customers(pool, query)
    except DatabaseError as e:
        raise database_error(e)

    customers = [CustomerTableRow(**row) for row in rows]
    return CustomerTableResponse(customers=customers, query=query, count=len(customers))
