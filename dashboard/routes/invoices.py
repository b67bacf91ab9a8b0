"""
Invoice API endpoints.

Endpoints:
- GET /invoices - Paginated, searchable invoices table
- GET /invoices/pages - Number of pages for a search query
- GET /invoices/{invoice_id} - Single invoice for the edit form
- POST /invoices - Create invoice (amount in dollars, dated today)
- PUT /invoices/{invoice_id} - Update customer, amount and status
- DELETE /invoices/{invoice_id} - Delete invoice
"""

import logging
from datetime import date
from typing import Annotated

import asyncpg
from fastapi import APIRouter, Depends, HTTPException, Query, status

from dashboard.db.client import DatabaseError, get_pool
from dashboard.routes.errors import database_error
from dashboard.services.invoice_service import (
    delete_invoice,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    insert_invoice,
    update_invoice,
)
from dashboard.schemas.invoices import (
    InvoiceCreateRequest,
    InvoiceFormResponse,
    InvoiceListResponse,
    InvoiceMutationResponse,
    InvoicePagesResponse,
    InvoiceTableRow,
    InvoiceUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["invoices"])

Pool = Annotated[asyncpg.Pool, Depends(get_pool)]


def _to_cents(amount: float) -> int:
    """Convert a dollar amount from a request into integer cents."""
    return round(amount * 100)


@router.get(
    "",
    response_model=InvoiceListResponse,
    summary="List invoices",
    description="Search invoices by customer name, email, amount, date or status. Six rows per page, newest first.",
)
async def list_invoices(
    pool: Pool,
    query: Annotated[str, Query(description="Free-text search")] = "",
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
) -> InvoiceListResponse:
    """Return one page of the invoices table."""
    try:
        rows = await fetch_filtered_invoices(pool, query, page)
    except DatabaseError as e:
        raise database_error(e)

    invoices = [InvoiceTableRow(**row) for row in rows]

    return InvoiceListResponse(
        invoices=invoices,
        query=query,
        page=page,
        count=len(invoices),
    )


@router.get(
    "/pages",
    response_model=InvoicePagesResponse,
    summary="Count invoice pages",
)
async def get_invoice_pages(
    pool: Pool,
    query: Annotated[str, Query(description="Free-text search")] = "",
) -> InvoicePagesResponse:
    """Return how many pages GET /invoices has for the same query."""
    try:
        total_pages = await fetch_invoices_pages(pool, query)
    except DatabaseError as e:
        raise database_error(e)

    return InvoicePagesResponse(query=query, total_pages=total_pages)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceFormResponse,
    summary="Get invoice",
)
async def get_invoice(invoice_id: str, pool: Pool) -> InvoiceFormResponse:
    """Return a single invoice with its amount in dollars, or 404."""
    try:
        invoice = await fetch_invoice_by_id(pool, invoice_id)
    except DatabaseError as e:
        raise database_error(e)

    if invoice is None:
        logger.warning(f"Invoice {invoice_id} not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "not_found",
                "details": f"Invoice {invoice_id} not found"
            }
        )

    return InvoiceFormResponse(**invoice)


@router.post(
    "",
    response_model=InvoiceMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create invoice",
)
async def create_invoice(request: InvoiceCreateRequest, pool: Pool) -> InvoiceMutationResponse:
    """Create an invoice dated today from a dollar amount."""
    amount_in_cents = _to_cents(request.amount)
    invoice_date = date.today().isoformat()

    try:
        await insert_invoice(pool, request.customer_id, amount_in_cents, request.status, invoice_date)
    except DatabaseError as e:
        raise database_error(e)

    return InvoiceMutationResponse(status="CREATED", message="Invoice created successfully")


@router.put(
    "/{invoice_id}",
    response_model=InvoiceMutationResponse,
    summary="Update invoice",
)
async def edit_invoice(
    invoice_id: str,
    request: InvoiceUpdateRequest,
    pool: Pool,
) -> InvoiceMutationResponse:
    """Update customer, amount and status of an invoice."""
    amount_in_cents = _to_cents(request.amount)

    try:
        await update_invoice(pool, request.customer_id, amount_in_cents, request.status, invoice_id)
    except DatabaseError as e:
        raise database_error(e)

    return InvoiceMutationResponse(status="UPDATED", message="Invoice updated successfully")


@router.delete(
    "/{invoice_id}",
    response_model=InvoiceMutationResponse,
    summary="Delete invoice",
)
async def remove_invoice(invoice_id: str, pool: Pool) -> InvoiceMutationResponse:
    """Delete an invoice."""
    try:
        await delete_invoice(pool, invoice_id)
    except DatabaseError as e:
        raise database_error(e)

    return InvoiceMutationResponse(status="DELETED", message="Invoice deleted successfully")
