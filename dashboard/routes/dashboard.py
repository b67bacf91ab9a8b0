"""
Dashboard overview endpoints.

Endpoints:
- GET /dashboard/revenue - Monthly revenue chart (deliberately slow, see fetch_revenue)
- GET /dashboard/cards - Invoice/customer counts and paid/pending totals
- GET /dashboard/latest-invoices - Five most recent invoices
"""

import logging
from typing import Annotated

import asyncpg
from fastapi import APIRouter, Depends

from dashboard.db.client import DatabaseError, get_pool
from dashboard.routes.errors import database_error
from dashboard.services.dashboard_service import fetch_card_data, fetch_revenue
from dashboard.services.invoice_service import fetch_latest_invoices
from dashboard.schemas.dashboard import (
    CardDataResponse,
    LatestInvoicesResponse,
    RevenueEntry,
    RevenueResponse,
)
from dashboard.schemas.invoices import LatestInvoiceResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

Pool = Annotated[asyncpg.Pool, Depends(get_pool)]


@router.get("/revenue", response_model=RevenueResponse, summary="Revenue chart data")
async def get_revenue(pool: Pool) -> RevenueResponse:
    try:
        rows = await fetch_revenue(pool)
    except DatabaseError as e:
        raise database_error(e)

    return RevenueResponse(revenue=[RevenueEntry(**row) for row in rows])


@router.get("/cards", response_model=CardDataResponse, summary="Summary cards")
async def get_cards(pool: Pool) -> CardDataResponse:
    try:
        card_data = await fetch_card_data(pool)
    except DatabaseError as e:
        raise database_error(e)

    return CardDataResponse(**card_data)


@router.get(
    "/latest-invoices",
    response_model=LatestInvoicesResponse,
    summary="Latest invoices",
)
async def get_latest_invoices(pool: Pool) -> LatestInvoicesResponse:
    try:
        rows = await fetch_latest_invoices(pool)
    except DatabaseError as e:
        raise database_error(e)

    return LatestInvoicesResponse(invoices=[LatestInvoiceResponse(**row) for row in rows])
