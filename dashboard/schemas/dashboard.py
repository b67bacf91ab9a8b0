"""
Pydantic schemas for the dashboard overview endpoints.
"""

from typing import List

from pydantic import BaseModel, Field

from dashboard.schemas.invoices import LatestInvoiceResponse


class RevenueEntry(BaseModel):
    """One bar of the revenue chart."""
    month: str = Field(..., examples=["Jan"])
    revenue: int


class RevenueResponse(BaseModel):
    """Response for GET /dashboard/revenue."""
    revenue: List[RevenueEntry]


class CardDataResponse(BaseModel):
    """
    Response for GET /dashboard/cards.

    Totals are formatted currency strings; an empty store yields zeros.
    """
    number_of_customers: int = Field(..., ge=0)
    number_of_invoices: int = Field(..., ge=0)
    total_paid_invoices: str = Field(..., examples=["$0.00"])
    total_pending_invoices: str = Field(..., examples=["$0.00"])


class LatestInvoicesResponse(BaseModel):
    """Response for GET /dashboard/latest-invoices."""
    invoices: List[LatestInvoiceResponse]
