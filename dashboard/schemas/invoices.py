"""
Pydantic schemas for invoice endpoints.

Amounts:
- Requests carry `amount` in dollars; routes convert it to integer cents
  before it reaches the service layer.
- InvoiceTableRow.amount is raw cents (the table formats it client-side).
- LatestInvoiceResponse.amount is an already formatted currency string.
- InvoiceFormResponse.amount is dollars (cents / 100).
"""

import datetime
from typing import List, Literal

from pydantic import BaseModel, Field, field_validator

# Literal type for invoices.status
InvoiceStatus = Literal["pending", "paid"]


# --- Request models ---

class InvoiceAmountRequest(BaseModel):
    """Fields shared by the create and update bodies."""
    customer_id: str = Field(..., min_length=1, description="UUID of the customer")
    amount: float = Field(..., gt=0, description="Amount in dollars", examples=[157.95])
    status: InvoiceStatus = Field(..., description="Invoice status")

    @field_validator("amount")
    @classmethod
    def validate_at_least_one_cent(cls, value: float) -> float:
        """Reject amounts that would be stored as 0 cents (e.g. 0.004)."""
        if round(value * 100) < 1:
            raise ValueError("amount must be at least 0.01")
        return value


class InvoiceCreateRequest(InvoiceAmountRequest):
    """Request body for POST /invoices. The invoice date is set to today."""


class InvoiceUpdateRequest(InvoiceAmountRequest):
    """Request body for PUT /invoices/{invoice_id}. The invoice date is kept."""


# --- Response models ---

class LatestInvoiceResponse(BaseModel):
    """One row of the "latest invoices" card."""
    id: str
    name: str
    email: str
    image_url: str
    amount: str = Field(..., description="Formatted currency string", examples=["$1,234.56"])


class InvoiceTableRow(BaseModel):
    """One row of the paginated invoices table."""
    id: str
    amount: int = Field(..., description="Amount in cents")
    date: datetime.date
    status: InvoiceStatus
    name: str
    email: str
    image_url: str


class InvoiceListResponse(BaseModel):
    """Response for GET /invoices."""
    invoices: List[InvoiceTableRow]
    query: str
    page: int
    count: int = Field(..., description="Number of rows on this page")


class InvoicePagesResponse(BaseModel):
    """Response for GET /invoices/pages."""
    query: str
    total_pages: int = Field(..., ge=0)


class InvoiceFormResponse(BaseModel):
    """Response for GET /invoices/{invoice_id}, shaped for the edit form."""
    id: str
    customer_id: str
    amount: float = Field(..., description="Amount in dollars")
    status: InvoiceStatus


class InvoiceMutationResponse(BaseModel):
    """Response for create, update and delete."""
    status: Literal["CREATED", "UPDATED", "DELETED"]
    message: str
