"""
Pydantic schemas for customer endpoints.
"""

from typing import List

from pydantic import BaseModel, Field


class CustomerField(BaseModel):
    """Minimal customer record used by the invoice form's customer picker."""
    id: str
    name: str


class CustomerListResponse(BaseModel):
    """Response for GET /customers."""
    customers: List[CustomerField]
    count: int


class CustomerTableRow(BaseModel):
    """
    One row of the customers table.

    total_pending and total_paid are formatted currency strings.
    """
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int = Field(..., ge=0)
    total_pending: str = Field(..., examples=["$0.00"])
    total_paid: str = Field(..., examples=["$1,234.56"])


class CustomerTableResponse(BaseModel):
    """Response for GET /customers/table."""
    customers: List[CustomerTableRow]
    query: str
    count: int
