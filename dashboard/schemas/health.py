"""
Health check endpoint schemas.

The health endpoint is public and returns a simple status indicator.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health.

    Only reports that the API process is up; it does not touch the database.
    """

    status: str = Field(
        default="ok",
        description="Health status of the API (always 'ok' if responding)",
        examples=["ok"]
    )
    service: str = Field(
        default="dashboard-backend",
        description="Service name",
        examples=["dashboard-backend"]
    )
