"""
Shared HTTP error mapping for the routers.
"""

from fastapi import HTTPException, status

from dashboard.db.client import DatabaseError


def database_error(e: DatabaseError) -> HTTPException:
    """Map a service-layer DatabaseError to a 500 with the operation label as details."""
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "database_error",
            "details": str(e)
        }
    )
