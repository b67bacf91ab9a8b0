"""
Database access layer for the dashboard backend.

Includes:
- The process-wide asyncpg pool (init_pool / get_pool / close_pool)
- DatabaseError, the single failure type raised by the service layer
- record_to_dict for mapping asyncpg Records

Table definitions live in sql/schema.sql; this package never creates or
migrates tables.
"""

from .client import DatabaseError, close_pool, get_pool, init_pool, record_to_dict

__all__ = ["DatabaseError", "close_pool", "get_pool", "init_pool", "record_to_dict"]
