"""
Pytest configuration for dashboard backend tests.

Sets up test environment and global fixtures.
"""
import os
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest

# Disable config validation during tests
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables (must happen before dashboard.config is imported)
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ["REVENUE_FETCH_DELAY_SECONDS"] = "0"


class FakeConnection:
    """Stands in for an asyncpg Connection; every query method is an AsyncMock."""

    def __init__(self):
        self.execute = AsyncMock(return_value="OK")
        self.fetch = AsyncMock(return_value=[])
        self.fetchrow = AsyncMock(return_value=None)
        self.fetchval = AsyncMock(return_value=None)


class FakePool:
    """
    Stands in for an asyncpg Pool.

    Counts checkouts and returns so tests can assert that every acquired
    connection went back to the pool. Set acquire_error to make checkout
    itself fail (e.g. connection refused).
    """

    def __init__(self, connection=None, acquire_error=None):
        self.connection = connection or FakeConnection()
        self.acquire_error = acquire_error
        self.acquired = 0
        self.released = 0

    @asynccontextmanager
    async def acquire(self):
        if self.acquire_error is not None:
            raise self.acquire_error
        self.acquired += 1
        try:
            yield self.connection
        finally:
            self.released += 1

    @property
    def in_use(self) -> int:
        return self.acquired - self.released


@pytest.fixture
def connection():
    """Fake connection shared by the fake pool."""
    return FakeConnection()


@pytest.fixture
def pool(connection):
    """Fake pool handing out the `connection` fixture."""
    return FakePool(connection=connection)


@pytest.fixture
def refused_pool():
    """Fake pool whose checkout fails as if the database were unreachable."""
    return FakePool(acquire_error=ConnectionRefusedError("[Errno 111] Connection refused"))
