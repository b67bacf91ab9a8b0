"""
Tests for the invoice persistence service.

Covers SQL parameters, row mapping (cents -> dollars, currency strings),
pagination arithmetic and the failure contract: every failure releases the
connection and raises a labeled DatabaseError.
"""

import uuid
from datetime import date

import asyncpg
import pytest

from dashboard.db.client import DatabaseError
from dashboard.services.invoice_service import (
    delete_invoice,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
    insert_invoice,
    update_invoice,
)
from dashboard.utils.constants import ITEMS_PER_PAGE


class TestInsertInvoice:
    """Test invoice creation."""

    @pytest.mark.asyncio
    async def test_insert_binds_values_in_order(self, pool, connection):
        await insert_invoice(pool, "cust-1", 15795, "pending", "2024-06-01")

        sql, *args = connection.execute.call_args.args
        assert "INSERT INTO invoices (customer_id, amount, status, date)" in sql
        assert args == ["cust-1", 15795, "pending", date(2024, 6, 1)]
        assert pool.acquired == 1
        assert pool.in_use == 0

    @pytest.mark.asyncio
    async def test_insert_accepts_date_object(self, pool, connection):
        await insert_invoice(pool, "cust-1", 100, "paid", date(2023, 12, 6))

        assert connection.execute.call_args.args[4] == date(2023, 12, 6)

    @pytest.mark.asyncio
    async def test_insert_failure_raises_labeled_error(self, pool, connection):
        connection.execute.side_effect = asyncpg.PostgresError("insert or update violates foreign key constraint")

        with pytest.raises(DatabaseError, match="Failed to insert the invoice.") as exc_info:
            await insert_invoice(pool, "missing-customer", 100, "paid", "2024-01-01")

        assert isinstance(exc_info.value.__cause__, asyncpg.PostgresError)
        assert pool.in_use == 0

    @pytest.mark.asyncio
    async def test_insert_rejects_malformed_date(self, pool, connection):
        with pytest.raises(DatabaseError, match="Failed to insert the invoice."):
            await insert_invoice(pool, "cust-1", 100, "paid", "not-a-date")

        connection.execute.assert_not_called()


class TestUpdateInvoice:
    """Test invoice updates."""

    @pytest.mark.asyncio
    async def test_update_sets_customer_amount_status_by_id(self, pool, connection):
        await update_invoice(pool, "cust-2", 4200, "paid", "inv-1")

        sql, *args = connection.execute.call_args.args
        assert "SET customer_id = $1, amount = $2, status = $3" in sql
        assert "WHERE id = $4" in sql
        assert args == ["cust-2", 4200, "paid", "inv-1"]
        assert pool.in_use == 0

    @pytest.mark.asyncio
    async def test_update_failure_raises_labeled_error(self, pool, connection):
        connection.execute.side_effect = ConnectionResetError("connection lost")

        with pytest.raises(DatabaseError, match="Failed to edit the invoice."):
            await update_invoice(pool, "cust-2", 4200, "paid", "inv-1")

        assert pool.in_use == 0


class TestDeleteInvoice:
    """Test invoice deletion."""

    @pytest.mark.asyncio
    async def test_delete_by_id(self, pool, connection):
        await delete_invoice(pool, "inv-1")

        connection.execute.assert_awaited_once_with("DELETE FROM invoices WHERE id = $1", "inv-1")
        assert pool.in_use == 0

    @pytest.mark.asyncio
    async def test_delete_with_unreachable_database(self, refused_pool):
        with pytest.raises(DatabaseError, match="Failed to delete the invoice."):
            await delete_invoice(refused_pool, "inv-1")

        assert refused_pool.in_use == 0


class TestFetchLatestInvoices:
    """Test the latest invoices card."""

    @pytest.mark.asyncio
    async def test_amounts_are_formatted_as_currency(self, pool, connection):
        invoice_id = uuid.uuid4()
        connection.fetch.return_value = [
            {
                "amount": 15795,
                "name": "Delba de Oliveira",
                "image_url": "/customers/delba-de-oliveira.png",
                "email": "delba@oliveira.com",
                "id": invoice_id,
            }
        ]

        result = await fetch_latest_invoices(pool)

        assert result == [
            {
                "amount": "$157.95",
                "name": "Delba de Oliveira",
                "image_url": "/customers/delba-de-oliveira.png",
                "email": "delba@oliveira.com",
                "id": str(invoice_id),
            }
        ]
        sql, limit = connection.fetch.call_args.args
        assert "ORDER BY invoices.date DESC" in sql
        assert limit == 5

    @pytest.mark.asyncio
    async def test_failure_raises_labeled_error(self, pool, connection):
        connection.fetch.side_effect = asyncpg.PostgresError("relation \"invoices\" does not exist")

        with pytest.raises(DatabaseError, match="Failed to fetch the latest invoices."):
            await fetch_latest_invoices(pool)

        assert pool.in_use == 0


class TestFetchFilteredInvoices:
    """Test the searchable invoices table."""

    @pytest.mark.asyncio
    async def test_first_page_uses_zero_offset(self, pool, connection):
        await fetch_filtered_invoices(pool, "lee", 1)

        _, pattern, limit, offset = connection.fetch.call_args.args
        assert pattern == "%lee%"
        assert limit == ITEMS_PER_PAGE
        assert offset == 0

    @pytest.mark.asyncio
    async def test_offset_follows_page_number(self, pool, connection):
        await fetch_filtered_invoices(pool, "", 3)

        _, pattern, limit, offset = connection.fetch.call_args.args
        assert pattern == "%%"
        assert offset == 12

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_on_every_column(self, pool, connection):
        await fetch_filtered_invoices(pool, "PAID", 1)

        sql, pattern, *_ = connection.fetch.call_args.args
        assert pattern == "%PAID%"
        assert "invoices.status ILIKE $1" in sql
        assert "customers.name ILIKE $1" in sql
        assert "customers.email ILIKE $1" in sql
        # non-text columns are matched through their text form
        assert "invoices.amount::text ILIKE $1" in sql
        assert "invoices.date::text ILIKE $1" in sql
        assert "ORDER BY invoices.date DESC" in sql

    @pytest.mark.asyncio
    async def test_rows_are_returned_as_dicts(self, pool, connection):
        connection.fetch.return_value = [
            {
                "id": "inv-1",
                "amount": 500,
                "date": date(2024, 1, 2),
                "status": "paid",
                "name": "Lee Robinson",
                "email": "lee@robinson.com",
                "image_url": "/customers/lee-robinson.png",
            }
        ]

        result = await fetch_filtered_invoices(pool, "50", 1)

        assert len(result) == 1
        assert result[0]["amount"] == 500
        assert result[0]["status"] == "paid"

    @pytest.mark.asyncio
    async def test_failure_is_not_an_empty_result(self, pool, connection):
        connection.fetch.side_effect = OSError("network unreachable")

        with pytest.raises(DatabaseError, match="Failed to fetch invoices."):
            await fetch_filtered_invoices(pool, "", 1)

        assert pool.in_use == 0


class TestFetchInvoicesPages:
    """Test page count computation."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "match_count,expected_pages",
        [(0, 0), (1, 1), (6, 1), (7, 2), (12, 2), (13, 3)],
    )
    async def test_pages_are_ceiling_of_count_over_page_size(
        self, pool, connection, match_count, expected_pages
    ):
        connection.fetchval.return_value = match_count

        assert await fetch_invoices_pages(pool, "") == expected_pages

    @pytest.mark.asyncio
    async def test_count_uses_same_search_condition(self, pool, connection):
        connection.fetchval.return_value = 0

        await fetch_invoices_pages(pool, "Evil")

        sql, pattern = connection.fetchval.call_args.args
        assert "SELECT COUNT(*)" in sql
        assert "invoices.amount::text ILIKE $1" in sql
        assert pattern == "%Evil%"

    @pytest.mark.asyncio
    async def test_failure_raises_labeled_error(self, refused_pool):
        with pytest.raises(DatabaseError, match="Failed to fetch total number of invoices."):
            await fetch_invoices_pages(refused_pool, "")


class TestFetchInvoiceById:
    """Test single-invoice lookup for the edit form."""

    @pytest.mark.asyncio
    async def test_amount_is_converted_to_dollars(self, pool, connection):
        connection.fetchrow.return_value = {
            "id": "inv-1",
            "customer_id": "cust-1",
            "amount": 15795,
            "status": "pending",
        }

        invoice = await fetch_invoice_by_id(pool, "inv-1")

        assert invoice == {
            "id": "inv-1",
            "customer_id": "cust-1",
            "amount": 157.95,
            "status": "pending",
        }
        assert connection.fetchrow.call_args.args[1] == "inv-1"
        assert pool.in_use == 0

    @pytest.mark.asyncio
    async def test_missing_invoice_returns_none(self, pool, connection):
        connection.fetchrow.return_value = None

        assert await fetch_invoice_by_id(pool, "does-not-exist") is None

    @pytest.mark.asyncio
    async def test_failure_raises_labeled_error(self, pool, connection):
        connection.fetchrow.side_effect = asyncpg.PostgresError("invalid input syntax for type uuid")

        with pytest.raises(DatabaseError, match="Failed to fetch invoice."):
            await fetch_invoice_by_id(pool, "not-a-uuid")

        assert pool.in_use == 0
