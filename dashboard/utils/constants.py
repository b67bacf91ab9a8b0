"""
Shared constants for the dashboard data-access layer.
"""

# Rows per page for the invoices table (offset = (page - 1) * ITEMS_PER_PAGE)
ITEMS_PER_PAGE = 6

# Number of rows shown in the "latest invoices" card
LATEST_INVOICES_LIMIT = 5