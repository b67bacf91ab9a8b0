"""
FastAPI routers for all API endpoints.

Each module defines a router for one area of the dashboard (invoices,
customers, overview cards). Routes only validate input, call one service
function and map its result into a response model.
"""
