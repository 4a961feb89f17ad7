"""API routers for Vinora."""

from vinora.routers import advisor, dashboard, transactions, wines

__all__ = ["advisor", "dashboard", "transactions", "wines"]
