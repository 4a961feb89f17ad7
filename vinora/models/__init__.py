"""Domain models for Vinora."""

from vinora.models.stats import StockStats
from vinora.models.transaction import Transaction, TransactionType
from vinora.models.wine import DEFAULT_LOW_STOCK_THRESHOLD, Wine, WineDraft, WineType

__all__ = [
    "DEFAULT_LOW_STOCK_THRESHOLD",
    "StockStats",
    "Transaction",
    "TransactionType",
    "Wine",
    "WineDraft",
    "WineType",
]
