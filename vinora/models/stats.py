"""Derived inventory statistics."""

from pydantic import BaseModel, Field

from vinora.models.wine import WineType


def _empty_distribution() -> dict[WineType, int]:
    return {wine_type: 0 for wine_type in WineType}


class StockStats(BaseModel):
    """Aggregate figures over the wine collection. Never stored."""

    total_bottles: int = 0
    total_value: float = 0.0
    low_stock_count: int = 0
    type_distribution: dict[WineType, int] = Field(default_factory=_empty_distribution)
