"""Pydantic schemas for dashboard figures."""

from pydantic import BaseModel

from vinora.models import WineType


class StatsResponse(BaseModel):
    """Aggregate inventory figures."""

    wine_count: int
    total_bottles: int
    total_value: float
    low_stock_count: int
    type_distribution: dict[WineType, int]


class RevenueResponse(BaseModel):
    """Sales turnover."""

    sale_count: int
    bottles_sold: int
    revenue: float
