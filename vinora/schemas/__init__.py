"""Pydantic schemas for the Vinora API."""

from vinora.schemas.advisor import (
    AnalysisResponse,
    DescriptionRequest,
    DescriptionResponse,
    PairingsResponse,
)
from vinora.schemas.dashboard import RevenueResponse, StatsResponse
from vinora.schemas.transaction import TransactionCreate, TransactionResponse
from vinora.schemas.wine import WineCreate, WineResponse

__all__ = [
    "AnalysisResponse",
    "DescriptionRequest",
    "DescriptionResponse",
    "PairingsResponse",
    "RevenueResponse",
    "StatsResponse",
    "TransactionCreate",
    "TransactionResponse",
    "WineCreate",
    "WineResponse",
]
