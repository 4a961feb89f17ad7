"""Pydantic schemas for stock movements."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from vinora.models import TransactionType


class TransactionCreate(BaseModel):
    """Schema for applying a stock movement."""

    wine_id: str = Field(..., min_length=1)
    transaction_type: TransactionType = TransactionType.SALE
    quantity: int = Field(..., ge=1)
    transaction_date: date | None = None


class TransactionResponse(BaseModel):
    """Schema for transaction response."""

    id: str
    wine_id: str
    wine_name: str
    transaction_type: TransactionType
    quantity: int
    transaction_date: date
    total_price: float | None = None

    model_config = ConfigDict(from_attributes=True)
