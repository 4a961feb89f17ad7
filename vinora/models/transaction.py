"""Transaction model for tracking stock movements."""

import enum
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TransactionType(str, enum.Enum):
    """Type of stock movement. Every movement removes bottles."""

    SALE = "vente"
    LOSS = "casse/perte"
    EXPIRY = "peremption"
    TASTING = "dégustation"


class Transaction(BaseModel):
    """Immutable record of a stock movement."""

    model_config = ConfigDict(frozen=True)

    id: str
    wine_id: str
    wine_name: str  # Denormalized at movement time, never re-synced
    transaction_type: TransactionType
    quantity: int = Field(..., ge=1)
    transaction_date: date
    total_price: Optional[float] = None

    @model_validator(mode="after")
    def check_total_price(self) -> "Transaction":
        """Sales carry a total price; other movements never do."""
        is_sale = self.transaction_type == TransactionType.SALE
        if is_sale and self.total_price is None:
            raise ValueError("a sale must carry a total_price")
        if not is_sale and self.total_price is not None:
            raise ValueError(f"{self.transaction_type.value} movements carry no total_price")
        return self

    @property
    def is_sale(self) -> bool:
        return self.transaction_type == TransactionType.SALE

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, type={self.transaction_type}, quantity={self.quantity})>"
