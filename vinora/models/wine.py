"""Wine catalog model."""

import enum
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LOW_STOCK_THRESHOLD = 6


class WineType(str, enum.Enum):
    """Closed set of wine types."""

    ROUGE = "Rouge"
    BLANC = "Blanc"
    ROSE = "Rosé"
    EFFERVESCENT = "Effervescent"


class WineDraft(BaseModel):
    """A wine reference before the ledger assigns its identity."""

    name: str = ""
    producer: str = ""
    vintage: Optional[int] = None
    wine_type: WineType = WineType.ROUGE
    grape_variety: str = ""
    region: str = ""
    country: str = "France"
    price: float = Field(default=0.0, ge=0)
    stock: int = Field(default=0, ge=0)
    low_stock_threshold: int = Field(default=DEFAULT_LOW_STOCK_THRESHOLD, ge=0)
    description: Optional[str] = None


class Wine(WineDraft):
    """Wine reference held by the stock ledger."""

    model_config = ConfigDict(frozen=True)

    id: str
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def effective_threshold(self, default: int = DEFAULT_LOW_STOCK_THRESHOLD) -> int:
        """Return the alert threshold, falling back to ``default`` when unset or zero."""
        return self.low_stock_threshold or default

    def is_low_stock(self, default: int = DEFAULT_LOW_STOCK_THRESHOLD) -> bool:
        return self.stock <= self.effective_threshold(default)

    def __repr__(self) -> str:
        return f"<Wine(id={self.id}, name={self.name}, vintage={self.vintage})>"
