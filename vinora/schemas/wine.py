"""Pydantic schemas for the wine API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from vinora.models import DEFAULT_LOW_STOCK_THRESHOLD, Wine, WineDraft, WineType


class WineBase(BaseModel):
    """Base wine schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    producer: str = Field("", max_length=255)
    vintage: int | None = Field(None, ge=1900, le=2100)
    wine_type: WineType = WineType.ROUGE
    grape_variety: str = Field("", max_length=255)
    region: str = Field(..., min_length=1, max_length=255)
    country: str = Field("France", max_length=255)
    price: float = Field(0.0, ge=0)
    low_stock_threshold: int = Field(DEFAULT_LOW_STOCK_THRESHOLD, ge=0)
    description: str | None = Field(None, max_length=2000)


class WineCreate(WineBase):
    """Schema for registering a wine with its opening stock."""

    stock: int = Field(0, ge=0)

    def to_draft(self) -> WineDraft:
        return WineDraft(**self.model_dump())


class WineResponse(BaseModel):
    """Wine as returned by the API.

    Carries no input limits: it must render any wine the ledger holds,
    including ones added from the command line or loaded from a snapshot.
    """

    id: str
    name: str
    producer: str
    vintage: int | None
    wine_type: WineType
    grape_variety: str
    region: str
    country: str
    price: float
    stock: int
    low_stock_threshold: int
    description: str | None
    last_updated: datetime
    low_stock: bool = False

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_wine(cls, wine: Wine, default_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> "WineResponse":
        return cls(
            **wine.model_dump(),
            low_stock=wine.is_low_stock(default_threshold),
        )
