"""Pydantic schemas for advisor endpoints."""

from pydantic import BaseModel

from vinora.models import WineDraft


class DescriptionRequest(WineDraft):
    """A wine draft to describe. Name and region are required."""

    pass


class DescriptionResponse(BaseModel):
    description: str


class PairingsResponse(BaseModel):
    wine_id: str
    pairings: list[str]
    visible: bool


class AnalysisResponse(BaseModel):
    analysis: str
