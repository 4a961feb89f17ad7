"""Advisor endpoints: generated descriptions, pairings and stock advice."""

from fastapi import APIRouter, HTTPException, status

from vinora.schemas.advisor import (
    AnalysisResponse,
    DescriptionRequest,
    DescriptionResponse,
    PairingsResponse,
)

from ._common import LedgerDep, advisor_service, pairing_board

router = APIRouter()


@router.post("/description", response_model=DescriptionResponse)
async def generate_description(draft: DescriptionRequest) -> DescriptionResponse:
    """Generate a sommelier description for a wine being entered."""
    if not draft.name.strip() or not draft.region.strip():
        raise HTTPException(
            status_code=422,
            detail="Fill in the wine name and region first",
        )
    description = await advisor_service.generate_description(draft)
    return DescriptionResponse(description=description)


@router.post("/wines/{wine_id}/pairings", response_model=PairingsResponse)
async def toggle_pairings(wine_id: str, ledger: LedgerDep) -> PairingsResponse:
    """Fetch food pairings for a wine, or toggle them once fetched."""
    wine = ledger.get_wine(wine_id)
    if not wine:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Wine with ID {wine_id} not found",
        )
    pairings, visible = await pairing_board.toggle(wine)
    return PairingsResponse(wine_id=wine_id, pairings=pairings, visible=visible)


@router.post("/analysis", response_model=AnalysisResponse)
async def analyze_stock(ledger: LedgerDep) -> AnalysisResponse:
    """Ask for restock and sales advice on the current inventory."""
    analysis = await advisor_service.analyze_stock(ledger.wines)
    return AnalysisResponse(analysis=analysis)
