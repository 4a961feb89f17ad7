"""Wine inventory endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Query, Response, status

from vinora.models import WineType
from vinora.schemas.wine import WineCreate, WineResponse
from vinora.services.ledger import ALL_TYPES, LedgerValidationError

from ._common import LedgerDep, pairing_board

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[WineResponse])
async def list_wines(
    ledger: LedgerDep,
    wine_type: str = Query(ALL_TYPES, alias="type"),
    q: str = "",
) -> list[WineResponse]:
    """List the inventory, optionally filtered by type and search text."""
    if wine_type != ALL_TYPES:
        try:
            wine_type = WineType(wine_type)
        except ValueError:
            raise HTTPException(
                status_code=422,
                detail=f"Unknown wine type: {wine_type}",
            )

    wines = ledger.filter(wine_type, q)
    return [WineResponse.from_wine(wine, ledger.default_threshold) for wine in wines]


@router.post("", response_model=WineResponse, status_code=status.HTTP_201_CREATED)
async def create_wine(wine_in: WineCreate, ledger: LedgerDep) -> WineResponse:
    """Register a new wine reference."""
    try:
        wine = ledger.add_wine(wine_in.to_draft())
    except LedgerValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        )
    return WineResponse.from_wine(wine, ledger.default_threshold)


@router.get("/{wine_id}", response_model=WineResponse)
async def get_wine(wine_id: str, ledger: LedgerDep) -> WineResponse:
    """Get a single wine by ID."""
    wine = ledger.get_wine(wine_id)
    if not wine:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Wine with ID {wine_id} not found",
        )
    return WineResponse.from_wine(wine, ledger.default_threshold)


@router.delete("/{wine_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_wine(wine_id: str, ledger: LedgerDep, confirm: bool = False) -> Response:
    """Permanently delete a wine reference.

    Requires ``confirm=true``. Deleting an unknown ID succeeds silently.
    """
    if not confirm:
        logger.debug("Delete of %s refused without confirmation", wine_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deletion is permanent; repeat the request with confirm=true",
        )

    if ledger.delete_wine(wine_id):
        pairing_board.forget(wine_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
