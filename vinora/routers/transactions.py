"""Stock movement endpoints."""

import logging

from fastapi import APIRouter, HTTPException, status

from vinora.models import TransactionType
from vinora.schemas.transaction import TransactionCreate, TransactionResponse
from vinora.services.ledger import (
    InsufficientStockError,
    LedgerValidationError,
    WineNotFoundError,
)

from ._common import LedgerDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[TransactionResponse])
async def list_transactions(
    ledger: LedgerDep,
    skip: int = 0,
    limit: int = 100,
    transaction_type: TransactionType | None = None,
    wine_id: str | None = None,
) -> list[TransactionResponse]:
    """List movements, newest first, with optional filtering."""
    transactions = ledger.transactions
    if transaction_type:
        transactions = [t for t in transactions if t.transaction_type == transaction_type]
    if wine_id:
        transactions = [t for t in transactions if t.wine_id == wine_id]

    return [
        TransactionResponse.model_validate(t)
        for t in transactions[skip:skip + limit]
    ]


@router.get("/sales", response_model=list[TransactionResponse])
async def list_sales(ledger: LedgerDep) -> list[TransactionResponse]:
    """Sales history, newest first."""
    return [TransactionResponse.model_validate(t) for t in ledger.sales_history()]


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(transaction_id: str, ledger: LedgerDep) -> TransactionResponse:
    """Get a single transaction by ID."""
    transaction = ledger.get_transaction(transaction_id)
    if not transaction:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Transaction with ID {transaction_id} not found",
        )
    return TransactionResponse.model_validate(transaction)


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    movement: TransactionCreate,
    ledger: LedgerDep,
) -> TransactionResponse:
    """Apply a stock movement (sale, loss, expiry or tasting)."""
    try:
        transaction = ledger.apply_transaction(
            movement.wine_id,
            movement.transaction_type,
            movement.quantity,
            movement.transaction_date,
        )
    except WineNotFoundError as e:
        logger.debug("Movement for unknown wine: %s", e)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InsufficientStockError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except LedgerValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return TransactionResponse.model_validate(transaction)
