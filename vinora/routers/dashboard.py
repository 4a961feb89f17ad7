"""Dashboard figures and low-stock alerts."""

from fastapi import APIRouter

from vinora.schemas.dashboard import RevenueResponse, StatsResponse
from vinora.schemas.wine import WineResponse

from ._common import LedgerDep

router = APIRouter()


@router.get("/stats", response_model=StatsResponse)
async def get_stats(ledger: LedgerDep) -> StatsResponse:
    """Get inventory statistics."""
    stats = ledger.stats()
    return StatsResponse(wine_count=len(ledger.wines), **stats.model_dump())


@router.get("/alerts", response_model=list[WineResponse])
async def get_alerts(ledger: LedgerDep) -> list[WineResponse]:
    """Wines at or below their low-stock threshold."""
    return [WineResponse.from_wine(wine, ledger.default_threshold) for wine in ledger.alerts()]


@router.get("/revenue", response_model=RevenueResponse)
async def get_revenue(ledger: LedgerDep) -> RevenueResponse:
    """Turnover from recorded sales."""
    sales = ledger.sales_history()
    return RevenueResponse(
        sale_count=len(sales),
        bottles_sold=sum(t.quantity for t in sales),
        revenue=ledger.revenue(),
    )
