"""Shared dependencies and service instances for the routers."""

from typing import Annotated

from fastapi import Depends

from vinora.database import get_ledger
from vinora.services.advisor import ClaudeAdvisorService, PairingBoard
from vinora.services.ledger import StockLedger

LedgerDep = Annotated[StockLedger, Depends(get_ledger)]

# Service dependencies
advisor_service = ClaudeAdvisorService()
pairing_board = PairingBoard(advisor_service)
