"""Services for Vinora."""

from vinora.services.advisor import ClaudeAdvisorService, PairingBoard
from vinora.services.ledger import StockLedger
from vinora.services.storage import SnapshotStore

__all__ = ["ClaudeAdvisorService", "PairingBoard", "SnapshotStore", "StockLedger"]
