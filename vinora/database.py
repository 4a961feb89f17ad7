"""Ledger lifecycle: load the snapshot at startup and hand out the ledger."""

from pathlib import Path

from vinora.config import settings
from vinora.services.ledger import StockLedger
from vinora.services.storage import SnapshotStore

# Global store and ledger references
store: SnapshotStore | None = None
ledger: StockLedger | None = None


def open_store(
    data_dir: Path | None = None,
    seed_on_empty: bool | None = None,
) -> SnapshotStore:
    """Build the snapshot store for ``data_dir`` or the configured snapshot files."""
    if seed_on_empty is None:
        seed_on_empty = settings.seed_on_empty
    if data_dir is not None:
        return SnapshotStore.from_data_dir(data_dir, seed_on_empty=seed_on_empty)
    return SnapshotStore(
        wines_file=settings.wines_file,
        transactions_file=settings.transactions_file,
        seed_on_empty=seed_on_empty,
    )


def init_ledger(
    data_dir: Path | None = None,
    seed_on_empty: bool | None = None,
) -> StockLedger:
    """Load the ledger from the snapshot files.

    Args:
        data_dir: Optional snapshot directory. Defaults to settings.
        seed_on_empty: Optional override for seeding a missing wine snapshot.
    """
    global store, ledger

    store = open_store(data_dir, seed_on_empty)
    ledger = store.open_ledger(default_threshold=settings.default_low_stock_threshold)
    return ledger


def close_ledger() -> None:
    """Write a final snapshot and drop the global references."""
    global store, ledger

    if store is not None and ledger is not None:
        store.save(ledger)
    store = None
    ledger = None


def get_ledger() -> StockLedger:
    """Get the current ledger instance.

    Raises:
        RuntimeError: If the ledger is not initialized.
    """
    if ledger is None:
        raise RuntimeError("Ledger not initialized. Call init_ledger() first.")
    return ledger
