"""JSON snapshot persistence for the stock ledger."""

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from vinora.models import Transaction, Wine
from vinora.services.ledger import StockLedger
from vinora.services.seed import seed_wines

logger = logging.getLogger(__name__)

_wines_adapter = TypeAdapter(list[Wine])
_transactions_adapter = TypeAdapter(list[Transaction])


class PersistenceCorruptError(Exception):
    """Raised when a snapshot file exists but cannot be read back."""

    pass


def _dump(adapter: TypeAdapter, items: list) -> str:
    return adapter.dump_json(items, indent=2).decode("utf-8")


def _load(adapter: TypeAdapter, path: Path) -> list:
    """Read a snapshot list from ``path``.

    Raises:
        FileNotFoundError: If the file does not exist.
        PersistenceCorruptError: If the file is unreadable or malformed.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise PersistenceCorruptError(f"Cannot read {path}: {e}") from e

    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        raise PersistenceCorruptError(f"Invalid snapshot in {path}: {e}") from e


def dump_wines(wines: list[Wine]) -> str:
    return _dump(_wines_adapter, wines)


def dump_transactions(transactions: list[Transaction]) -> str:
    return _dump(_transactions_adapter, transactions)


def parse_wines(raw: str) -> list[Wine]:
    return _wines_adapter.validate_json(raw)


def parse_transactions(raw: str) -> list[Transaction]:
    return _transactions_adapter.validate_json(raw)


class SnapshotStore:
    """Persist the wine collection and transaction log as two JSON files.

    Missing or corrupt files never stop startup: the wine collection falls
    back to the seed dataset (or an empty list when seeding is disabled) and
    the transaction log falls back to an empty list.
    """

    def __init__(
        self,
        wines_file: Path,
        transactions_file: Path,
        seed_on_empty: bool = True,
    ) -> None:
        self.wines_file = Path(wines_file)
        self.transactions_file = Path(transactions_file)
        self.seed_on_empty = seed_on_empty

    @classmethod
    def from_data_dir(cls, data_dir: Path, seed_on_empty: bool = True) -> "SnapshotStore":
        data_dir = Path(data_dir)
        return cls(
            wines_file=data_dir / "wines.json",
            transactions_file=data_dir / "transactions.json",
            seed_on_empty=seed_on_empty,
        )

    def _fallback_wines(self) -> list[Wine]:
        return seed_wines() if self.seed_on_empty else []

    def load_wines(self) -> list[Wine]:
        try:
            wines = _load(_wines_adapter, self.wines_file)
        except FileNotFoundError:
            logger.info("No wine snapshot at %s, starting from seed data", self.wines_file)
            return self._fallback_wines()
        except PersistenceCorruptError as e:
            logger.warning("Wine snapshot unusable, starting from seed data: %s", e)
            return self._fallback_wines()

        logger.info("Loaded %d wine(s) from %s", len(wines), self.wines_file)
        return wines

    def load_transactions(self) -> list[Transaction]:
        try:
            transactions = _load(_transactions_adapter, self.transactions_file)
        except FileNotFoundError:
            logger.info("No transaction snapshot at %s, starting empty", self.transactions_file)
            return []
        except PersistenceCorruptError as e:
            logger.warning("Transaction snapshot unusable, starting empty: %s", e)
            return []

        logger.info(
            "Loaded %d transaction(s) from %s", len(transactions), self.transactions_file
        )
        return transactions

    def save(self, ledger: StockLedger) -> None:
        """Write both collections. Last write wins."""
        self.wines_file.parent.mkdir(parents=True, exist_ok=True)
        self.transactions_file.parent.mkdir(parents=True, exist_ok=True)
        self.wines_file.write_text(dump_wines(ledger.wines), encoding="utf-8")
        self.transactions_file.write_text(
            dump_transactions(ledger.transactions), encoding="utf-8"
        )
        logger.debug(
            "Saved snapshot: %d wine(s), %d transaction(s)",
            len(ledger.wines),
            len(ledger.transactions),
        )

    def open_ledger(self, default_threshold: int = 6) -> StockLedger:
        """Build a ledger from the snapshot that saves back after every change."""
        return StockLedger(
            wines=self.load_wines(),
            transactions=self.load_transactions(),
            default_threshold=default_threshold,
            on_change=self.save,
        )
