"""Stock ledger: owns the wine collection and the movement log."""

import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import date, datetime, timezone

from vinora.models import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    StockStats,
    Transaction,
    TransactionType,
    Wine,
    WineDraft,
    WineType,
)

logger = logging.getLogger(__name__)

ALL_TYPES = "All"


class LedgerValidationError(Exception):
    """Raised when a draft or movement fails a required-field or quantity check."""

    pass


class WineNotFoundError(Exception):
    """Raised when a movement references an unknown wine."""

    pass


class InsufficientStockError(Exception):
    """Raised when a movement asks for more bottles than are in stock."""

    def __init__(self, wine_id: str, available: int, requested: int) -> None:
        self.wine_id = wine_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Not enough bottles in stock. Available: {available}, Requested: {requested}"
        )


def _new_id() -> str:
    return uuid.uuid4().hex


def compute_stats(
    wines: Iterable[Wine],
    default_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> StockStats:
    """Compute aggregate statistics over a wine collection.

    All four wine types are always present in ``type_distribution``.
    """
    stats = StockStats()
    for wine in wines:
        stats.total_bottles += wine.stock
        stats.total_value += wine.stock * wine.price
        if wine.is_low_stock(default_threshold):
            stats.low_stock_count += 1
        stats.type_distribution[wine.wine_type] += 1
    return stats


def compute_alerts(
    wines: Iterable[Wine],
    default_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> list[Wine]:
    """Return the wines at or below their effective low-stock threshold."""
    return [wine for wine in wines if wine.is_low_stock(default_threshold)]


def filter_wines(
    wines: Iterable[Wine],
    type_filter: WineType | str = ALL_TYPES,
    search_text: str = "",
) -> list[Wine]:
    """Filter wines by type and case-insensitive text search.

    The search matches name, region, producer or grape variety. Accents are
    not folded, so "rose" does not match "Rosé".
    """
    needle = search_text.lower()
    results = []
    for wine in wines:
        if type_filter != ALL_TYPES and wine.wine_type != type_filter:
            continue
        haystacks = (wine.name, wine.region, wine.producer, wine.grape_variety)
        if needle and not any(needle in (field or "").lower() for field in haystacks):
            continue
        results.append(wine)
    return results


class StockLedger:
    """In-memory owner of the wine collection and the transaction log.

    Wines are kept newest first, as are transactions. An optional
    ``on_change`` callback receives the ledger after every mutation so a
    snapshot store can persist it.
    """

    def __init__(
        self,
        wines: Iterable[Wine] | None = None,
        transactions: Iterable[Transaction] | None = None,
        default_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        on_change: Callable[["StockLedger"], None] | None = None,
    ) -> None:
        self._wines: list[Wine] = list(wines or [])
        self._transactions: list[Transaction] = list(transactions or [])
        self.default_threshold = default_threshold
        self._on_change = on_change

    @property
    def wines(self) -> list[Wine]:
        return list(self._wines)

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._transactions)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self)

    def get_wine(self, wine_id: str) -> Wine | None:
        for wine in self._wines:
            if wine.id == wine_id:
                return wine
        return None

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def add_wine(self, draft: WineDraft) -> Wine:
        """Register a new wine reference at the front of the collection.

        Raises:
            LedgerValidationError: If name or region is blank.
        """
        if not draft.name.strip() or not draft.region.strip():
            raise LedgerValidationError("Wine name and region are required")

        wine = Wine(
            **draft.model_dump(),
            id=_new_id(),
            last_updated=datetime.now(timezone.utc),
        )
        self._wines.insert(0, wine)
        logger.info("Added wine %s (%s)", wine.id, wine.name)
        self._changed()
        return wine

    def delete_wine(self, wine_id: str) -> bool:
        """Remove a wine permanently. Unknown ids are ignored.

        Returns:
            True if a wine was removed.
        """
        remaining = [wine for wine in self._wines if wine.id != wine_id]
        if len(remaining) == len(self._wines):
            logger.debug("Delete ignored, no wine with id %s", wine_id)
            return False

        self._wines = remaining
        logger.info("Deleted wine %s", wine_id)
        self._changed()
        return True

    def apply_transaction(
        self,
        wine_id: str,
        transaction_type: TransactionType,
        quantity: int,
        transaction_date: date | None = None,
    ) -> Transaction:
        """Remove bottles from stock and record the movement.

        Nothing is mutated unless every check passes.

        Raises:
            LedgerValidationError: If quantity is not positive.
            WineNotFoundError: If no wine has ``wine_id``.
            InsufficientStockError: If quantity exceeds the current stock.
        """
        transaction_type = TransactionType(transaction_type)
        if quantity <= 0:
            raise LedgerValidationError("Quantity must be a positive integer")

        index = next(
            (i for i, wine in enumerate(self._wines) if wine.id == wine_id), None
        )
        if index is None:
            raise WineNotFoundError(f"Wine with ID {wine_id} not found")

        wine = self._wines[index]
        if quantity > wine.stock:
            logger.warning(
                "Rejected %s of %d for %s: only %d in stock",
                transaction_type.value,
                quantity,
                wine_id,
                wine.stock,
            )
            raise InsufficientStockError(wine_id, wine.stock, quantity)

        total_price = None
        if transaction_type == TransactionType.SALE:
            total_price = wine.price * quantity

        transaction = Transaction(
            id=_new_id(),
            wine_id=wine.id,
            wine_name=wine.name,
            transaction_type=transaction_type,
            quantity=quantity,
            transaction_date=transaction_date or date.today(),
            total_price=total_price,
        )

        self._wines[index] = wine.model_copy(
            update={
                "stock": wine.stock - quantity,
                "last_updated": datetime.now(timezone.utc),
            }
        )
        self._transactions.insert(0, transaction)
        logger.info(
            "Applied %s of %d bottle(s) to %s, %d left",
            transaction_type.value,
            quantity,
            wine.name,
            wine.stock - quantity,
        )
        self._changed()
        return transaction

    def sales_history(self) -> list[Transaction]:
        """Return sale movements only, newest first."""
        return [t for t in self._transactions if t.is_sale]

    def revenue(self) -> float:
        """Sum of the total price of every sale."""
        return sum(t.total_price or 0.0 for t in self.sales_history())

    def stats(self) -> StockStats:
        return compute_stats(self._wines, self.default_threshold)

    def alerts(self) -> list[Wine]:
        return compute_alerts(self._wines, self.default_threshold)

    def filter(self, type_filter: WineType | str = ALL_TYPES, search_text: str = "") -> list[Wine]:
        return filter_wines(self._wines, type_filter, search_text)
