"""Inventory command line for Vinora.

Commands:
    list      List wines, optionally filtered by type or search text
    add       Register a new wine reference
    delete    Permanently delete a wine reference
    move      Record a sale, loss, expiry or tasting
    sales     Show the sales history and revenue
    stats     Show inventory statistics
    alerts    List wines at or below their low-stock threshold
    describe  Generate a sommelier description for a wine
    pairings  Suggest food pairings for a wine
    analyze   Ask the advisor for restock advice
"""

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from vinora.config import settings
from vinora.database import open_store
from vinora.models import DEFAULT_LOW_STOCK_THRESHOLD, TransactionType, Wine, WineDraft, WineType
from vinora.services.advisor import ClaudeAdvisorService
from vinora.services.ledger import (
    ALL_TYPES,
    InsufficientStockError,
    LedgerValidationError,
    StockLedger,
    WineNotFoundError,
)


def open_ledger(data_dir: Path | None = None) -> StockLedger:
    """Load the ledger from the snapshot directory, saving after each change."""
    return open_store(data_dir).open_ledger(default_threshold=settings.default_low_stock_threshold)


def format_wine(wine: Wine, default_threshold: int) -> str:
    flag = " [LOW]" if wine.is_low_stock(default_threshold) else ""
    vintage = wine.vintage or "NV"
    return (
        f"{wine.id}  {wine.name} {vintage} ({wine.wine_type.value}, {wine.region})"
        f"  {wine.stock} btl @ {wine.price:.2f}€{flag}"
    )


def list_wines(ledger: StockLedger, wine_type: str = ALL_TYPES, search: str = "") -> None:
    """Print the filtered inventory."""
    wines = ledger.filter(wine_type, search)
    if not wines:
        print("No wines found.")
        return
    for wine in wines:
        print(format_wine(wine, ledger.default_threshold))


def add_wine(ledger: StockLedger, draft: WineDraft) -> Wine:
    """Register a wine and print its new ID."""
    try:
        wine = ledger.add_wine(draft)
    except LedgerValidationError as e:
        print(f"Error: {e}.")
        sys.exit(1)
    print(f"Wine '{wine.name}' added with ID {wine.id}.")
    return wine


def delete_wine(ledger: StockLedger, wine_id: str, force: bool = False) -> None:
    """Delete a wine after confirmation."""
    wine = ledger.get_wine(wine_id)
    if not wine:
        print(f"Wine '{wine_id}' not found, nothing to delete.")
        return

    if not force:
        confirm = input(f"Permanently delete '{wine.name}'? [y/N]: ")
        if confirm.lower() != "y":
            print("Aborted.")
            return

    ledger.delete_wine(wine_id)
    print(f"Wine '{wine.name}' has been deleted.")


def record_movement(
    ledger: StockLedger,
    wine_id: str,
    transaction_type: TransactionType,
    quantity: int,
    transaction_date: date | None = None,
) -> None:
    """Apply a stock movement and print the outcome."""
    try:
        transaction = ledger.apply_transaction(wine_id, transaction_type, quantity, transaction_date)
    except (LedgerValidationError, WineNotFoundError, InsufficientStockError) as e:
        print(f"Error: {e}.")
        sys.exit(1)

    line = f"Recorded {transaction.transaction_type.value} of {transaction.quantity} x {transaction.wine_name}"
    if transaction.total_price is not None:
        line += f" for {transaction.total_price:.2f}€"
    print(line + ".")


def show_sales(ledger: StockLedger) -> None:
    """Print the sales history followed by total revenue."""
    sales = ledger.sales_history()
    for t in sales:
        print(f"{t.transaction_date.isoformat()}  {t.wine_name}  x{t.quantity}  {t.total_price:.2f}€")
    print(f"{len(sales)} sale(s), revenue {ledger.revenue():.2f}€")


def show_stats(ledger: StockLedger) -> None:
    """Print the dashboard figures."""
    stats = ledger.stats()
    print(f"References:   {len(ledger.wines)}")
    print(f"Bottles:      {stats.total_bottles}")
    print(f"Stock value:  {stats.total_value:.2f}€")
    print(f"Low stock:    {stats.low_stock_count}")
    for wine_type, count in stats.type_distribution.items():
        print(f"  {wine_type.value:<14}{count}")


def show_alerts(ledger: StockLedger) -> None:
    """Print wines that need restocking."""
    alerts = ledger.alerts()
    if not alerts:
        print("No stock alerts. Every wine is above its threshold.")
        return
    for wine in alerts:
        print(format_wine(wine, ledger.default_threshold))


def _find_wine_or_exit(ledger: StockLedger, wine_id: str) -> Wine:
    wine = ledger.get_wine(wine_id)
    if not wine:
        print(f"Error: Wine '{wine_id}' not found.")
        sys.exit(1)
    return wine


async def describe_wine(ledger: StockLedger, advisor: ClaudeAdvisorService, wine_id: str) -> None:
    wine = _find_wine_or_exit(ledger, wine_id)
    print(await advisor.generate_description(wine))


async def suggest_pairings(ledger: StockLedger, advisor: ClaudeAdvisorService, wine_id: str) -> None:
    wine = _find_wine_or_exit(ledger, wine_id)
    for pairing in await advisor.suggest_pairings(wine):
        print(f"- {pairing}")


async def analyze_stock(ledger: StockLedger, advisor: ClaudeAdvisorService) -> None:
    print(await advisor.analyze_stock(ledger.wines))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vinora",
        description="Wine stock and sales tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--data-dir", type=Path, help="Snapshot directory (default from config)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    list_parser = subparsers.add_parser("list", help="List wines")
    list_parser.add_argument(
        "--type", "-t",
        dest="wine_type",
        default=ALL_TYPES,
        choices=[ALL_TYPES] + [t.value for t in WineType],
    )
    list_parser.add_argument("--search", "-s", default="", help="Search name, region, producer or grape")

    add_parser = subparsers.add_parser("add", help="Register a new wine")
    add_parser.add_argument("name")
    add_parser.add_argument("--region", required=True)
    add_parser.add_argument("--producer", default="")
    add_parser.add_argument("--vintage", type=int)
    add_parser.add_argument(
        "--type", "-t",
        dest="wine_type",
        default=WineType.ROUGE.value,
        choices=[t.value for t in WineType],
    )
    add_parser.add_argument("--grape", default="")
    add_parser.add_argument("--country", default="France")
    add_parser.add_argument("--price", type=float, default=0.0)
    add_parser.add_argument("--stock", type=int, default=0)
    add_parser.add_argument("--threshold", type=int, default=DEFAULT_LOW_STOCK_THRESHOLD)
    add_parser.add_argument("--description")

    delete_parser = subparsers.add_parser("delete", help="Permanently delete a wine")
    delete_parser.add_argument("wine_id")
    delete_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    move_parser = subparsers.add_parser("move", help="Record a stock movement")
    move_parser.add_argument("wine_id")
    move_parser.add_argument("movement", choices=[t.value for t in TransactionType])
    move_parser.add_argument("quantity", type=int)
    move_parser.add_argument("--date", type=date.fromisoformat, help="Operation date (YYYY-MM-DD)")

    subparsers.add_parser("sales", help="Show sales history")
    subparsers.add_parser("stats", help="Show inventory statistics")
    subparsers.add_parser("alerts", help="List low-stock wines")

    describe_parser = subparsers.add_parser("describe", help="Generate a wine description")
    describe_parser.add_argument("wine_id")

    pairings_parser = subparsers.add_parser("pairings", help="Suggest food pairings")
    pairings_parser.add_argument("wine_id")

    subparsers.add_parser("analyze", help="Ask for restock advice")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ledger = open_ledger(args.data_dir)
    advisor = ClaudeAdvisorService()

    try:
        if args.command == "list":
            list_wines(ledger, args.wine_type, args.search)

        elif args.command == "add":
            try:
                draft = WineDraft(
                    name=args.name,
                    producer=args.producer,
                    vintage=args.vintage,
                    wine_type=WineType(args.wine_type),
                    grape_variety=args.grape,
                    region=args.region,
                    country=args.country,
                    price=args.price,
                    stock=args.stock,
                    low_stock_threshold=args.threshold,
                    description=args.description,
                )
            except ValidationError as e:
                print(f"Error: {e}")
                return 1
            add_wine(ledger, draft)

        elif args.command == "delete":
            delete_wine(ledger, args.wine_id, args.yes)

        elif args.command == "move":
            record_movement(
                ledger,
                args.wine_id,
                TransactionType(args.movement),
                args.quantity,
                args.date,
            )

        elif args.command == "sales":
            show_sales(ledger)

        elif args.command == "stats":
            show_stats(ledger)

        elif args.command == "alerts":
            show_alerts(ledger)

        elif args.command == "describe":
            asyncio.run(describe_wine(ledger, advisor, args.wine_id))

        elif args.command == "pairings":
            asyncio.run(suggest_pairings(ledger, advisor, args.wine_id))

        elif args.command == "analyze":
            asyncio.run(analyze_stock(ledger, advisor))

    except KeyboardInterrupt:
        print("\nAborted.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
