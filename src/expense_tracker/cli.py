#!/usr/bin/env python3
"""Command-line interface for expense-tracker."""

import argparse
import logging
import sys
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from expense_tracker.aggregation import ExpenseOverview, build_overview
from expense_tracker.config import (
    get_data_path,
    get_exchange_rate_api_key,
    get_preferred_currency,
    load_config,
    set_preferred_currency,
)
from expense_tracker.currency import (
    SUPPORTED_CURRENCIES,
    CurrencyConversionError,
    ExchangeRateClient,
    is_supported_currency,
)
from expense_tracker.formatting import format_amount, format_day
from expense_tracker.models import ZERO, Expense
from expense_tracker.reports import format_csv, write_csv, write_day_pdf
from expense_tracker.store import ExpenseNotFoundError, ExpenseStore, StoreDecodeError
from expense_tracker.utils import parse_amount, parse_date
from expense_tracker.validation import ExpenseValidationError, build_expense

logger = logging.getLogger(__name__)

SHORT_ID_LENGTH = 8


def _day_arg(value: str) -> date:
    """argparse type for calendar days."""
    parsed = parse_date(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="expense-tracker",
        description="Log personal expenses, review them by day and export reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  expense-tracker add Coffee 4.50 Food
  expense-tracker add Rent 1200 Housing --date 2024-01-02
  expense-tracker list --search food
  expense-tracker stats
  expense-tracker export-csv -o expenses.csv
  expense-tracker export-pdf 2024-01-02
  expense-tracker convert 100 --from INR --to USD
        """,
    )
    parser.add_argument("--config", type=Path, help="Path to config.json file")
    parser.add_argument("--data-file", type=Path, help="Path to the expense data file")
    parser.add_argument("--currency", help="Currency used to display amounts")
    parser.add_argument("--api-key", help="Exchange rate API access key")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    add = sub.add_parser("add", help="Record a new expense")
    add.add_argument("name")
    add.add_argument("amount")
    add.add_argument("category")
    add.add_argument("--date", type=_day_arg, help="Day of the expense (default: today)")

    edit = sub.add_parser("edit", help="Change an existing expense")
    edit.add_argument("id", help="Expense id or unique id prefix")
    edit.add_argument("--name")
    edit.add_argument("--amount")
    edit.add_argument("--category")
    edit.add_argument("--date", type=_day_arg)

    delete = sub.add_parser("delete", help="Delete an expense")
    delete.add_argument("id", help="Expense id or unique id prefix")

    list_cmd = sub.add_parser("list", help="Show expenses grouped by day")
    list_cmd.add_argument("-s", "--search", default="", help="Filter by name or category")

    stats = sub.add_parser("stats", help="Show summary statistics")
    stats.add_argument("-s", "--search", default="", help="Filter by name or category")

    show = sub.add_parser("show", help="Show all expenses on one day")
    show.add_argument("day", type=_day_arg)

    export_csv = sub.add_parser("export-csv", help="Export all expenses as CSV")
    export_csv.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")

    export_pdf = sub.add_parser("export-pdf", help="Export one day as a PDF report")
    export_pdf.add_argument("day", type=_day_arg)
    export_pdf.add_argument("-o", "--output", type=Path, help="Output PDF file")

    convert = sub.add_parser(
        "convert",
        help="Convert an amount between currencies",
        epilog=f"Supported currencies: {', '.join(SUPPORTED_CURRENCIES)}",
    )
    convert.add_argument("amount")
    convert.add_argument("--from", dest="from_currency", help="Source currency")
    convert.add_argument("--to", dest="to_currency", default="USD", help="Target currency")

    currency = sub.add_parser("currency", help="Show or set the preferred currency")
    currency.add_argument("code", nargs="?", help="Three-letter ISO 4217 code, e.g. INR")

    return parser


def _short_id(expense: Expense) -> str:
    return str(expense.id)[:SHORT_ID_LENGTH]


def _print_stats(overview: ExpenseOverview, currency_code: str) -> None:
    stats = overview.stats
    print(f"Total Spent: {format_amount(stats.total_amount, currency_code)}")
    print(f"Highest Expense: {format_amount(stats.max_amount, currency_code)}")
    print(f"Average Daily: {format_amount(stats.average_daily, currency_code)}")


def _print_days(overview: ExpenseOverview, currency_code: str, today: date) -> None:
    if not overview.days:
        print("No expenses yet.")
        return

    for bucket in overview.days:
        label = "expense" if bucket.count == 1 else "expenses"
        print(
            f"{format_day(bucket.day, today)}  ({bucket.count} {label})  "
            f"{format_amount(bucket.total, currency_code)}"
        )
        for e in bucket.items:
            print(f"  {_short_id(e)}  {e.name}  [{e.category}]  "
                  f"{format_amount(e.amount, currency_code)}")


def _cmd_add(args: argparse.Namespace, store: ExpenseStore, data_path: Path) -> int:
    when = datetime.combine(args.date, time()) if args.date else datetime.now()
    expense = build_expense(args.name, args.amount, args.category, when)
    store.add(expense)
    store.save(data_path)
    print(f"Added {expense.name} ({_short_id(expense)})")
    return 0


def _cmd_edit(args: argparse.Namespace, store: ExpenseStore, data_path: Path) -> int:
    current = store.get(store.resolve_id(args.id))
    when = (
        datetime.combine(args.date, current.date.time(), current.date.tzinfo)
        if args.date
        else current.date
    )
    edited = build_expense(
        args.name if args.name is not None else current.name,
        args.amount if args.amount is not None else str(current.amount),
        args.category if args.category is not None else current.category,
        when,
        expense_id=current.id,
    )
    store.replace(edited)
    store.save(data_path)
    print(f"Updated {edited.name} ({_short_id(edited)})")
    return 0


def _cmd_delete(args: argparse.Namespace, store: ExpenseStore, data_path: Path) -> int:
    removed = store.remove(store.resolve_id(args.id))
    store.save(data_path)
    print(f"Deleted {removed.name} ({_short_id(removed)})")
    return 0


def _cmd_show(args: argparse.Namespace, store: ExpenseStore, currency_code: str) -> int:
    today = date.today()
    expenses = store.on_day(args.day)
    print(format_day(args.day, today))
    if not expenses:
        print("No expenses on this day.")
        return 0

    for e in expenses:
        print(f"  {_short_id(e)}  {e.name}  [{e.category}]  "
              f"{format_amount(e.amount, currency_code)}")
    total = sum((e.amount for e in expenses), ZERO)
    print(f"Total: {format_amount(total, currency_code)}")
    return 0


def _cmd_convert(args: argparse.Namespace, config: dict[str, Any] | None) -> int:
    amount = parse_amount(args.amount)
    if amount is None:
        print("Error: Please enter a valid amount", file=sys.stderr)
        return 1

    from_currency = get_preferred_currency(config, args.from_currency)
    to_currency = args.to_currency.upper()
    for code in (from_currency, to_currency):
        if not is_supported_currency(code):
            print(f"Error: Unsupported currency: {code}", file=sys.stderr)
            return 1

    client = ExchangeRateClient(get_exchange_rate_api_key(config, args.api_key))
    converted = client.convert(from_currency, to_currency, amount)
    print(f"{converted:.2f} {to_currency}")
    return 0


def _cmd_currency(args: argparse.Namespace, config: dict[str, Any] | None) -> int:
    if not args.code:
        print(get_preferred_currency(config))
        return 0

    saved_to = set_preferred_currency(args.code, config, args.config)
    print(f"Preferred currency set to {args.code.upper()} in {saved_to}", file=sys.stderr)
    return 0


def run(args: argparse.Namespace) -> int:
    """Dispatch a parsed command."""
    config: dict[str, Any] | None = load_config(args.config)

    if args.command == "convert":
        return _cmd_convert(args, config)
    if args.command == "currency":
        return _cmd_currency(args, config)

    data_path = get_data_path(config, args.data_file)
    currency_code = get_preferred_currency(config, args.currency)
    store = ExpenseStore.load(data_path)

    if args.command == "add":
        return _cmd_add(args, store, data_path)
    if args.command == "edit":
        return _cmd_edit(args, store, data_path)
    if args.command == "delete":
        return _cmd_delete(args, store, data_path)
    if args.command == "show":
        return _cmd_show(args, store, currency_code)

    if args.command in ("list", "stats"):
        overview = build_overview(store.expenses, args.search)
        if args.command == "stats":
            _print_stats(overview, currency_code)
        else:
            _print_days(overview, currency_code, date.today())
        return 0

    if args.command == "export-csv":
        if args.output:
            write_csv(store.expenses, args.output)
            print(f"Wrote {len(store)} expenses to {args.output}", file=sys.stderr)
        else:
            sys.stdout.write(format_csv(store.expenses))
        return 0

    if args.command == "export-pdf":
        output = args.output or Path(f"expenses-{args.day.isoformat()}.pdf")
        expenses = store.on_day(args.day)
        write_day_pdf(expenses, args.day, output, currency_code)
        print(f"Wrote report for {args.day.isoformat()} to {output}", file=sys.stderr)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        return run(args)
    except (
        ExpenseValidationError,
        ExpenseNotFoundError,
        StoreDecodeError,
        CurrencyConversionError,
    ) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
