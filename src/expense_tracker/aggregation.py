"""Day grouping and summary statistics for expenses."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from expense_tracker.filtering import filter_expenses
from expense_tracker.models import ZERO, DayBucket, Expense, SummaryStats


def day_key(moment: datetime) -> date:
    """
    Truncate a timestamp to its calendar day in the local time zone.

    Naive timestamps are taken to be local already. Aware timestamps are
    converted to the local zone first, so two moments on the same local day
    always share a key.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


def group_by_day(expenses: Sequence[Expense]) -> dict[date, DayBucket]:
    """Group expenses into one bucket per calendar day.

    Items keep their input order within each bucket.
    """
    grouped: dict[date, list[Expense]] = {}
    for expense in expenses:
        grouped.setdefault(day_key(expense.date), []).append(expense)

    return {
        day: DayBucket(
            day=day,
            items=tuple(items),
            total=sum((e.amount for e in items), ZERO),
        )
        for day, items in grouped.items()
    }


def expenses_by_day(expenses: Sequence[Expense]) -> list[DayBucket]:
    """Return day buckets, most recent day first."""
    return sorted(group_by_day(expenses).values(), key=lambda b: b.day, reverse=True)


def expenses_on_day(expenses: Sequence[Expense], day: date) -> list[Expense]:
    """Return the expenses whose date falls on ``day``, in input order."""
    return [e for e in expenses if day_key(e.date) == day]


def summarize(expenses: Sequence[Expense]) -> SummaryStats:
    """
    Compute total, highest and average-per-active-day amounts.

    The average divides by the number of distinct days that have at least one
    expense, not by the length of a date range. Empty input gives all zeros.
    """
    if not expenses:
        return SummaryStats()

    total = sum((e.amount for e in expenses), ZERO)
    highest = max(e.amount for e in expenses)
    active_days = len({day_key(e.date) for e in expenses})

    return SummaryStats(
        total_amount=total,
        max_amount=highest,
        average_daily=total / active_days,
    )


@dataclass(frozen=True)
class ExpenseOverview:
    """Everything the main expense list shows for one search state."""

    search_text: str
    filtered: Sequence[Expense]
    days: list[DayBucket]
    stats: SummaryStats

    @property
    def is_empty(self) -> bool:
        """Return True if no expenses match the search."""
        return not self.filtered


def build_overview(expenses: Sequence[Expense], search_text: str = "") -> ExpenseOverview:
    """
    Recompute the derived views for the current search text.

    Callers invoke this again whenever the expenses or the search change.

    Args:
        expenses: A stable snapshot of the store
        search_text: Current search box contents

    Returns:
        ExpenseOverview with filtered expenses, day buckets and stats
    """
    filtered = filter_expenses(expenses, search_text)
    return ExpenseOverview(
        search_text=search_text,
        filtered=filtered,
        days=expenses_by_day(filtered),
        stats=summarize(filtered),
    )
