"""Expense Tracker - log expenses, review them by day and export reports."""

from expense_tracker.aggregation import build_overview, expenses_by_day, summarize
from expense_tracker.filtering import filter_expenses
from expense_tracker.models import DayBucket, Expense, SummaryStats
from expense_tracker.store import ExpenseStore

__version__ = "0.1.0"
__all__ = [
    "DayBucket",
    "Expense",
    "ExpenseStore",
    "SummaryStats",
    "build_overview",
    "expenses_by_day",
    "filter_expenses",
    "summarize",
]
