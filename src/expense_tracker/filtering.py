"""Search filtering over expense collections."""

from collections.abc import Sequence

from expense_tracker.models import Expense


def matches(expense: Expense, search_text: str) -> bool:
    """Return True if the name or category contains the search text, ignoring case."""
    needle = search_text.casefold()
    return needle in expense.name.casefold() or needle in expense.category.casefold()


def filter_expenses(expenses: Sequence[Expense], search_text: str) -> Sequence[Expense]:
    """
    Filter expenses by search text.

    Matching is a case-insensitive substring test against name and category.
    Order is preserved. An empty search returns ``expenses`` itself.

    Args:
        expenses: Expenses to filter
        search_text: Text typed into the search box

    Returns:
        Matching expenses in their original order
    """
    if not search_text:
        return expenses
    return [e for e in expenses if matches(e, search_text)]
