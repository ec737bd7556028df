"""In-memory expense store with JSON persistence."""

import json
import logging
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from uuid import UUID

from expense_tracker.aggregation import expenses_on_day
from expense_tracker.models import Expense

logger = logging.getLogger(__name__)


class StoreDecodeError(ValueError):
    """Raised when a persisted expense blob cannot be decoded."""


class ExpenseNotFoundError(KeyError):
    """Raised when no expense has the requested id."""

    def __str__(self) -> str:
        return f"No expense with id {self.args[0]}"


class ExpenseStore:
    """
    Ordered collection of expenses keyed by id.

    Usage:
        store = ExpenseStore.load(Path("expenses.json"))
        store.add(expense)
        store.save(Path("expenses.json"))
    """

    def __init__(self, expenses: Iterable[Expense] | None = None) -> None:
        """
        Initialize the store.

        Args:
            expenses: Initial records, in display order

        Raises:
            ValueError: If two records share an id
        """
        self._expenses: list[Expense] = []
        for expense in expenses or ():
            self.add(expense)

    def __len__(self) -> int:
        return len(self._expenses)

    def __contains__(self, expense_id: object) -> bool:
        return any(e.id == expense_id for e in self._expenses)

    @property
    def expenses(self) -> tuple[Expense, ...]:
        """Snapshot of all expenses in store order."""
        return tuple(self._expenses)

    def _index_of(self, expense_id: UUID) -> int:
        for i, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return i
        raise ExpenseNotFoundError(expense_id)

    def get(self, expense_id: UUID) -> Expense:
        """Return the expense with the given id."""
        return self._expenses[self._index_of(expense_id)]

    def add(self, expense: Expense) -> None:
        """Append a new expense."""
        if expense.id in self:
            raise ValueError(f"Duplicate expense id {expense.id}")
        self._expenses.append(expense)
        logger.debug("Added expense %s (%s)", expense.id, expense.name)

    def replace(self, expense: Expense) -> Expense:
        """
        Replace the stored record that has the same id.

        Args:
            expense: Edited record

        Returns:
            The record that was replaced
        """
        idx = self._index_of(expense.id)
        previous = self._expenses[idx]
        self._expenses[idx] = expense
        logger.debug("Replaced expense %s", expense.id)
        return previous

    def remove(self, expense_id: UUID) -> Expense:
        """Delete an expense and return it."""
        removed = self._expenses.pop(self._index_of(expense_id))
        logger.debug("Removed expense %s (%s)", removed.id, removed.name)
        return removed

    def resolve_id(self, text: str) -> UUID:
        """
        Resolve a full id or a unique id prefix to a stored id.

        Raises:
            ExpenseNotFoundError: If nothing matches
            ValueError: If the prefix matches more than one expense
        """
        prefix = text.strip().lower()
        if not prefix:
            raise ExpenseNotFoundError(text)

        candidates = [e.id for e in self._expenses if str(e.id).startswith(prefix)]
        if not candidates:
            raise ExpenseNotFoundError(text)
        if len(candidates) > 1:
            raise ValueError(f"Id prefix {text!r} matches {len(candidates)} expenses")
        return candidates[0]

    def on_day(self, day: date) -> list[Expense]:
        """All expenses on a calendar day, ignoring any search filter."""
        return expenses_on_day(self._expenses, day)

    def encode(self) -> bytes:
        """Encode all expenses as a JSON blob."""
        payload = [e.to_dict() for e in self._expenses]
        return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")

    @classmethod
    def decode(cls, blob: bytes) -> "ExpenseStore":
        """
        Decode a blob produced by ``encode``.

        Raises:
            StoreDecodeError: If the blob is not a valid expense list
        """
        try:
            data = json.loads(blob.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StoreDecodeError(f"Invalid expense data: {e}") from e

        if not isinstance(data, list):
            raise StoreDecodeError("Invalid expense data: expected a list")

        try:
            return cls(Expense.from_dict(item) for item in data)
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            raise StoreDecodeError(f"Invalid expense record: {e}") from e

    @classmethod
    def load(cls, path: Path) -> "ExpenseStore":
        """Load expenses from a file, or return an empty store if it is missing."""
        if not path.exists():
            logger.debug("No data file at %s, starting empty", path)
            return cls()

        store = cls.decode(path.read_bytes())
        logger.debug("Loaded %d expenses from %s", len(store), path)
        return store

    def save(self, path: Path) -> None:
        """Write all expenses to a file, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.encode())
        logger.debug("Saved %d expenses to %s", len(self), path)
