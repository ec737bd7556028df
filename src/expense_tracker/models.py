"""Data models for expenses and their derived views."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

ZERO = Decimal("0")


@dataclass(frozen=True)
class Expense:
    """A single recorded expense.

    Records are immutable. Editing an expense produces a replacement record
    that keeps the original ``id``.
    """

    name: str
    amount: Decimal
    date: datetime
    category: str
    id: UUID = field(default_factory=uuid4)

    @classmethod
    def create(
        cls,
        name: str,
        amount: Decimal,
        date: datetime,
        category: str,
    ) -> "Expense":
        """Create a new expense with a freshly assigned id."""
        return cls(name=name, amount=amount, date=date, category=category)

    def with_changes(self, **changes: Any) -> "Expense":
        """Return a replacement record with the same id."""
        changes.pop("id", None)
        return replace(self, **changes)

    def to_dict(self) -> dict[str, str]:
        """Convert to a JSON-safe dictionary."""
        return {
            "id": str(self.id),
            "name": self.name,
            "amount": str(self.amount),
            "date": self.date.isoformat(),
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        """Build an expense from a dictionary produced by ``to_dict``.

        Raises:
            KeyError: If a required key is missing
            ValueError: If a value cannot be converted
        """
        return cls(
            id=UUID(str(data["id"])),
            name=str(data["name"]),
            amount=Decimal(str(data["amount"])),
            date=datetime.fromisoformat(str(data["date"])),
            category=str(data.get("category", "")),
        )


@dataclass(frozen=True)
class DayBucket:
    """Expenses sharing one calendar day, plus their total."""

    day: date
    items: tuple[Expense, ...]
    total: Decimal

    @property
    def count(self) -> int:
        """Number of expenses on this day."""
        return len(self.items)


@dataclass(frozen=True)
class SummaryStats:
    """Aggregate statistics over a set of expenses."""

    total_amount: Decimal = ZERO
    max_amount: Decimal = ZERO
    average_daily: Decimal = ZERO
