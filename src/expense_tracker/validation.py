"""Entry rules for turning form input into expense records."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from expense_tracker.models import Expense
from expense_tracker.utils import clean_text, parse_amount

MAX_AMOUNT = Decimal("1000000000000")


class ExpenseValidationError(ValueError):
    """Raised when entered expense data is incomplete or malformed."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


def build_expense(
    name: str,
    amount_text: str,
    category: str,
    when: datetime,
    expense_id: UUID | None = None,
) -> Expense:
    """Validate entered values and build an expense.

    Args:
        name: Display name, must not be blank
        amount_text: Amount as typed by the user
        category: Category label, must not be blank
        when: Date of the expense
        expense_id: Id of the record being edited, or None for a new record

    Returns:
        The new or replacement Expense

    Raises:
        ExpenseValidationError: If any field is invalid
    """
    name = clean_text(name)
    category = clean_text(category)

    if not name:
        raise ExpenseValidationError("name", "must not be empty")
    if not category:
        raise ExpenseValidationError("category", "must not be empty")

    amount = parse_amount(amount_text)
    if amount is None:
        raise ExpenseValidationError("amount", f"not a number: {amount_text!r}")
    if amount < 0:
        raise ExpenseValidationError("amount", "must not be negative")
    if amount >= MAX_AMOUNT:
        raise ExpenseValidationError("amount", f"must be less than {MAX_AMOUNT:,}")
    if amount.as_tuple().exponent > 0:
        # 1e3 is kept as 1000
        amount = amount.quantize(Decimal(1))

    if expense_id is None:
        return Expense.create(name=name, amount=amount, date=when, category=category)
    return Expense(id=expense_id, name=name, amount=amount, date=when, category=category)
