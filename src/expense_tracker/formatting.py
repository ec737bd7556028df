"""Display formatting for amounts and days."""

from datetime import date, timedelta
from decimal import ROUND_HALF_EVEN, Decimal, localcontext

# Symbols as shown in the en_IN locale
CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "AUD": "A$",
    "CAD": "CA$",
}

ZERO_DECIMAL_CURRENCIES = {"JPY"}

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def group_digits(digits: str) -> str:
    """Insert separators using Indian grouping (last three, then pairs)."""
    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_amount(amount: Decimal, currency_code: str) -> str:
    """
    Format an amount in currency style.

    Examples:
        format_amount(Decimal("1234567.5"), "INR") -> "₹12,34,567.50"
        format_amount(Decimal("4.5"), "CHF") -> "CHF 4.50"
    """
    code = currency_code.upper()
    places = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
    quantum = Decimal(1).scaleb(-places)
    amount = Decimal(amount)
    with localcontext() as ctx:
        # Room for every integer digit plus the fraction
        ctx.prec = max(ctx.prec, amount.adjusted() + places + 2)
        rounded = amount.quantize(quantum, rounding=ROUND_HALF_EVEN)
        whole, _, fraction = f"{abs(rounded):f}".partition(".")

    sign = "-" if rounded < 0 else ""
    number = group_digits(whole) + (f".{fraction}" if fraction else "")

    symbol = CURRENCY_SYMBOLS.get(code)
    prefix = symbol if symbol else f"{code} "
    return f"{sign}{prefix}{number}"


def format_day(day: date, today: date | None = None) -> str:
    """Label a day as Today, Yesterday, or e.g. 'Jan 2, 2024'."""
    if today is None:
        today = date.today()

    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return f"{MONTH_ABBREVIATIONS[day.month - 1]} {day.day}, {day.year}"


def format_short_date(day: date) -> str:
    """Short numeric date, e.g. '1/2/24'."""
    return f"{day.month}/{day.day}/{day.year % 100:02d}"
