"""Parsing utilities for user-entered expense text."""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

CURRENCY_SYMBOLS = "₹$€£¥"

# An ISO code is only stripped when whitespace separates it from the number
CODE_PREFIX_RE = re.compile(r"^[A-Za-z]{3}\s+")
CODE_SUFFIX_RE = re.compile(r"\s+[A-Za-z]{3}$")
NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_date(date_str: str) -> date | None:
    """
    Parse various date formats to date object.

    Supported formats:
    - YYYY-MM-DD (2026-01-30)
    - DD/MM/YYYY (30/01/2026)
    - DD MMM YYYY (30 Jan 2026)
    - DD-MM-YYYY (30-01-2026)

    Args:
        date_str: Date string to parse

    Returns:
        date object if successful, None otherwise
    """
    date_str = date_str.strip().strip('"').strip()

    if not date_str:
        return None

    formats = [
        "%Y-%m-%d",  # 2026-01-30
        "%d/%m/%Y",  # 30/01/2026
        "%d %b %Y",  # 30 Jan 2026
        "%d-%m-%Y",  # 30-01-2026
        "%d %B %Y",  # 30 January 2026
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def parse_amount(amount_str: str) -> Decimal | None:
    """
    Parse amount string to Decimal.

    Handles:
    - A leading or trailing currency symbol or code (₹12, $4.50, INR 99, 99 USD)
    - Thousands separators (commas)
    - Negative values (both -123 and (123))
    - Exponents (1e3)
    - Quoted values

    Anything else, such as stray letters or repeated signs, is rejected.

    Args:
        amount_str: Amount string to parse

    Returns:
        Decimal if successful, None otherwise
    """
    if not amount_str or not amount_str.strip():
        return None

    amount_str = amount_str.strip().strip('"').strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1].strip()

    amount_str = CODE_PREFIX_RE.sub("", amount_str)
    amount_str = CODE_SUFFIX_RE.sub("", amount_str)

    sign = ""
    if amount_str[:1] in ("-", "+"):
        sign, amount_str = amount_str[0], amount_str[1:].lstrip()
    amount_str = amount_str.strip(CURRENCY_SYMBOLS).strip().replace(",", "")

    number = sign + amount_str
    if not NUMBER_RE.fullmatch(number):
        return None
    if is_negative and sign:
        return None

    try:
        value = Decimal(number)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return -value if is_negative else value


def clean_text(text: str) -> str:
    """Collapse runs of whitespace and trim the ends."""
    return " ".join(text.split())
