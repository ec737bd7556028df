"""Tests for display formatting."""

from datetime import date
from decimal import Decimal

from expense_tracker.formatting import (
    format_amount,
    format_day,
    format_short_date,
    group_digits,
)


class TestGroupDigits:
    """Tests for Indian digit grouping."""

    def test_short_numbers_unchanged(self) -> None:
        """Test numbers up to three digits have no separator."""
        assert group_digits("7") == "7"
        assert group_digits("999") == "999"

    def test_thousands(self) -> None:
        """Test the first separator sits before the last three digits."""
        assert group_digits("1200") == "1,200"

    def test_lakhs_and_crores(self) -> None:
        """Test further separators come every two digits."""
        assert group_digits("123456") == "1,23,456"
        assert group_digits("1234567") == "12,34,567"
        assert group_digits("123456789") == "12,34,56,789"


class TestFormatAmount:
    """Tests for format_amount function."""

    def test_rupees(self) -> None:
        """Test INR uses the rupee sign and two decimals."""
        assert format_amount(Decimal("1206.5"), "INR") == "₹1,206.50"

    def test_large_rupees(self) -> None:
        """Test Indian grouping for large amounts."""
        assert format_amount(Decimal("1234567.891"), "INR") == "₹12,34,567.89"

    def test_other_symbols(self) -> None:
        """Test known symbols for other currencies."""
        assert format_amount(Decimal("4.5"), "USD") == "$4.50"
        assert format_amount(Decimal("4.5"), "eur") == "€4.50"
        assert format_amount(Decimal("4.5"), "AUD") == "A$4.50"

    def test_yen_has_no_decimals(self) -> None:
        """Test JPY is shown without fractional digits."""
        assert format_amount(Decimal("1500.4"), "JPY") == "¥1,500"

    def test_unknown_code(self) -> None:
        """Test unknown currencies fall back to the ISO code."""
        assert format_amount(Decimal("10"), "CHF") == "CHF 10.00"

    def test_zero_and_negative(self) -> None:
        """Test zero and negative amounts."""
        assert format_amount(Decimal("0"), "INR") == "₹0.00"
        assert format_amount(Decimal("-5"), "INR") == "-₹5.00"

    def test_wider_than_default_precision(self) -> None:
        """Test amounts with more digits than the decimal context holds."""
        assert format_amount(Decimal("1E+30"), "INR") == "₹10," + "00," * 13 + "000.00"
        assert format_amount(Decimal("123456789012345678901234567.891"), "USD") == (
            "$12,34,56,78,90,12,34,56,78,90,12,34,567.89"
        )


class TestFormatDay:
    """Tests for format_day function."""

    def test_today(self) -> None:
        """Test the current day is labelled Today."""
        assert format_day(date(2024, 1, 2), today=date(2024, 1, 2)) == "Today"

    def test_yesterday(self) -> None:
        """Test the previous day is labelled Yesterday."""
        assert format_day(date(2024, 1, 1), today=date(2024, 1, 2)) == "Yesterday"

    def test_medium_date(self) -> None:
        """Test older days use the medium date style."""
        assert format_day(date(2024, 1, 2), today=date(2024, 3, 1)) == "Jan 2, 2024"
        assert format_day(date(2023, 12, 25), today=date(2024, 3, 1)) == "Dec 25, 2023"


class TestFormatShortDate:
    """Tests for format_short_date function."""

    def test_short_style(self) -> None:
        """Test month/day/two-digit-year without padding."""
        assert format_short_date(date(2024, 1, 2)) == "1/2/24"
        assert format_short_date(date(2009, 11, 30)) == "11/30/09"
