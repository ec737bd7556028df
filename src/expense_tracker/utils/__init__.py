"""Utility functions for expense-tracker."""

from expense_tracker.utils.parsing import (
    clean_text,
    parse_amount,
    parse_date,
)

__all__ = ["parse_date", "parse_amount", "clean_text"]
