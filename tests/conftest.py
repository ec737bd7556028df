"""Pytest configuration and fixtures."""

from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

from expense_tracker.models import Expense


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config and data lookups inside the test's temp directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg_config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg_data"))


@pytest.fixture
def coffee() -> Expense:
    """Return a morning coffee on 1 Jan 2024."""
    return Expense.create("Coffee", Decimal("4.50"), datetime(2024, 1, 1, 8, 30), "Food")


@pytest.fixture
def bus() -> Expense:
    """Return a bus fare later on 1 Jan 2024."""
    return Expense.create("Bus", Decimal("2.00"), datetime(2024, 1, 1, 18, 0), "Transit")


@pytest.fixture
def rent() -> Expense:
    """Return the rent payment on 2 Jan 2024."""
    return Expense.create("Rent", Decimal("1200.00"), datetime(2024, 1, 2, 9, 0), "Housing")


@pytest.fixture
def sample_expenses(coffee: Expense, bus: Expense, rent: Expense) -> list[Expense]:
    """Return three expenses spread over two days."""
    return [coffee, bus, rent]


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Return path for a test data file."""
    return tmp_path / "expenses.json"
