"""Shared test fixtures for sankeyplot tests."""

import os

# Must be set before the first Qt import
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from sankeyplot.model.dataset import Dataset

BUDGET_TEXT = "Budget\nIncome\nRent 500\nFood 300\nSavings 200\n"


@pytest.fixture(scope="session")
def qapp():
    """A QApplication shared by all Qt tests."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture()
def budget_text():
    return BUDGET_TEXT


@pytest.fixture()
def budget_dataset():
    return Dataset.from_pairs("Budget", "Income", [("Rent", 500), ("Food", 300), ("Savings", 200)])


@pytest.fixture()
def write_data(tmp_path):
    """Write text to a data file in tmp_path and return its path."""
    def _write(text, name="data.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def budget_file(write_data):
    return write_data(BUDGET_TEXT, "budget.txt")
