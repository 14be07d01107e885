"""
Unit tests for monthly sheet selection.
"""
from datetime import date

import pytest

from sheets.selector import (
    find_best_sheet,
    is_valid_sheet_name,
    last_12_months,
    next_sheet_name,
    previous_sheet_name,
    sheet_name_for_date,
)


@pytest.mark.parametrize("day, expected", [
    (date(2025, 8, 4), "AUG25"),
    (date(2025, 1, 31), "JAN25"),
    (date(2024, 12, 1), "DEC24"),
    (date(2009, 5, 5), "MAY09"),
])
def test_sheet_name_for_date(day, expected):
    """Test MMMYY sheet names."""
    assert sheet_name_for_date(day) == expected


def test_neighbouring_months_across_year_boundary():
    """Test previous and next month wrap the year."""
    assert previous_sheet_name(date(2025, 1, 15)) == "DEC24"
    assert next_sheet_name(date(2024, 12, 31)) == "JAN25"
    assert previous_sheet_name(date(2025, 3, 31)) == "FEB25"


def test_is_valid_sheet_name():
    """Test the naming convention check."""
    assert is_valid_sheet_name("AUG25")
    assert not is_valid_sheet_name("Aug25")
    assert not is_valid_sheet_name("AUG2025")
    assert not is_valid_sheet_name("Sheet1")
    assert not is_valid_sheet_name("")


def test_find_best_sheet_priority():
    """Test current, then previous, then next month."""
    today = date(2025, 8, 4)
    assert find_best_sheet(["JUL25", "AUG25", "SEP25"], today) == "AUG25"
    assert find_best_sheet(["JUL25", "SEP25"], today) == "JUL25"
    assert find_best_sheet(["SEP25", "Sheet1"], today) == "SEP25"
    assert find_best_sheet(["JAN24"], today) is None


def test_last_12_months():
    """Test the rolling list of sheet names."""
    names = last_12_months(date(2025, 3, 10))
    assert len(names) == 12
    assert names[0] == "MAR25"
    assert names[2] == "JAN25"
    assert names[3] == "DEC24"
    assert names[-1] == "APR24"
