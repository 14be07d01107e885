"""
Shared fixtures: an in-memory spreadsheet client and a sample monthly sheet.
"""
import re
from typing import Any, Callable, Dict, List, Optional

import pandas as pd
import pytest

from core.config import reset_settings
from core.exceptions import DataSourceError
from core.ranges import RangeSpec, column_index
from sheets.client import SheetClient, reset_client
from sheets.workbook import frame_to_grid

A1_CELL = re.compile(r"^([A-Z]+)(\d+)$")


class SheetBuilder:
    """Builds a sheet cell by cell using A1 references."""

    def __init__(self):
        self.cells: Dict[tuple, Any] = {}

    def set(self, ref: str, value: Any) -> "SheetBuilder":
        match = A1_CELL.match(ref)
        self.cells[(int(match.group(2)) - 1, column_index(match.group(1)))] = value
        return self

    def frame(self) -> pd.DataFrame:
        rows = max(r for r, _ in self.cells) + 1
        cols = max(c for _, c in self.cells) + 1
        grid: List[List[Any]] = [[None] * cols for _ in range(rows)]
        for (r, c), value in self.cells.items():
            grid[r][c] = value
        return pd.DataFrame(grid, dtype=object)


class FakeSheetClient(SheetClient):
    """Serves ranges from in-memory sheets; unknown sheets fail like the API does."""

    def __init__(
        self,
        sheets: Optional[Dict[str, pd.DataFrame]] = None,
        fail_when: Optional[Callable[[str, RangeSpec], bool]] = None
    ):
        self.sheets = sheets or {}
        self.fail_when = fail_when
        self.calls: List[tuple] = []

    def fetch_range(self, sheet_name: str, range_spec: RangeSpec) -> List[List[Any]]:
        self.calls.append((sheet_name, str(range_spec)))
        if self.fail_when and self.fail_when(sheet_name, range_spec):
            raise DataSourceError("Connection refused", details={"range": str(range_spec)})
        if sheet_name not in self.sheets:
            raise DataSourceError(f"Unable to parse range: {sheet_name}!{range_spec}")
        return frame_to_grid(self.sheets[sheet_name], range_spec)

    def list_sheets(self) -> List[str]:
        return list(self.sheets)


def build_august_sheet() -> pd.DataFrame:
    """AUG25 with data for days 5 and 6."""
    s = SheetBuilder()

    # Attendance: dates on row 4, two columns per day
    s.set("A3", "ABSENSI")
    s.set("C4", "4").set("E4", "5").set("G4", "6")
    s.set("B6", "Andi").set("E6", "08:00").set("F6", "17:00")
    s.set("B7", "Budi").set("F7", "09:15")
    s.set("B8", "Citra").set("E8", "off")
    s.set("B9", "Dewi")
    s.set("B10", "2. CARGO")

    # Cargo block from row 13
    s.set("B13", "05").set("D13", "1234567890").set("H13", "2.5").set("I13", "Rp 1,000")
    s.set("K13", "500").set("L13", "250").set("M13", "300").set("O13", "100").set("P13", "5,000")
    s.set("D14", "Shopee-882").set("G14", "1").set("H14", "4").set("I14", "2000")
    s.set("D15", "total").set("I15", "99999")
    s.set("B16", "06").set("D16", "9876543210").set("H16", "3").set("I16", "700")

    # Express block from column AD
    s.set("AD13", "05").set("AK13", "15,000").set("AM13", "2000")
    s.set("AO14", "3000").set("AQ14", "500")
    s.set("AF15", "TOTAL").set("AK15", "18000")
    s.set("AD16", "06").set("AK16", "1000")

    # Expense block under its header
    s.set("B30", "PENGELUARAN")
    s.set("B31", "5").set("D31", "fuel")
    s.set("B32", "05").set("D32", "Lakban").set("M32", "Rp 25,000")
    s.set("B33", "6").set("D33", "Air").set("M33", "10000")
    s.set("B34", "5").set("M34", "500")
    s.set("BM40", None)
    return s.frame()


@pytest.fixture(autouse=True)
def reset_singletons():
    """Fresh settings and client for every test."""
    reset_settings()
    reset_client()
    yield
    reset_settings()
    reset_client()


@pytest.fixture()
def sheet_builder() -> SheetBuilder:
    return SheetBuilder()


@pytest.fixture()
def august_sheet() -> pd.DataFrame:
    return build_august_sheet()


@pytest.fixture()
def fake_client(august_sheet) -> FakeSheetClient:
    return FakeSheetClient({"AUG25": august_sheet})
