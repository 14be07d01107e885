"""
Column layouts of the monthly report sheet.

Each logical table is described by a frozen schema: where its block starts,
which columns are fetched, and the 0-based offset of every field inside a
fetched row. Offsets are relative to the first fetched column.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from core.ranges import RangeSpec


@dataclass(frozen=True)
class SectionSearchLayout:
    """Label column scanned for the expense header that ends the cargo/express block."""
    column: str = "B"
    start_row: int = 13
    end_row: int = 300
    marker: str = "PENGELUARAN"
    fallback_end_row: int = 300

    def range_spec(self) -> RangeSpec:
        return RangeSpec(self.column, self.start_row, self.column, self.end_row)


@dataclass(frozen=True)
class CargoLayout:
    """Cargo block, columns A..R from row 13."""
    start_column: str = "A"
    end_column: str = "R"
    start_row: int = 13
    date_col: int = 1               # B
    awb_col: int = 3                # D
    secondary_weight_col: int = 6   # G
    weight_col: int = 7             # H
    cash_col: int = 8               # I
    mandiri_cols: Tuple[int, int] = (10, 11)  # K, L
    bca_col: int = 12               # M
    dfod_col: int = 14              # O
    packing_col: int = 15           # P
    online_markers: Tuple[str, ...] = ("tiktok", "shopee", "api")
    regular_awb_pattern: str = r"^\d{10,}$"
    summary_label: str = "total"

    def range_spec(self, end_row: int) -> RangeSpec:
        return RangeSpec(self.start_column, self.start_row, self.end_column, max(end_row, self.start_row))


@dataclass(frozen=True)
class ExpressLayout:
    """Express block, columns AD..AY from row 9."""
    start_column: str = "AD"
    end_column: str = "AY"
    start_row: int = 9
    date_col: int = 0       # AD
    cash_col: int = 7       # AK
    mandiri_col: int = 9    # AM
    bca_col: int = 11       # AO
    packing_col: int = 13   # AQ
    summary_marker: str = "total"

    @property
    def payment_cols(self) -> Tuple[int, int, int, int]:
        return (self.cash_col, self.mandiri_col, self.bca_col, self.packing_col)

    def range_spec(self, end_row: int) -> RangeSpec:
        return RangeSpec(self.start_column, self.start_row, self.end_column, max(end_row, self.start_row))


@dataclass(frozen=True)
class ExpenseLayout:
    """
    Expense (pengeluaran) block, columns B..S.

    The block starts at the expense header when one is found, otherwise at
    the fixed default rows.
    """
    start_column: str = "B"
    end_column: str = "S"
    start_row: int = 226
    end_row: int = 248
    row_span: int = 60
    date_col: int = 0           # B
    description_col: int = 2    # D
    amount_col: int = 11        # M

    def range_spec(self, header_row: Optional[int] = None) -> RangeSpec:
        if header_row is None:
            return RangeSpec(self.start_column, self.start_row, self.end_column, self.end_row)
        return RangeSpec(self.start_column, header_row, self.end_column, header_row + self.row_span)


@dataclass(frozen=True)
class AttendanceLayout:
    """Attendance block: dates on sheet row 4, employees from row 6 until the CARGO header."""
    search_column: str = "B"
    search_end_row: int = 50
    marker: str = "CARGO"
    start_column: str = "A"
    end_column: str = "BM"
    start_row: int = 3
    date_row_offset: int = 1
    first_employee_offset: int = 3
    name_col: int = 1

    def search_range_spec(self) -> RangeSpec:
        return RangeSpec(self.search_column, 1, self.search_column, self.search_end_row)

    def range_spec(self, marker_row: int) -> RangeSpec:
        return RangeSpec(self.start_column, self.start_row, self.end_column, max(marker_row - 1, self.start_row))


SECTION_SEARCH = SectionSearchLayout()
CARGO = CargoLayout()
EXPRESS = ExpressLayout()
EXPENSE = ExpenseLayout()
ATTENDANCE = AttendanceLayout()
