"""
Attendance block parsing.

The block sits above the CARGO header. Sheet row 4 holds the day numbers;
each day spans two columns (clock-in, clock-out). Employee names are in
column B from sheet row 6 down.
"""
from typing import Any, List, Optional

from core.cells import cell_at, cell_text
from core.exceptions import DataNotFoundError
from core.layouts import ATTENDANCE, AttendanceLayout
from core.logger import setup_logger
from core.schema import AttendanceEntry, AttendanceRecord, AttendanceSheet

logger = setup_logger(__name__)

OFF = "Off"


def find_date_column(date_row: List[Any], day: int) -> Optional[int]:
    """
    Find the column of a day in the dates row.

    Args:
        date_row: Cells of the dates row
        day: Day of month

    Returns:
        0-based column offset or None
    """
    for index, value in enumerate(date_row):
        if cell_text(value) == str(day):
            return index
    return None


def _time_cell(value: Any) -> Optional[str]:
    text = cell_text(value)
    if not text:
        return None
    if text.lower() == "off":
        return OFF
    return text


def read_attendance(
    grid: List[List[Any]],
    day: int,
    layout: AttendanceLayout = ATTENDANCE
) -> AttendanceSheet:
    """
    Read every employee's attendance for a day.

    A clock-out without a clock-in is treated as the clock-in.

    Args:
        grid: Attendance block, grid[0] is layout.start_row
        day: Day of month
        layout: Attendance layout

    Returns:
        AttendanceSheet; empty when the day has no column

    Raises:
        DataNotFoundError: If the block is too short to hold dates and employees
    """
    if len(grid) < layout.first_employee_offset:
        raise DataNotFoundError(
            "Insufficient attendance data",
            details={"rows": len(grid), "day": day}
        )

    date_col = find_date_column(grid[layout.date_row_offset], day)
    if date_col is None:
        logger.info(f"No attendance column for day {day}")
        return AttendanceSheet(date=day)

    records: List[AttendanceRecord] = []
    for row in grid[layout.first_employee_offset:]:
        name = cell_text(cell_at(row, layout.name_col))
        if not name:
            continue

        in_time = _time_cell(cell_at(row, date_col))
        out_time = _time_cell(cell_at(row, date_col + 1))
        if not in_time and out_time and out_time != OFF:
            in_time, out_time = out_time, None

        records.append(AttendanceRecord(
            name=name,
            date=day,
            in_time=in_time,
            out_time=out_time,
            is_present=bool(in_time or out_time),
        ))

    present = sum(1 for record in records if record.is_present)
    return AttendanceSheet(
        date=day,
        total_employees=len(records),
        present_employees=present,
        absent_employees=len(records) - present,
        attendance=records,
    )


def present_entries(sheet: AttendanceSheet) -> List[AttendanceEntry]:
    """Present employees as report entries, '-' for a missing time."""
    return [
        AttendanceEntry(
            name=record.name,
            in_time=record.in_time or "-",
            out_time=record.out_time or "-",
        )
        for record in sheet.attendance
        if record.is_present
    ]
