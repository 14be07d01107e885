"""
Monthly sheet selection.
Each month lives in its own sheet named MMMYY, e.g. AUG25.
"""
import re
from datetime import date
from typing import Iterable, List, Optional

MONTH_NAMES = [
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
]

SHEET_NAME_PATTERN = re.compile(r"^(JAN|FEB|MAR|APR|MAY|JUN|JUL|AUG|SEP|OCT|NOV|DEC)\d{2}$")


def sheet_name_for_date(day: date) -> str:
    """
    Sheet name holding a date's rows.

    Args:
        day: Calendar date

    Returns:
        Sheet name in MMMYY format
    """
    return f"{MONTH_NAMES[day.month - 1]}{day.year % 100:02d}"


def _shift_month(day: date, months: int) -> date:
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def previous_sheet_name(today: date) -> str:
    return sheet_name_for_date(_shift_month(today, -1))


def next_sheet_name(today: date) -> str:
    return sheet_name_for_date(_shift_month(today, 1))


def is_valid_sheet_name(name: str) -> bool:
    """Check the MMMYY naming convention."""
    return bool(SHEET_NAME_PATTERN.match(name or ""))


def find_best_sheet(available: Iterable[str], today: date) -> Optional[str]:
    """
    Pick the sheet to read from the available ones.
    Priority: current month, then previous, then next.

    Args:
        available: Sheet names present in the spreadsheet
        today: Reference date

    Returns:
        Sheet name or None if none of the candidates exist
    """
    names = set(available)
    for candidate in (
        sheet_name_for_date(today),
        previous_sheet_name(today),
        next_sheet_name(today),
    ):
        if candidate in names:
            return candidate
    return None


def last_12_months(today: date) -> List[str]:
    """Sheet names of the current and previous 11 months, newest first."""
    return [sheet_name_for_date(_shift_month(today, -offset)) for offset in range(12)]
