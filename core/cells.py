"""
Cell value coercion.
Turns raw spreadsheet cells (None, blanks, "Rp 1,000", 2.5, NaN) into
normalized values with an explicit zero fallback for numeric reads.
"""
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

# Leading numeric prefix of a cleaned residual, e.g. "12.5" from "12.5.3"
NUMBER_PREFIX = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
NON_NUMERIC = re.compile(r"[^\d.\-]")


class CellKind(str, Enum):
    """Tag of a normalized cell."""
    EMPTY = "empty"
    NUMBER = "number"
    TEXT = "text"


@dataclass(frozen=True)
class NormalizedCell:
    """Normalized spreadsheet cell."""
    kind: CellKind
    number: Optional[float] = None
    text: str = ""

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    def as_text(self) -> str:
        """Render the cell back to text."""
        if self.kind is CellKind.NUMBER:
            return format_number(self.number)
        return self.text


EMPTY_CELL = NormalizedCell(CellKind.EMPTY)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def format_number(value: float) -> str:
    """Render a float in plain notation, without a trailing '.0' when it is integral."""
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def is_blank(value: Any) -> bool:
    """
    Check whether a raw cell is absent or whitespace-only.

    Args:
        value: Raw cell value

    Returns:
        True for None, NaN and whitespace-only text
    """
    if value is None or _is_nan(value):
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def cell_text(value: Any) -> str:
    """
    Trimmed text of a raw cell.
    Integral floats render without '.0' so workbook and Sheets values agree.

    Args:
        value: Raw cell value

    Returns:
        Text, empty string for blank cells
    """
    if is_blank(value):
        return ""
    if isinstance(value, float) and math.isfinite(value):
        return format_number(value)
    return str(value).strip()


def parse_number(text: str) -> Optional[float]:
    """
    Best-effort numeric parse of text.
    Drops everything except digits, '.' and '-', then reads the leading number.

    Args:
        text: Raw text, e.g. "Rp 1,000" or "2.5 kg"

    Returns:
        Finite float or None when nothing numeric remains
    """
    residual = NON_NUMERIC.sub("", text)
    match = NUMBER_PREFIX.match(residual)
    if not match:
        return None
    number = float(match.group(0))
    if not math.isfinite(number):
        return None
    return number


def coerce(value: Any) -> NormalizedCell:
    """
    Normalize a raw cell value. Never raises.

    Args:
        value: Raw cell value (None, str, int, float, or anything else)

    Returns:
        NormalizedCell tagged EMPTY, NUMBER or TEXT
    """
    if is_blank(value):
        return EMPTY_CELL

    if isinstance(value, bool):
        return NormalizedCell(CellKind.TEXT, text=str(value))

    if isinstance(value, (int, float)):
        number = float(value)
        if math.isfinite(number):
            return NormalizedCell(CellKind.NUMBER, number=number)
        return NormalizedCell(CellKind.TEXT, text=str(value))

    text = str(value).strip()
    number = parse_number(text)
    if number is None:
        return NormalizedCell(CellKind.TEXT, text=text)
    return NormalizedCell(CellKind.NUMBER, number=number, text=text)


def number_or(value: Any, default: float = 0.0) -> float:
    """
    Numeric reading of a raw cell with an explicit fallback.

    Args:
        value: Raw cell value or an already normalized cell
        default: Returned for empty or non-numeric cells

    Returns:
        Parsed number or default
    """
    cell = value if isinstance(value, NormalizedCell) else coerce(value)
    if cell.kind is CellKind.NUMBER:
        return cell.number
    return default


def cell_at(row: Any, index: int) -> Any:
    """Cell at index, or None when the (ragged) row is too short."""
    if row is None or index < 0 or index >= len(row):
        return None
    return row[index]
