"""
Section boundary detection.
Finds named section headers (e.g. PENGELUARAN, CARGO) in a label column.
"""
from typing import Any, List, Optional

from core.cells import cell_at, cell_text
from core.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_SECTION_END = 300


def find_marker_row(
    grid: List[List[Any]],
    marker_text: str,
    start_row: int,
    label_column: int = 0
) -> Optional[int]:
    """
    Find the first row whose label contains the marker (case-insensitive).

    Args:
        grid: Rows fetched from the sheet, first row is start_row
        marker_text: Section header text to look for
        start_row: 1-based sheet row of grid[0]
        label_column: Offset of the label column inside each row

    Returns:
        1-based sheet row of the marker, or None
    """
    marker = marker_text.upper()
    for index, row in enumerate(grid):
        label = cell_text(cell_at(row, label_column))
        if label and marker in label.upper():
            return start_row + index
    return None


def find_section_end(
    grid: List[List[Any]],
    marker_text: str,
    start_row: int,
    label_column: int = 0,
    fallback_row: int = DEFAULT_SECTION_END
) -> int:
    """
    Last usable sheet row before a section marker.

    Args:
        grid: Rows fetched from the sheet, first row is start_row
        marker_text: Header that closes the section
        start_row: 1-based sheet row of grid[0]
        label_column: Offset of the label column inside each row
        fallback_row: Returned when the marker is absent

    Returns:
        1-based sheet row just above the marker, or fallback_row
    """
    marker_row = find_marker_row(grid, marker_text, start_row, label_column)
    if marker_row is None:
        logger.debug(f"Marker '{marker_text}' not found, using fallback row {fallback_row}")
        return fallback_row
    return marker_row - 1
