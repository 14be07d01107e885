"""
Daily segment splitting.

Cargo and express blocks label only the first row of each day; the rows
below it until the next label belong to the same day. The scan is a small
state machine:

    state     label        next      collect
    SEEKING   empty        SEEKING   no
    SEEKING   target       ACTIVE    yes
    SEEKING   other        SEEKING   no
    ACTIVE    empty        ACTIVE    yes
    ACTIVE    target       ACTIVE    yes
    ACTIVE    other        CLOSED    no
    CLOSED    empty        CLOSED    no
    CLOSED    target       ACTIVE    yes
    CLOSED    other        CLOSED    no

A day written in several blocks is collected from every block, the same
rows split_by_day reports as that day's runs.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from core.cells import cell_at, cell_text
from core.logger import setup_logger

logger = setup_logger(__name__)

# (first_row, last_row), 1-based sheet rows, inclusive
RowRun = Tuple[int, int]


class SegmentState(str, Enum):
    SEEKING = "seeking"
    ACTIVE = "active"
    CLOSED = "closed"


def day_label(value: Any) -> str:
    """
    Normalize a date-column cell to a day key.
    "5", 5.0 and "05" all map to "05"; other text is returned trimmed.
    """
    text = cell_text(value)
    if text.isdigit() and len(text) <= 2:
        return text.zfill(2)
    return text


def target_day_key(day: int) -> str:
    """Zero-padded key of a day of month."""
    return f"{day:02d}"


def transition(state: SegmentState, label: str, target_day: str) -> Tuple[SegmentState, bool]:
    """
    Apply one row to the splitter state.

    Args:
        state: Current state
        label: Normalized label of the row ("" for continuation rows)
        target_day: Zero-padded day being extracted

    Returns:
        (next state, whether the row belongs to the segment)
    """
    if label == target_day:
        return SegmentState.ACTIVE, True

    if state is SegmentState.ACTIVE:
        if not label:
            return state, True
        return SegmentState.CLOSED, False

    return state, False


@dataclass
class DaySegment:
    """Rows of one day, each kept with its 1-based sheet row."""
    day: str
    rows: List[Tuple[int, List[Any]]] = field(default_factory=list)

    @property
    def sheet_rows(self) -> List[int]:
        return [sheet_row for sheet_row, _ in self.rows]

    @property
    def cells(self) -> List[List[Any]]:
        return [row for _, row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)


def extract_day_segment(
    grid: List[List[Any]],
    date_column: int,
    target_day: str,
    start_row: int = 1
) -> DaySegment:
    """
    Collect the rows of one day.

    Args:
        grid: Rows fetched from the sheet
        date_column: Offset of the day label inside each row
        target_day: Zero-padded day, e.g. "05"
        start_row: 1-based sheet row of grid[0]

    Returns:
        DaySegment, empty when the day does not appear
    """
    segment = DaySegment(day=target_day)
    state = SegmentState.SEEKING

    for index, row in enumerate(grid):
        label = day_label(cell_at(row, date_column))
        previous = state
        state, collect = transition(state, label, target_day)
        if previous is SegmentState.CLOSED and state is SegmentState.ACTIVE:
            logger.debug(f"Day {target_day} written again at row {start_row + index}")
        if collect:
            segment.rows.append((start_row + index, row))

    logger.debug(f"Day {target_day}: {len(segment)} rows")
    return segment


def split_by_day(
    grid: List[List[Any]],
    date_column: int,
    start_row: int = 1
) -> Dict[str, List[RowRun]]:
    """
    Partition a grid into labeled runs for every day.

    Rows above the first label belong to no day. A day written twice
    non-contiguously maps to two runs.

    Args:
        grid: Rows fetched from the sheet
        date_column: Offset of the day label inside each row
        start_row: 1-based sheet row of grid[0]

    Returns:
        Mapping of day key to its runs in sheet order
    """
    runs: Dict[str, List[RowRun]] = {}
    active: Optional[str] = None
    run_start = 0

    for index, row in enumerate(grid):
        sheet_row = start_row + index
        label = day_label(cell_at(row, date_column))
        if not label or label == active:
            continue
        if active is not None:
            runs.setdefault(active, []).append((run_start, sheet_row - 1))
        active = label
        run_start = sheet_row

    if active is not None:
        runs.setdefault(active, []).append((run_start, start_row + len(grid) - 1))

    return runs
