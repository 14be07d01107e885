"""
A1 notation helpers for rectangular spreadsheet ranges.
"""
from dataclasses import dataclass


def column_index(letters: str) -> int:
    """
    Convert a column reference to a 0-based index ("A" -> 0, "AD" -> 29).

    Raises:
        ValueError: If letters is not a column reference
    """
    letters = letters.strip().upper()
    if not letters or not letters.isalpha():
        raise ValueError(f"Invalid column reference: {letters!r}")
    index = 0
    for char in letters:
        index = index * 26 + (ord(char) - ord("A") + 1)
    return index - 1


@dataclass(frozen=True)
class RangeSpec:
    """
    Inclusive rectangular range, rows 1-based as in the sheet.

    Raises:
        ValueError: If a column is malformed or the bounds are inverted
    """
    start_column: str
    start_row: int
    end_column: str
    end_row: int

    def __post_init__(self):
        if column_index(self.end_column) < column_index(self.start_column):
            raise ValueError(f"Invalid column bounds in range: {self}")
        if self.start_row < 1 or self.end_row < self.start_row:
            raise ValueError(f"Invalid row bounds in range: {self}")

    @property
    def first_column_index(self) -> int:
        return column_index(self.start_column)

    @property
    def last_column_index(self) -> int:
        return column_index(self.end_column)

    def __str__(self) -> str:
        return f"{self.start_column}{self.start_row}:{self.end_column}{self.end_row}"
