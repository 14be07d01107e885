"""
Local workbook data source.
Reads an exported .xlsx copy of the report spreadsheet with pandas, returning
the same raw grids the Google Sheets client does.
"""
from pathlib import Path
from typing import Any, List, Optional

import pandas as pd

from core.cells import is_blank
from core.config import get_settings
from core.exceptions import DataSourceError
from core.logger import setup_logger
from core.ranges import RangeSpec
from sheets.client import SheetClient

logger = setup_logger(__name__)


def _trim_row(values: List[Any]) -> List[Any]:
    row = [None if is_blank(value) else value for value in values]
    while row and row[-1] is None:
        row.pop()
    return row


def frame_to_grid(df: pd.DataFrame, range_spec: RangeSpec) -> List[List[Any]]:
    """
    Slice a header-less sheet frame to a range.

    Trailing empty cells and trailing empty rows are dropped so that the grid
    matches what the Sheets API returns for the same range.

    Args:
        df: Whole sheet read with header=None
        range_spec: Rectangular range

    Returns:
        Rows of cell values, blanks as None
    """
    block = df.iloc[
        range_spec.start_row - 1:range_spec.end_row,
        range_spec.first_column_index:range_spec.last_column_index + 1
    ]
    grid = [_trim_row(list(values)) for values in block.itertuples(index=False, name=None)]
    while grid and not grid[-1]:
        grid.pop()
    return grid


class WorkbookClient(SheetClient):
    """Reads monthly sheets from a local .xlsx file."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or get_settings().workbook_path)
        logger.info(f"Initialized workbook client for {self.path}")

    def _read_sheet(self, sheet_name: str) -> pd.DataFrame:
        if not self.path.exists():
            raise DataSourceError(
                f"Workbook not found: {self.path}",
                details={"workbook_path": str(self.path)}
            )
        try:
            return pd.read_excel(
                self.path,
                sheet_name=sheet_name,
                header=None,
                dtype=object,
                engine="openpyxl"
            )
        except Exception as e:
            logger.error(f"Failed to read sheet '{sheet_name}' from {self.path}: {e}")
            raise DataSourceError(
                f"Cannot read sheet '{sheet_name}'",
                details={"workbook_path": str(self.path), "sheet": sheet_name, "error": str(e)}
            )

    def fetch_range(self, sheet_name: str, range_spec: RangeSpec) -> List[List[Any]]:
        """
        Fetch a range from a sheet of the workbook.

        Raises:
            DataSourceError: If the workbook or sheet cannot be read
        """
        df = self._read_sheet(sheet_name)
        grid = frame_to_grid(df, range_spec)
        logger.debug(f"Read {len(grid)} rows from {sheet_name}!{range_spec}")
        return grid

    def list_sheets(self) -> List[str]:
        """
        List sheet names of the workbook.

        Raises:
            DataSourceError: If the workbook cannot be opened
        """
        if not self.path.exists():
            raise DataSourceError(
                f"Workbook not found: {self.path}",
                details={"workbook_path": str(self.path)}
            )
        try:
            with pd.ExcelFile(self.path, engine="openpyxl") as xls:
                return list(xls.sheet_names)
        except Exception as e:
            logger.error(f"Failed to open workbook {self.path}: {e}")
            raise DataSourceError(
                f"Cannot open workbook {self.path.name}",
                details={"workbook_path": str(self.path), "error": str(e)}
            )
