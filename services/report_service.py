"""
Report service.
Fetches each logical table of the monthly sheet for a day, isolates failures
per table, and aggregates days over a range.
"""
import asyncio
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from core.accumulate import accumulate_cargo, accumulate_expenses, accumulate_express
from core.aggregation import reduce_reports
from core.attendance import present_entries, read_attendance
from core.config import get_settings
from core.exceptions import (
    ConfigurationError,
    DailyReportException,
    DataNotFoundError,
    DataSourceError,
    ValidationError,
)
from core.layouts import ATTENDANCE, CARGO, EXPENSE, EXPRESS, SECTION_SEARCH
from core.logger import setup_logger
from core.schema import (
    AttendanceEntry,
    CargoTotals,
    DailyReport,
    DateRange,
    ExpenseTotals,
    ExpressTotals,
    RangeReport,
)
from core.sections import find_marker_row, find_section_end
from core.segments import DaySegment, extract_day_segment, split_by_day, target_day_key
from sheets.client import SheetClient, get_client
from sheets.selector import find_best_sheet, is_valid_sheet_name, last_12_months, sheet_name_for_date

logger = setup_logger(__name__)


def display_date(day: date) -> str:
    """'August 4, 2025' style date."""
    return f"{day:%B} {day.day}, {day.year}"


@dataclass(frozen=True)
class SectionBounds:
    """Row window shared by the cargo and express blocks, and the expense header row."""
    block_end_row: int
    expense_header_row: Optional[int] = None


class ReportService:
    """Service building daily and range reports from the monthly sheet."""

    def __init__(self, client: Optional[SheetClient] = None):
        """
        Initialize report service.

        Args:
            client: Spreadsheet client; the configured singleton when omitted
        """
        self.settings = get_settings()
        self._client = client

    @property
    def client(self) -> SheetClient:
        if self._client is None:
            self._client = get_client()
        return self._client

    def locate_sections(self, sheet: str) -> SectionBounds:
        """
        Find where the cargo/express block ends.

        Raises:
            DataSourceError: If the label column cannot be fetched
        """
        layout = SECTION_SEARCH
        labels = self.client.fetch_range(sheet, layout.range_spec())
        block_end_row = find_section_end(
            labels, layout.marker, layout.start_row, fallback_row=layout.fallback_end_row
        )
        header_row = find_marker_row(labels, layout.marker, layout.start_row)

        if header_row is None:
            logger.warning(
                f"{sheet}: '{layout.marker}' header not found, reading up to row {block_end_row}"
            )

        return SectionBounds(block_end_row=block_end_row, expense_header_row=header_row)

    def day_segment(self, sheet: str, grid: List[List[Any]], date_column: int, start_row: int,
                    target_date: date) -> DaySegment:
        """Rows of a day inside a block, warning when the day is written in several places."""
        day = target_day_key(target_date.day)
        runs = split_by_day(grid, date_column, start_row).get(day, [])
        if len(runs) > 1:
            blocks = ", ".join(f"{first}-{last}" for first, last in runs)
            logger.warning(f"{sheet} {target_date}: day written in {len(runs)} blocks (rows {blocks})")
        return extract_day_segment(grid, date_column, day, start_row)

    def get_cargo_data(self, sheet: str, target_date: date, end_row: int) -> CargoTotals:
        """
        Cargo totals of a day.

        Raises:
            DataSourceError: If the cargo block cannot be fetched
        """
        range_spec = CARGO.range_spec(end_row)
        grid = self.client.fetch_range(sheet, range_spec)
        segment = self.day_segment(sheet, grid, CARGO.date_col, CARGO.start_row, target_date)
        totals = accumulate_cargo(segment, CARGO)
        logger.info(
            f"{sheet} {target_date}: cargo {len(segment)} rows, "
            f"{totals.total_awb} AWB, {len(totals.total_awb_online)} online"
        )
        return totals

    def get_express_data(self, sheet: str, target_date: date, end_row: int) -> ExpressTotals:
        """
        Express totals of a day.

        Raises:
            DataSourceError: If the express block cannot be fetched
        """
        range_spec = EXPRESS.range_spec(end_row)
        grid = self.client.fetch_range(sheet, range_spec)
        segment = self.day_segment(sheet, grid, EXPRESS.date_col, EXPRESS.start_row, target_date)
        totals = accumulate_express(segment, EXPRESS)
        logger.info(f"{sheet} {target_date}: express {totals.total_awb_express} AWB")
        return totals

    def get_expense_data(self, sheet: str, target_date: date, header_row: Optional[int] = None) -> ExpenseTotals:
        """
        Expense totals of a day.

        Raises:
            DataSourceError: If the expense block cannot be fetched
        """
        grid = self.client.fetch_range(sheet, EXPENSE.range_spec(header_row))
        totals = accumulate_expenses(grid, target_date.day, EXPENSE)
        logger.info(
            f"{sheet} {target_date}: expenses {totals.total_pengeluaran:,.0f}, "
            f"{len(totals.items_without_price)} without price"
        )
        return totals

    def get_attendance(self, sheet: str, target_date: date) -> List[AttendanceEntry]:
        """
        Present employees of a day.

        Raises:
            DataNotFoundError: If the CARGO header or the attendance block is missing
            DataSourceError: If the sheet cannot be fetched
        """
        layout = ATTENDANCE
        labels = self.client.fetch_range(sheet, layout.search_range_spec())
        cargo_row = find_marker_row(labels, layout.marker, 1)
        if cargo_row is None:
            raise DataNotFoundError(
                f"{layout.marker} section not found",
                details={"sheet": sheet}
            )

        grid = self.client.fetch_range(sheet, layout.range_spec(cargo_row))
        return present_entries(read_attendance(grid, target_date.day, layout))

    def generate_daily_report(self, target_date: date) -> DailyReport:
        """
        Build the report of one day.

        A table that cannot be fetched contributes its zeroed totals.

        Args:
            target_date: Day to report

        Returns:
            DailyReport

        Raises:
            DataSourceError: If none of the cargo, express and expense tables could be read
        """
        sheet = sheet_name_for_date(target_date)
        logger.info(f"Generating daily report for {target_date} from sheet {sheet}")
        failures: Dict[str, str] = {}

        try:
            attendance = self.get_attendance(sheet, target_date)
        except (DataNotFoundError, DataSourceError) as e:
            logger.info(f"No attendance data for {target_date}: {e.message}")
            attendance = []

        try:
            bounds = self.locate_sections(sheet)
        except DataSourceError as e:
            logger.warning(f"Section search failed for {sheet}: {e.message}")
            failures["sections"] = e.message
            bounds = SectionBounds(block_end_row=SECTION_SEARCH.fallback_end_row)

        try:
            cargo = self.get_cargo_data(sheet, target_date, bounds.block_end_row)
        except DataSourceError as e:
            logger.error(f"Error getting cargo data: {e.message}")
            failures["cargo"] = e.message
            cargo = CargoTotals()

        try:
            express = self.get_express_data(sheet, target_date, bounds.block_end_row)
        except DataSourceError as e:
            logger.error(f"Error getting express data: {e.message}")
            failures["express"] = e.message
            express = ExpressTotals()

        try:
            pengeluaran = self.get_expense_data(sheet, target_date, bounds.expense_header_row)
        except DataSourceError as e:
            logger.error(f"Error getting pengeluaran data: {e.message}")
            failures["pengeluaran"] = e.message
            pengeluaran = ExpenseTotals()

        if {"cargo", "express", "pengeluaran"} <= failures.keys():
            raise DataSourceError(
                f"No table of sheet {sheet} could be read",
                details={"date": target_date.isoformat(), "sheet": sheet, "failures": failures}
            )

        return DailyReport(
            date=target_date.isoformat(),
            date_display=display_date(target_date),
            sheet=sheet,
            attendance=attendance,
            cargo=cargo,
            express=express,
            pengeluaran=pengeluaran,
        )

    def validate_range(self, start: date, end: date) -> List[date]:
        """
        Days of an inclusive range.

        Raises:
            ValidationError: If start is after end or the range is too long
        """
        if start > end:
            raise ValidationError(
                "Start date must not be after end date",
                details={"start": start.isoformat(), "end": end.isoformat()}
            )
        total = (end - start).days + 1
        if total > self.settings.max_range_days:
            raise ValidationError(
                f"Date range exceeds {self.settings.max_range_days} days",
                details={"start": start.isoformat(), "end": end.isoformat(), "days": total}
            )
        return [start + timedelta(days=offset) for offset in range(total)]

    async def generate_range_report(self, start: date, end: date) -> RangeReport:
        """
        Build and aggregate the reports of every day in a range.

        Days run concurrently (bounded by MAX_CONCURRENT_DAYS); a day that
        fails is logged and left out.

        Args:
            start: First day, inclusive
            end: Last day, inclusive

        Returns:
            RangeReport with days in calendar order

        Raises:
            ValidationError: If the range is invalid
            DataNotFoundError: If no day produced a report
        """
        days = self.validate_range(start, end)
        # Shared by the worker threads below, so created here first
        self.client
        semaphore = asyncio.Semaphore(self.settings.max_concurrent_days)
        loop = asyncio.get_running_loop()

        async def run_day(day: date) -> Optional[DailyReport]:
            async with semaphore:
                try:
                    return await loop.run_in_executor(None, self.generate_daily_report, day)
                except ConfigurationError:
                    raise
                except DailyReportException as e:
                    logger.warning(f"No data available for {day}: {e.message}")
                except Exception as e:
                    logger.error(f"Report for {day} failed: {e}", exc_info=True)
                return None

        results = await asyncio.gather(*(run_day(day) for day in days))
        reports = [report for report in results if report is not None]

        logger.info(f"Range {start} - {end}: {len(reports)}/{len(days)} days reported")

        if not reports:
            raise DataNotFoundError(
                "No data available for the specified date range",
                details={"start": start.isoformat(), "end": end.isoformat()}
            )

        return RangeReport(
            date_range=DateRange(
                start=start.isoformat(),
                end=end.isoformat(),
                start_display=display_date(start),
                end_display=display_date(end),
            ),
            total_days=len(reports),
            daily_reports=reports,
            aggregated=reduce_reports(reports),
        )

    def list_sheets(self, today: Optional[date] = None) -> Dict[str, Any]:
        """
        Available sheets, the monthly ones among them, and the one that would be read today.

        Raises:
            DataSourceError: If the spreadsheet cannot be read
        """
        today = today or date.today()
        sheets = self.client.list_sheets()
        monthly = [name for name in sheets if is_valid_sheet_name(name)]
        return {
            "sheets": sheets,
            "monthly": monthly,
            "recent": [name for name in last_12_months(today) if name in monthly],
            "current": sheet_name_for_date(today),
            "detected": find_best_sheet(sheets, today),
        }
