"""
Row classification and per-day accumulation for the cargo, express and
expense tables. Malformed cells never raise; they count as zero.
"""
import re
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence

from core.cells import cell_at, cell_text, is_blank, number_or
from core.layouts import CARGO, EXPENSE, EXPRESS, CargoLayout, ExpenseLayout, ExpressLayout
from core.logger import setup_logger
from core.schema import CargoTotals, ExpenseTotals, ExpressTotals
from core.segments import DaySegment

logger = setup_logger(__name__)


class RowCategory(str, Enum):
    """Mutually exclusive classification of a table row."""
    REGULAR_PARCEL = "regular_parcel"
    ONLINE_PARCEL = "online_parcel"
    SUMMARY_ROW = "summary_row"
    PRICED_EXPENSE = "priced_expense"
    UNPRICED_EXPENSE = "unpriced_expense"
    IGNORED = "ignored"


def is_summary_identifier(identifier: str, layout: CargoLayout = CARGO) -> bool:
    """True for the literal running-total label in the AWB column."""
    return identifier.strip().lower() == layout.summary_label


def classify_parcel(identifier: Any, layout: CargoLayout = CARGO) -> Optional[RowCategory]:
    """
    Classify a cargo row by its AWB identifier.

    Marketplace names are checked before the numeric AWB rule, so
    "Shopee-1234567890" is online, not regular.

    Args:
        identifier: Raw AWB cell
        layout: Cargo layout (marketplace markers, AWB pattern)

    Returns:
        ONLINE_PARCEL, REGULAR_PARCEL, IGNORED, or None when the row carries
        no identifier (blank or the "total" label)
    """
    text = cell_text(identifier)
    if not text or is_summary_identifier(text, layout):
        return None

    lowered = text.lower()
    if any(marker in lowered for marker in layout.online_markers):
        return RowCategory.ONLINE_PARCEL
    if re.match(layout.regular_awb_pattern, text):
        return RowCategory.REGULAR_PARCEL
    return RowCategory.IGNORED


def accumulate_cargo(segment: DaySegment, layout: CargoLayout = CARGO) -> CargoTotals:
    """
    Fold a day's cargo rows into totals.

    Payment columns are summed for every row that has an identifier,
    whatever its parcel category.

    Args:
        segment: Rows of the target day
        layout: Cargo column layout

    Returns:
        CargoTotals for the day
    """
    total_awb = 0
    online_awbs: List[str] = []
    weight = 0.0
    online_weight = 0.0
    tunai = mandiri = bca = dfod = packing = 0.0

    for sheet_row, row in segment.rows:
        category = classify_parcel(cell_at(row, layout.awb_col), layout)
        if category is None:
            continue

        row_weight = number_or(cell_at(row, layout.weight_col))
        tunai += number_or(cell_at(row, layout.cash_col))
        mandiri += sum(number_or(cell_at(row, col)) for col in layout.mandiri_cols)
        bca += number_or(cell_at(row, layout.bca_col))
        dfod += number_or(cell_at(row, layout.dfod_col))
        packing += number_or(cell_at(row, layout.packing_col))

        if category is RowCategory.ONLINE_PARCEL:
            online_awbs.append(cell_text(cell_at(row, layout.awb_col)))
            online_weight += row_weight + number_or(cell_at(row, layout.secondary_weight_col))
        elif category is RowCategory.REGULAR_PARCEL:
            total_awb += 1
            weight += row_weight
        else:
            logger.debug(f"Row {sheet_row}: identifier not counted as a parcel")

    return CargoTotals(
        total_awb=total_awb,
        total_awb_online=online_awbs,
        total_tonase=weight,
        total_tonase_online=online_weight,
        total_tunai=tunai,
        total_tf_mandiri=mandiri,
        total_tf_bca=bca,
        total_dfod=dfod,
        total_packing=packing,
    )


def classify_express_row(row: Sequence[Any], layout: ExpressLayout = EXPRESS) -> Optional[RowCategory]:
    """
    Classify an express row.

    Returns:
        SUMMARY_ROW if any cell mentions "total", REGULAR_PARCEL if any
        payment field is filled, otherwise None
    """
    marker = layout.summary_marker
    if any(marker in cell_text(value).lower() for value in row):
        return RowCategory.SUMMARY_ROW
    if any(not is_blank(cell_at(row, col)) for col in layout.payment_cols):
        return RowCategory.REGULAR_PARCEL
    return None


def accumulate_express(segment: DaySegment, layout: ExpressLayout = EXPRESS) -> ExpressTotals:
    """
    Fold a day's express rows into totals.
    Each row with at least one payment value is one shipment.
    """
    count = 0
    tunai = mandiri = bca = packing = 0.0

    for sheet_row, row in segment.rows:
        category = classify_express_row(row, layout)
        if category is RowCategory.SUMMARY_ROW:
            logger.debug(f"Row {sheet_row}: skipped express summary row")
            continue
        if category is None:
            continue

        count += 1
        tunai += number_or(cell_at(row, layout.cash_col))
        mandiri += number_or(cell_at(row, layout.mandiri_col))
        bca += number_or(cell_at(row, layout.bca_col))
        packing += number_or(cell_at(row, layout.packing_col))

    return ExpressTotals(
        total_awb_express=count,
        total_tunai_express=tunai,
        total_tf_mandiri_express=mandiri,
        total_tf_bca_express=bca,
        total_packing_express=packing,
    )


def expense_day_matches(value: Any, day: int) -> bool:
    """Expense rows carry their own day, written as "5" or "05"."""
    text = cell_text(value)
    return bool(text) and text in (str(day), f"{day:02d}")


def classify_expense_row(row: Sequence[Any], day: int, layout: ExpenseLayout = EXPENSE) -> Optional[RowCategory]:
    """
    Classify an expense row for a day.

    Returns:
        PRICED_EXPENSE or UNPRICED_EXPENSE, or None when the row is for
        another day or has no description
    """
    if not expense_day_matches(cell_at(row, layout.date_col), day):
        return None
    if is_blank(cell_at(row, layout.description_col)):
        return None
    if is_blank(cell_at(row, layout.amount_col)):
        return RowCategory.UNPRICED_EXPENSE
    return RowCategory.PRICED_EXPENSE


def accumulate_expenses(
    grid: Iterable[Sequence[Any]],
    day: int,
    layout: ExpenseLayout = EXPENSE
) -> ExpenseTotals:
    """
    Sum the day's priced expenses and list the unpriced ones.

    Args:
        grid: Rows of the expense block
        day: Day of month (1-31)
        layout: Expense column layout

    Returns:
        ExpenseTotals for the day
    """
    total = 0.0
    without_price: List[str] = []

    for row in grid:
        category = classify_expense_row(row, day, layout)
        if category is RowCategory.PRICED_EXPENSE:
            total += number_or(cell_at(row, layout.amount_col))
        elif category is RowCategory.UNPRICED_EXPENSE:
            without_price.append(cell_text(cell_at(row, layout.description_col)))

    return ExpenseTotals(total_pengeluaran=total, items_without_price=without_price)
