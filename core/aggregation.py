"""
Range aggregation of daily reports.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence, Set

from core.schema import (
    AttendanceSummary,
    CargoSummary,
    DailyReport,
    ExpenseSummary,
    ExpressTotals,
    RangeAggregate,
)

NO_ONLINE_AWBS = "No online AWBs found"


def reduce_reports(reports: Sequence[DailyReport]) -> RangeAggregate:
    """
    Combine daily reports into range totals.

    Numeric fields are summed. Online AWBs and unpriced expenses are listed
    per day as "<date>: ...". Callers reject an empty range before reducing.

    Args:
        reports: Daily reports in calendar order

    Returns:
        RangeAggregate with copies of the daily values
    """
    names: Set[str] = set()
    attendance_days = 0
    cargo = CargoSummary()
    express = ExpressTotals()
    pengeluaran = ExpenseSummary()

    for report in reports:
        names.update(entry.name for entry in report.attendance)
        attendance_days += len(report.attendance)

        day_cargo = report.cargo
        cargo.total_awb += day_cargo.total_awb
        cargo.total_tonase += day_cargo.total_tonase
        cargo.total_tonase_online += day_cargo.total_tonase_online
        cargo.total_tunai += day_cargo.total_tunai
        cargo.total_tf_mandiri += day_cargo.total_tf_mandiri
        cargo.total_tf_bca += day_cargo.total_tf_bca
        cargo.total_dfod += day_cargo.total_dfod
        cargo.total_packing += day_cargo.total_packing
        if day_cargo.total_awb_online:
            cargo.total_awb_online.append(f"{report.date}: {' '.join(day_cargo.total_awb_online)}")

        day_express = report.express
        express.total_awb_express += day_express.total_awb_express
        express.total_tunai_express += day_express.total_tunai_express
        express.total_tf_mandiri_express += day_express.total_tf_mandiri_express
        express.total_tf_bca_express += day_express.total_tf_bca_express
        express.total_packing_express += day_express.total_packing_express

        day_expense = report.pengeluaran
        pengeluaran.total_pengeluaran += day_expense.total_pengeluaran
        if day_expense.items_without_price:
            pengeluaran.all_items_without_price.append(
                f"{report.date}: {', '.join(day_expense.items_without_price)}"
            )

    if not cargo.total_awb_online:
        cargo.total_awb_online = [NO_ONLINE_AWBS]

    average = 0.0
    if reports:
        quotient = Decimal(attendance_days / len(reports))
        average = float(quotient.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

    return RangeAggregate(
        attendance=AttendanceSummary(
            total_unique_employees=len(names),
            total_attendance_days=attendance_days,
            average_attendance_per_day=average,
        ),
        cargo=cargo,
        express=express,
        pengeluaran=pengeluaran,
    )
