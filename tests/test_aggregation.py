"""
Unit tests for range aggregation.
"""
from core.aggregation import NO_ONLINE_AWBS, reduce_reports
from core.schema import (
    AttendanceEntry,
    CargoTotals,
    DailyReport,
    ExpenseTotals,
    ExpressTotals,
)


def make_report(day, names=(), awb=0, online=(), tonase=0.0, tunai=0.0, express=0, expense=0.0, unpriced=()):
    return DailyReport(
        date=f"2025-08-{day:02d}",
        date_display=f"August {day}, 2025",
        sheet="AUG25",
        attendance=[AttendanceEntry(name=name, in_time="08:00") for name in names],
        cargo=CargoTotals(total_awb=awb, total_awb_online=list(online), total_tonase=tonase, total_tunai=tunai),
        express=ExpressTotals(total_awb_express=express, total_tunai_express=tunai),
        pengeluaran=ExpenseTotals(total_pengeluaran=expense, items_without_price=list(unpriced)),
    )


def test_numeric_fields_are_summed():
    """Test aggregation is additive over days."""
    reports = [
        make_report(1, awb=2, tonase=1.5, tunai=1000, express=1, expense=500),
        make_report(2, awb=3, tonase=2.0, tunai=250, express=4, expense=100),
    ]
    aggregate = reduce_reports(reports)
    assert aggregate.cargo.total_awb == 5
    assert aggregate.cargo.total_tonase == 3.5
    assert aggregate.cargo.total_tunai == 1250
    assert aggregate.express.total_awb_express == 5
    assert aggregate.express.total_tunai_express == 1250
    assert aggregate.pengeluaran.total_pengeluaran == 600


def test_online_awbs_listed_per_day():
    """Test online identifiers are grouped by date."""
    reports = [
        make_report(1, online=["Shopee-1", "Tiktok-2"]),
        make_report(2),
        make_report(3, online=["API-3"]),
    ]
    aggregate = reduce_reports(reports)
    assert aggregate.cargo.total_awb_online == [
        "2025-08-01: Shopee-1 Tiktok-2",
        "2025-08-03: API-3",
    ]


def test_no_online_awbs_sentinel():
    """Test the placeholder when no day had online parcels."""
    aggregate = reduce_reports([make_report(1), make_report(2)])
    assert aggregate.cargo.total_awb_online == [NO_ONLINE_AWBS]


def test_unpriced_items_listed_per_day():
    """Test unpriced expenses are grouped by date."""
    reports = [make_report(1, unpriced=["fuel", "tape"]), make_report(2)]
    aggregate = reduce_reports(reports)
    assert aggregate.pengeluaran.all_items_without_price == ["2025-08-01: fuel, tape"]


def test_attendance_summary():
    """Test unique employees, attendance days and the daily average."""
    reports = [
        make_report(1, names=["Andi", "Budi"]),
        make_report(2, names=["Andi"]),
        make_report(3, names=["Andi", "Citra"]),
    ]
    summary = reduce_reports(reports).attendance
    assert summary.total_unique_employees == 3
    assert summary.total_attendance_days == 5
    assert summary.average_attendance_per_day == 1.7


def test_average_rounds_half_up():
    """Test an average exactly halfway between tenths rounds up."""
    reports = [
        make_report(1, names=["Andi", "Budi"]),
        make_report(2, names=["Andi"]),
        make_report(3, names=["Budi"]),
        make_report(4, names=["Citra"]),
    ]
    assert reduce_reports(reports).attendance.average_attendance_per_day == 1.3


def test_single_day_equals_daily_totals():
    """Test aggregating one day reproduces its totals."""
    report = make_report(4, names=["Andi"], awb=7, tonase=3.25, tunai=900, express=2, expense=40)
    aggregate = reduce_reports([report])
    assert aggregate.cargo.total_awb == report.cargo.total_awb
    assert aggregate.cargo.total_tonase == report.cargo.total_tonase
    assert aggregate.express.to_dict() == report.express.to_dict()
    assert aggregate.pengeluaran.total_pengeluaran == report.pengeluaran.total_pengeluaran
    assert aggregate.attendance.average_attendance_per_day == 1.0


def test_daily_reports_are_not_mutated():
    """Test reducing leaves the daily values untouched."""
    report = make_report(1, online=["Shopee-1"], awb=1)
    reduce_reports([report, report])
    assert report.cargo.total_awb_online == ["Shopee-1"]
    assert report.cargo.total_awb == 1


def test_empty_input():
    """Test reducing no reports gives zero totals."""
    aggregate = reduce_reports([])
    assert aggregate.cargo.total_awb == 0
    assert aggregate.attendance.average_attendance_per_day == 0.0
