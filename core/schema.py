"""
Pydantic schemas for report output.
Field aliases keep the camelCase keys of the public report JSON.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReportModel(BaseModel):
    """Base model: populated by field name, serialized by alias."""
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class CargoTotals(ReportModel):
    """Per-day cargo (parcel) totals."""
    total_awb: int = Field(default=0, alias="totalAWB", description="Regular parcels (numeric AWB)")
    total_awb_online: List[str] = Field(
        default_factory=list,
        alias="totalAWBOnline",
        description="Marketplace parcel identifiers"
    )
    total_tonase: float = Field(default=0.0, alias="totalTonase")
    total_tonase_online: float = Field(default=0.0, alias="totalTonaseOnline")
    total_tunai: float = Field(default=0.0, alias="totalTunai")
    total_tf_mandiri: float = Field(default=0.0, alias="totalTfMandiri")
    total_tf_bca: float = Field(default=0.0, alias="totalTfBca")
    total_dfod: float = Field(default=0.0, alias="totalDfod")
    total_packing: float = Field(default=0.0, alias="totalPacking")


class ExpressTotals(ReportModel):
    """Per-day express courier totals."""
    total_awb_express: int = Field(default=0, alias="totalAWBExpress")
    total_tunai_express: float = Field(default=0.0, alias="totalTunaiExpress")
    total_tf_mandiri_express: float = Field(default=0.0, alias="totalTfMandiriExpress")
    total_tf_bca_express: float = Field(default=0.0, alias="totalTfBcaExpress")
    total_packing_express: float = Field(default=0.0, alias="totalPackingExpress")


class ExpenseTotals(ReportModel):
    """Per-day expense (pengeluaran) totals."""
    total_pengeluaran: float = Field(default=0.0, alias="totalPengeluaran")
    items_without_price: List[str] = Field(default_factory=list, alias="itemsWithoutPrice")


class AttendanceRecord(ReportModel):
    """One employee's clock-in/out cells for a day."""
    name: str
    date: int
    in_time: Optional[str] = Field(default=None, alias="inTime")
    out_time: Optional[str] = Field(default=None, alias="outTime")
    is_present: bool = Field(default=False, alias="isPresent")


class AttendanceSheet(ReportModel):
    """Attendance of every employee listed for a day."""
    date: int
    total_employees: int = Field(default=0, alias="totalEmployees")
    present_employees: int = Field(default=0, alias="presentEmployees")
    absent_employees: int = Field(default=0, alias="absentEmployees")
    attendance: List[AttendanceRecord] = Field(default_factory=list)


class AttendanceEntry(ReportModel):
    """Present employee as shown in a daily report."""
    name: str
    in_time: str = Field(default="-", alias="inTime")
    out_time: str = Field(default="-", alias="outTime")


class DailyReport(ReportModel):
    """Report for a single calendar day."""
    date: str
    date_display: str = Field(alias="dateDisplay")
    sheet: str
    attendance: List[AttendanceEntry] = Field(default_factory=list)
    cargo: CargoTotals = Field(default_factory=CargoTotals)
    express: ExpressTotals = Field(default_factory=ExpressTotals)
    pengeluaran: ExpenseTotals = Field(default_factory=ExpenseTotals)


class AttendanceSummary(ReportModel):
    total_unique_employees: int = Field(default=0, alias="totalUniqueEmployees")
    total_attendance_days: int = Field(default=0, alias="totalAttendanceDays")
    average_attendance_per_day: float = Field(default=0.0, alias="averageAttendancePerDay")


class CargoSummary(ReportModel):
    total_awb: int = Field(default=0, alias="totalAWB")
    total_awb_online: List[str] = Field(default_factory=list, alias="totalAWBOnline")
    total_tonase: float = Field(default=0.0, alias="totalTonase")
    total_tonase_online: float = Field(default=0.0, alias="totalTonaseOnline")
    total_tunai: float = Field(default=0.0, alias="totalTunai")
    total_tf_mandiri: float = Field(default=0.0, alias="totalTfMandiri")
    total_tf_bca: float = Field(default=0.0, alias="totalTfBca")
    total_dfod: float = Field(default=0.0, alias="totalDfod")
    total_packing: float = Field(default=0.0, alias="totalPacking")


class ExpenseSummary(ReportModel):
    total_pengeluaran: float = Field(default=0.0, alias="totalPengeluaran")
    all_items_without_price: List[str] = Field(default_factory=list, alias="allItemsWithoutPrice")


class RangeAggregate(ReportModel):
    """Totals over a date range."""
    attendance: AttendanceSummary = Field(default_factory=AttendanceSummary)
    cargo: CargoSummary = Field(default_factory=CargoSummary)
    express: ExpressTotals = Field(default_factory=ExpressTotals)
    pengeluaran: ExpenseSummary = Field(default_factory=ExpenseSummary)


class DateRange(ReportModel):
    start: str
    end: str
    start_display: str = Field(alias="startDisplay")
    end_display: str = Field(alias="endDisplay")


class RangeReport(ReportModel):
    """Report for an inclusive date range."""
    date_range: DateRange = Field(alias="dateRange")
    total_days: int = Field(alias="totalDays")
    daily_reports: List[DailyReport] = Field(default_factory=list, alias="dailyReports")
    aggregated: RangeAggregate
