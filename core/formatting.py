"""
Plain-text rendering of a daily report (the layout sent to the team chat).
"""
from typing import List

from core.cells import format_number
from core.schema import DailyReport


def format_amount(value: float) -> str:
    """Thousands-separated amount: 1500000 -> '1,500,000', 12.5 -> '12.50'."""
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.2f}"


def format_daily_report(report: DailyReport) -> str:
    """
    Render a daily report as text.

    Args:
        report: Daily report

    Returns:
        Multi-line report text
    """
    cargo = report.cargo
    express = report.express
    expense = report.pengeluaran

    lines: List[str] = ["Laporan Harian J&T", report.date_display, "", "Absensi:"]
    if report.attendance:
        for number, entry in enumerate(report.attendance, start=1):
            lines.append(f"{number}. {entry.name} (In: {entry.in_time}, Out: {entry.out_time})")
    else:
        lines.append("Tidak ada data absensi untuk tanggal ini")

    online = " ".join(cargo.total_awb_online) if cargo.total_awb_online else "TBD"
    lines += [
        "",
        "CARGO",
        f"2.1 Total AWB: {cargo.total_awb} pcs",
        f"2.2 Total AWB Online: {online}",
        f"2.3 Total Tonase: {format_number(cargo.total_tonase)} kg",
        f"2.4 Total Tonase Online: {format_number(cargo.total_tonase_online)} kg",
        f"2.5 Total Tunai: Rp {format_amount(cargo.total_tunai)}",
        f"2.6 Total TF Mandiri: Rp {format_amount(cargo.total_tf_mandiri)}",
        f"2.7 Total TF BCA: Rp {format_amount(cargo.total_tf_bca)}",
        f"2.8 Total DFOD: Rp {format_amount(cargo.total_dfod)}",
        f"2.9 Total Packing: Rp {format_amount(cargo.total_packing)}",
        "",
        "EXPRESS",
        f"3.1 Total AWB Express: {express.total_awb_express} pcs",
        f"3.2 Total Tunai Express: Rp {format_amount(express.total_tunai_express)}",
        f"3.3 Total TF Mandiri Express: Rp {format_amount(express.total_tf_mandiri_express)}",
        f"3.4 Total TF BCA Express: Rp {format_amount(express.total_tf_bca_express)}",
        f"3.5 Total Packing Express: Rp {format_amount(express.total_packing_express)}",
        "",
        "PENGELUARAN / PEMBELIAN",
        f"4.1 Total: Rp {format_amount(expense.total_pengeluaran)}",
        "4.2 Pengeluaran Tanpa Harga:",
    ]
    if expense.items_without_price:
        lines += [f"- {item}" for item in expense.items_without_price]
    else:
        lines.append("-")

    return "\n".join(lines)
