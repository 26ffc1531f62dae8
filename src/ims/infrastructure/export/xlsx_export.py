"""Spreadsheet exports for the sales and history pages."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ims.application.show_history import HistoryLineDTO
from ims.domain.exceptions import StoreError
from ims.domain.model.order import Order

ORDER_HEADERS = (
    "Customer", "Location", "Status", "Payment",
    "Payment Type", "Payment Reason", "Date Ordered", "Total",
)
HISTORY_HEADERS = (
    "Product", "Variation", "Quantity Changed", "Change Type",
    "Change Date", "Changed By",
)

_HEADER_FILL = PatternFill("solid", fgColor="00B0F0")
_HEADER_FONT = Font(bold=True)
_CENTER = Alignment(horizontal="center", vertical="center")
_THIN = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)


def export_orders_xlsx(orders: Iterable[Order], filename: Path) -> int:
    """Write one row per order; returns the number of rows written."""
    rows = [
        (
            o.customer,
            o.location,
            o.status.value,
            o.payment.value,
            o.payment_type.value if o.payment_type else "N/A",
            o.payment_reason or "N/A",
            o.date_ordered.date().isoformat(),
            float(o.total.amount),
        )
        for o in orders
    ]
    _write_sheet("Sales Data", ORDER_HEADERS, rows, filename)
    return len(rows)


def export_history_xlsx(lines: Iterable[HistoryLineDTO], filename: Path) -> int:
    rows = [
        (
            line.product_name,
            line.variation_code,
            line.changed,
            line.change_type,
            line.change_date,
            line.changed_by,
        )
        for line in lines
    ]
    _write_sheet("Stock History", HISTORY_HEADERS, rows, filename)
    return len(rows)


def _write_sheet(
    title: str, headers: Sequence[str], rows: list[tuple], filename: Path
) -> None:
    wb = Workbook()
    ws = wb.active
    ws.title = title

    # ---------- Header Row ----------
    for col, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.fill = _HEADER_FILL
        cell.font = _HEADER_FONT
        cell.alignment = _CENTER
        cell.border = _THIN
        ws.column_dimensions[get_column_letter(col)].width = 18

    # ---------- Data Rows ----------
    for i, row in enumerate(rows, start=2):
        for col, value in enumerate(row, start=1):
            cell = ws.cell(row=i, column=col, value=value)
            cell.border = _THIN
            cell.alignment = _CENTER

    try:
        wb.save(filename)
    except OSError as exc:
        raise StoreError(f"Cannot write {filename}: {exc}") from exc
