"""Tests for the spreadsheet exports, read back with openpyxl."""

from datetime import datetime, timezone

import pytest
from openpyxl import load_workbook

from ims.application.show_history import HistoryLineDTO
from ims.domain.exceptions import StoreError
from ims.domain.model.order import Order, OrderLineItem, PaymentStatus, PaymentType
from ims.domain.model.value_objects import Money, Quantity
from ims.infrastructure.export.xlsx_export import (
    HISTORY_HEADERS,
    ORDER_HEADERS,
    export_history_xlsx,
    export_orders_xlsx,
)


def _order(customer: str, payment_type=None) -> Order:
    return Order(
        id="O1",
        customer=customer,
        location="Cebu",
        items=[OrderLineItem("P1", "v1", "Red Shirt", Quantity(2), Money.of("99.75"))],
        payment=PaymentStatus.PAID if payment_type else PaymentStatus.UNPAID,
        payment_type=payment_type,
        date_ordered=datetime(2024, 2, 29, 15, 0, tzinfo=timezone.utc),
    )


class TestOrderExport:

    def test_rows(self, tmp_path):
        path = tmp_path / "sales.xlsx"

        count = export_orders_xlsx([_order("Alice"), _order("Bob", PaymentType.CASH)], path)

        ws = load_workbook(path).active
        assert count == 2
        assert ws.title == "Sales Data"
        assert tuple(c.value for c in ws[1]) == ORDER_HEADERS
        assert tuple(c.value for c in ws[2]) == (
            "Alice", "Cebu", "Pending", "Unpaid", "N/A", "N/A", "2024-02-29", 199.5,
        )
        assert ws.cell(row=3, column=5).value == "Cash"
        assert ws.cell(row=1, column=1).font.bold

    def test_empty_export_has_headers(self, tmp_path):
        path = tmp_path / "sales.xlsx"
        assert export_orders_xlsx([], path) == 0
        assert load_workbook(path).active.max_row == 1

    def test_unwritable_path(self, tmp_path):
        with pytest.raises(StoreError):
            export_orders_xlsx([], tmp_path / "missing" / "sales.xlsx")


class TestHistoryExport:

    def test_rows(self, tmp_path):
        line = HistoryLineDTO(
            product_id="P1",
            variation_code="RS-01",
            product_name="Red Shirt",
            previous="10",
            current="7",
            changed="3",
            change_type="Sold",
            change_date="2024-03-15 09:30:00",
            changed_by="Alice",
        )
        path = tmp_path / "history.xlsx"

        assert export_history_xlsx([line], path) == 1

        ws = load_workbook(path).active
        assert ws.title == "Stock History"
        assert tuple(c.value for c in ws[1]) == HISTORY_HEADERS
        assert tuple(c.value for c in ws[2]) == (
            "Red Shirt", "RS-01", "3", "Sold", "2024-03-15 09:30:00", "Alice",
        )
