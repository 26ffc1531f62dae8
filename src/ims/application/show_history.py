"""Application service: Show History use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from ims.domain.model.change_record import HistoryStream, StockChange
from ims.domain.service.inventory_ledger import InventoryLedger


@dataclass(frozen=True)
class HistoryLineDTO:
    product_id: str
    variation_code: str
    product_name: str
    previous: str
    current: str
    changed: str
    change_type: str
    change_date: str
    changed_by: str


class ShowHistoryHandler:

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def handle(
        self, stream: HistoryStream, product_id: str | None = None
    ) -> list[HistoryLineDTO]:
        lines = []
        for record in self._ledger.list_history(stream, product_id):
            if isinstance(record, StockChange):
                previous, current = str(record.previous_stock), str(record.current_stock)
                changed = str(record.quantity_changed)
            else:
                previous, current = str(record.previous_price), str(record.current_price)
                changed = str(record.current_price - record.previous_price)
            lines.append(
                HistoryLineDTO(
                    product_id=record.product_id,
                    variation_code=record.variation_code,
                    product_name=record.product_name,
                    previous=previous,
                    current=current,
                    changed=changed,
                    change_type=record.change_type.value,
                    change_date=record.change_date.strftime("%Y-%m-%d %H:%M:%S"),
                    changed_by=record.first_name,
                )
            )
        return lines
