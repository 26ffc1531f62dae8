"""Document-store implementation of ChangeLogRepository.

Records live at ``<stream>/<productId>/<recordKey>`` using the field
names of the existing history data (``currentStock``, ``firstName``...).
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime
from decimal import Decimal

from ims.domain.model.change_record import (
    ChangeRecord,
    ChangeType,
    HistoryStream,
    PriceChange,
    StockChange,
)
from ims.domain.repository.change_log_repository import ChangeLogRepository
from ims.infrastructure.persistence.json_document_store import JsonDocumentStore


class JsonChangeLogRepository(ChangeLogRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    # --- ChangeLogRepository interface ----------------------------------------

    def append(self, record: ChangeRecord) -> bool:
        stream = _stream_of(record)
        return self._store.insert_if_absent(
            f"{stream.value}/{record.product_id}/{record.record_key}",
            self._to_raw(record),
        )

    def iter_records(
        self, stream: HistoryStream, product_id: str | None = None
    ) -> Iterator[ChangeRecord]:
        if product_id is not None:
            groups = {product_id: self._store.children(f"{stream.value}/{product_id}")}
        else:
            groups = self._store.children(stream.value)
        for pid, records in groups.items():
            for raw in records.values():
                yield self._to_domain(stream, pid, raw)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: ChangeRecord) -> dict:
        raw = {
            "variationCode": record.variation_code,
            "productName": record.product_name,
            "changeDate": record.change_date.isoformat(),
            "changeType": record.change_type.value,
            "firstName": record.first_name,
        }
        if isinstance(record, StockChange):
            raw.update(
                currentStock=record.current_stock,
                previousStock=record.previous_stock,
                quantityChanged=record.quantity_changed,
            )
        else:
            raw.update(
                currentPrice=str(record.current_price),
                previousPrice=str(record.previous_price),
            )
        return raw

    @staticmethod
    def _to_domain(stream: HistoryStream, product_id: str, raw: dict) -> ChangeRecord:
        common = dict(
            product_id=product_id,
            variation_code=raw["variationCode"],
            product_name=raw.get("productName", ""),
            change_date=datetime.fromisoformat(raw["changeDate"]),
            first_name=raw.get("firstName", "Unknown"),
        )
        if stream == HistoryStream.STOCK:
            return StockChange(
                previous_stock=raw["previousStock"],
                current_stock=raw["currentStock"],
                change_type=ChangeType(raw["changeType"]),
                **common,
            )
        return PriceChange(
            previous_price=Decimal(str(raw["previousPrice"])),
            current_price=Decimal(str(raw["currentPrice"])),
            **common,
        )


def _stream_of(record: ChangeRecord) -> HistoryStream:
    return HistoryStream.STOCK if isinstance(record, StockChange) else HistoryStream.PRICE
