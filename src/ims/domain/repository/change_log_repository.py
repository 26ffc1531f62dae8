"""Abstract repository for the stock and price history streams."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator

from ims.domain.model.change_record import ChangeRecord, HistoryStream


class ChangeLogRepository(ABC):

    @abstractmethod
    def append(self, record: ChangeRecord) -> bool:
        """Store *record* under its ``record_key`` unless already present.

        Returns False when an identical record was logged before.
        """

    @abstractmethod
    def iter_records(
        self, stream: HistoryStream, product_id: str | None = None
    ) -> Iterator[ChangeRecord]:
        """Yield records of *stream* in insertion order."""
