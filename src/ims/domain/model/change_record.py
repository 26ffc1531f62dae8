"""Audit records for stock and price changes.

Records are append-only.  Each one carries a deterministic ``record_key``
derived from its content, which the store uses as an insert-if-absent key:
writing the same record twice stores it once.

The key includes ``change_date`` at full (microsecond) precision.  Two
submissions of the same edit made through separate calls get different
timestamps from a real clock and therefore different keys; the key
guards against re-sending one record, not against a user repeating an
edit.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class ChangeType(Enum):
    ADDED = "Added"
    SOLD = "Sold"
    CANCELLATION_RETURN = "Stock Cancellation Return"
    PRICE_REVISION = "Price Revision"


class HistoryStream(Enum):
    STOCK = "stockChanges"
    PRICE = "priceChanges"


def _digest(*parts: object) -> str:
    joined = "|".join(str(p) for p in parts)
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class StockChange:
    """One stock movement.

    ``record_key`` only repeats when every field it hashes repeats,
    including the exact ``change_date``; see the module docstring.
    """

    product_id: str
    variation_code: str
    product_name: str
    previous_stock: int
    current_stock: int
    change_type: ChangeType
    change_date: datetime
    first_name: str = "Unknown"

    @property
    def quantity_changed(self) -> int:
        return abs(self.current_stock - self.previous_stock)

    @property
    def record_key(self) -> str:
        return _digest(
            self.product_id,
            self.variation_code,
            self.change_date.isoformat(),
            self.previous_stock,
            self.current_stock,
            self.change_type.value,
        )


@dataclass(frozen=True)
class PriceChange:
    """One price revision.  Keyed like ``StockChange``."""

    product_id: str
    variation_code: str
    product_name: str
    previous_price: Decimal
    current_price: Decimal
    change_date: datetime
    first_name: str = "Unknown"
    change_type: ChangeType = ChangeType.PRICE_REVISION

    @property
    def record_key(self) -> str:
        # normalize() so 10, 10.0 and 10.00 hash identically
        return _digest(
            self.product_id,
            self.variation_code,
            self.change_date.isoformat(),
            self.previous_price.normalize(),
            self.current_price.normalize(),
            self.change_type.value,
        )


ChangeRecord = StockChange | PriceChange
