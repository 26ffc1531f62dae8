"""Domain service: Inventory Ledger.

Every stock or price mutation in the system goes through this service.
Each change follows the same sequence:

  1. validate the submitted value (no I/O on bad input),
  2. re-read the product from the store (never trust a caller's copy),
  3. compute the delta; an unchanged value is a ``NoOp``,
  4. write the new value with compare-and-set on the value just read,
  5. append a history record keyed by its content hash.

The history append happens strictly after the value write succeeds, so a
failed write never leaves an orphan audit entry.  If the append itself
fails, the value is set back to what was read before the error
propagates, so a value never changes without a matching record.  The
content-hash key makes the append idempotent: re-sending the same record
stores it once.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from ims.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    StoreError,
)
from ims.domain.model.change_record import (
    ChangeRecord,
    ChangeType,
    HistoryStream,
    PriceChange,
    StockChange,
)
from ims.domain.model.product import Product, Variation
from ims.domain.model.user import UNKNOWN_ACTOR
from ims.domain.model.value_objects import Money, parse_stock_level
from ims.domain.repository.change_log_repository import ChangeLogRepository
from ims.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Applied:
    """A change was written.  ``logged`` is False if history already had it."""

    previous: int | Decimal
    new: int | Decimal
    change_type: ChangeType
    record_key: str
    logged: bool = True


@dataclass(frozen=True)
class NoOp:
    """The submitted value equals the stored one; nothing was written."""

    current: int | Decimal


LedgerResult = Applied | NoOp


class HistoryView:
    """Re-iterable view over one history stream.

    Every iteration re-reads the store, so the view always reflects the
    latest records and can be consumed any number of times.
    """

    def __init__(
        self,
        changes: ChangeLogRepository,
        stream: HistoryStream,
        product_id: str | None = None,
    ) -> None:
        self._changes = changes
        self.stream = stream
        self.product_id = product_id

    def __iter__(self) -> Iterator[ChangeRecord]:
        return self._changes.iter_records(self.stream, self.product_id)


class InventoryLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        change_log: ChangeLogRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._product_repo = product_repo
        self._change_log = change_log
        self._clock = clock

    # --- Stock ----------------------------------------------------------------

    def apply_quantity_change(
        self,
        product_id: str,
        variation_code: str,
        new_quantity: object,
        actor: str | None = None,
    ) -> LedgerResult:
        """Set a variation's stock to *new_quantity*.

        Classified as Added when stock goes up and Sold when it goes down.
        """
        quantity = parse_stock_level(new_quantity)
        product, variation = self._load(product_id, variation_code)
        delta = quantity - variation.quantity
        change_type = ChangeType.ADDED if delta > 0 else ChangeType.SOLD
        return self._commit_stock(product, variation, quantity, change_type, actor)

    def apply_stock_delta(
        self,
        product_id: str,
        variation_code: str,
        delta: int,
        change_type: ChangeType,
        actor: str | None = None,
    ) -> LedgerResult:
        """Move a variation's stock by *delta* relative to the stored value.

        Used by order placement and cancellation, which know how many
        units move rather than the resulting level.
        """
        product, variation = self._load(product_id, variation_code)
        new_quantity = variation.quantity + delta
        if new_quantity < 0:
            raise InsufficientStockError(variation.name, -delta, variation.quantity)
        return self._commit_stock(product, variation, new_quantity, change_type, actor)

    def _commit_stock(
        self,
        product: Product,
        variation: Variation,
        new_quantity: int,
        change_type: ChangeType,
        actor: str | None,
    ) -> LedgerResult:
        previous = variation.quantity
        if new_quantity == previous:
            logger.info(
                "stock_change_noop",
                extra={"product_id": product.id, "variation_code": variation.code},
            )
            return NoOp(current=previous)

        self._product_repo.set_variation_quantity(
            product.id, variation.id, expected=previous, new=new_quantity
        )

        record = StockChange(
            product_id=product.id,
            variation_code=variation.code,
            product_name=variation.name,
            previous_stock=previous,
            current_stock=new_quantity,
            change_type=change_type,
            change_date=self._clock(),
            first_name=actor or UNKNOWN_ACTOR,
        )
        try:
            logged = self._append(record)
        except StoreError:
            self._revert(
                lambda: self._product_repo.set_variation_quantity(
                    product.id, variation.id, expected=new_quantity, new=previous
                ),
                record,
            )
            raise

        logger.info(
            "stock_change_applied",
            extra={
                "product_id": product.id,
                "variation_code": variation.code,
                "previous": previous,
                "current": new_quantity,
                "change_type": change_type.value,
                "actor": record.first_name,
            },
        )
        return Applied(previous, new_quantity, change_type, record.record_key, logged)

    # --- Price ----------------------------------------------------------------

    def apply_price_change(
        self,
        product_id: str,
        variation_code: str,
        new_price: object,
        actor: str | None = None,
    ) -> LedgerResult:
        """Set a variation's unit price.  Fractional prices are allowed."""
        amount = Money.of(new_price).amount
        product, variation = self._load(product_id, variation_code)
        price = Money(amount, variation.price.currency)
        previous = variation.price
        if price.amount == previous.amount:
            logger.info(
                "price_change_noop",
                extra={"product_id": product.id, "variation_code": variation.code},
            )
            return NoOp(current=previous.amount)

        self._product_repo.set_variation_price(
            product.id, variation.id, expected=previous, new=price
        )

        record = PriceChange(
            product_id=product.id,
            variation_code=variation.code,
            product_name=variation.name,
            previous_price=previous.amount,
            current_price=price.amount,
            change_date=self._clock(),
            first_name=actor or UNKNOWN_ACTOR,
        )
        try:
            logged = self._append(record)
        except StoreError:
            self._revert(
                lambda: self._product_repo.set_variation_price(
                    product.id, variation.id, expected=price, new=previous
                ),
                record,
            )
            raise

        logger.info(
            "price_change_applied",
            extra={
                "product_id": product.id,
                "variation_code": variation.code,
                "previous": str(previous.amount),
                "current": str(price.amount),
                "actor": record.first_name,
            },
        )
        return Applied(
            previous.amount, price.amount, record.change_type, record.record_key, logged
        )

    # --- History --------------------------------------------------------------

    def list_history(
        self, stream: HistoryStream, product_id: str | None = None
    ) -> HistoryView:
        return HistoryView(self._change_log, stream, product_id)

    # --- Internal helpers -----------------------------------------------------

    def _load(self, product_id: str, variation_code: str) -> tuple[Product, Variation]:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product, product.find_variation(variation_code)

    def _append(self, record: ChangeRecord) -> bool:
        logged = self._change_log.append(record)
        if not logged:
            logger.warning(
                "change_duplicate_suppressed",
                extra={
                    "product_id": record.product_id,
                    "variation_code": record.variation_code,
                    "record_key": record.record_key,
                },
            )
        return logged

    @staticmethod
    def _revert(restore: Callable[[], None], record: ChangeRecord) -> None:
        """Undo a value write whose history record could not be stored."""
        try:
            restore()
        except StoreError:
            logger.error(
                "change_revert_failed",
                exc_info=True,
                extra={
                    "product_id": record.product_id,
                    "variation_code": record.variation_code,
                    "record_key": record.record_key,
                },
            )
        else:
            logger.warning(
                "change_reverted",
                extra={
                    "product_id": record.product_id,
                    "variation_code": record.variation_code,
                },
            )
