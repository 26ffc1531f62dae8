"""Domain service: Order Fulfillment.

Coordinates orders with stock.  Placing an order sells stock and
cancelling one returns it, both through the InventoryLedger so every
movement is validated and audited the same way as a manual edit.

Placement is two-phase (validate-then-mutate): every line is resolved
and checked against stored stock before the first unit moves.  If a
write still fails halfway (store error, concurrent edit), the movements
already made are reversed before the error propagates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from ims.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
    PreconditionError,
    ValidationError,
)
from ims.domain.model.change_record import ChangeType
from ims.domain.model.order import Order, OrderLineItem, OrderStatus
from ims.domain.model.product import Product, Variation
from ims.domain.model.value_objects import Quantity
from ims.domain.repository.order_repository import OrderRepository
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.service.inventory_ledger import InventoryLedger, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineRequest:
    """One requested line: a variation (by code, or by name) and a quantity."""

    product_name: str
    quantity: int
    variation_code: str | None = None


@dataclass(frozen=True)
class _StockMove:
    product_id: str
    variation_code: str
    delta: int


class OrderFulfillmentService:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        ledger: InventoryLedger,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._ledger = ledger
        self._clock = clock

    # --- Placement ------------------------------------------------------------

    def place_order(
        self,
        customer: str,
        location: str,
        requests: list[LineRequest],
        actor: str | None = None,
    ) -> Order:
        """Create a Pending/Unpaid order and sell its stock.

        Phase 1 resolves every line and checks the summed quantity per
        variation against stored stock; nothing is written if any line
        fails.  Phase 2 moves stock line by line, then saves the order.
        """
        products = self._product_repo.list_all()

        # Phase 1: resolve and validate
        items: list[OrderLineItem] = []
        moves: list[_StockMove] = []
        requested: dict[str, int] = {}
        variations: dict[str, Variation] = {}

        for req in requests:
            product, variation = self._resolve(products, req)
            qty = Quantity(req.quantity)
            items.append(
                OrderLineItem(
                    product_id=product.id,
                    variation_id=variation.id,
                    product_name=variation.name,
                    quantity=qty,
                    unit_price=variation.price,  # <-- price snapshot
                )
            )
            moves.append(_StockMove(product.id, variation.code, -qty.value))
            requested[variation.id] = requested.get(variation.id, 0) + qty.value
            variations[variation.id] = variation

        for variation_id, qty in requested.items():
            variation = variations[variation_id]
            if qty > variation.quantity:
                raise InsufficientStockError(variation.name, qty, variation.quantity)

        order = Order.create(customer, location, items, date_ordered=self._clock())

        # Phase 2: mutate and persist
        self._apply_moves(
            moves,
            ChangeType.SOLD,
            ChangeType.ADDED,
            actor,
            lambda: self._order_repo.save(order),
        )

        logger.info(
            "order_placed",
            extra={
                "order_id": order.id,
                "customer": order.customer,
                "lines": len(order.items),
                "total": str(order.total.amount),
            },
        )
        return order

    # --- Status ---------------------------------------------------------------

    def cancel_order(self, order_id: str, actor: str | None = None) -> Order:
        """Return every line's stock, then mark the order Cancelled."""
        order = self._get_order(order_id)
        if not order.can_transition_to(OrderStatus.CANCELLED):
            raise PreconditionError(
                f"Cannot cancel order {order_id} in {order.status.value} status"
            )

        moves = []
        for item in order.items:
            product = self._product_repo.get_by_id(item.product_id)
            if product is None:
                raise EntityNotFoundError(
                    f"Product with ID '{item.product_id}' not found"
                )
            variation = product.variations.get(item.variation_id)
            if variation is None:
                raise EntityNotFoundError(
                    f"Variation for '{item.product_name}' no longer exists"
                )
            moves.append(_StockMove(product.id, variation.code, item.quantity.value))

        def _finish() -> None:
            order.transition_to(OrderStatus.CANCELLED)
            self._order_repo.save(order)

        self._apply_moves(
            moves, ChangeType.CANCELLATION_RETURN, ChangeType.SOLD, actor, _finish
        )

        logger.info("order_cancelled", extra={"order_id": order.id})
        return order

    def advance_status(
        self, order_id: str, target: OrderStatus, actor: str | None = None
    ) -> Order:
        """Move an order forward.  Cancelling also restocks its lines."""
        if target == OrderStatus.CANCELLED:
            return self.cancel_order(order_id, actor)

        order = self._get_order(order_id)
        previous = order.status
        order.transition_to(target)
        self._order_repo.save(order)

        logger.info(
            "order_status_changed",
            extra={
                "order_id": order.id,
                "from_status": previous.value,
                "to_status": target.value,
            },
        )
        return order

    # --- Internal helpers -----------------------------------------------------

    def _get_order(self, order_id: str) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        return order

    @staticmethod
    def _resolve(
        products: list[Product], req: LineRequest
    ) -> tuple[Product, Variation]:
        """Find the single variation a request refers to.

        A code is preferred; a name is accepted only when it is unambiguous
        across the whole catalog.
        """
        if req.variation_code:
            matches = [
                (p, v)
                for p in products
                for v in p.variations.values()
                if v.code == req.variation_code
            ]
            label = f"code '{req.variation_code}'"
        else:
            matches = [
                (p, v) for p in products for v in p.variations_named(req.product_name)
            ]
            label = f"'{req.product_name}'"

        if not matches:
            raise EntityNotFoundError(f"Product not found: {label}")
        if len(matches) > 1:
            raise ValidationError(
                f"Product {label} is ambiguous ({len(matches)} matches); "
                f"specify a variation code"
            )
        return matches[0]

    def _apply_moves(
        self,
        moves: list[_StockMove],
        change_type: ChangeType,
        reverse_type: ChangeType,
        actor: str | None,
        finish: Callable[[], None],
    ) -> None:
        """Apply *moves* then call *finish*; undo applied moves on failure."""
        applied: list[_StockMove] = []
        try:
            for move in moves:
                self._ledger.apply_stock_delta(
                    move.product_id, move.variation_code, move.delta, change_type, actor
                )
                applied.append(move)
            finish()
        except DomainException:
            self._compensate(applied, reverse_type, actor)
            raise

    def _compensate(
        self, applied: list[_StockMove], reverse_type: ChangeType, actor: str | None
    ) -> None:
        for move in reversed(applied):
            try:
                self._ledger.apply_stock_delta(
                    move.product_id, move.variation_code, -move.delta, reverse_type, actor
                )
            except DomainException:
                logger.error(
                    "order_compensation_failed",
                    exc_info=True,
                    extra={
                        "product_id": move.product_id,
                        "variation_code": move.variation_code,
                        "delta": -move.delta,
                    },
                )
            else:
                logger.warning(
                    "order_compensation",
                    extra={
                        "product_id": move.product_id,
                        "variation_code": move.variation_code,
                        "delta": -move.delta,
                    },
                )
