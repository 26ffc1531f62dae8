"""Order aggregate.

The Order is an aggregate root that owns its line items.  Status only
moves forward; the transition table below is the single source of truth
for which moves are legal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ims.domain.exceptions import PreconditionError, ValidationError
from ims.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentStatus(Enum):
    UNPAID = "Unpaid"
    PAID = "Paid"


class PaymentType(Enum):
    CASH = "Cash"
    CREDIT_CARD = "Credit Card"
    ONLINE_TRANSFER = "Online Transfer"


_ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED}
    ),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price snapshot of a variation at order time.

    ``product_id``/``variation_id`` pin the exact catalog entry so that
    a later restock never has to search by name.
    """

    product_id: str
    variation_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def total_price(self) -> Money:
        return (self.unit_price * self.quantity.value).rounded()


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders.  The plain constructor exists
    so the repository can reconstitute persisted orders as they are.
    """

    id: str | None
    customer: str
    location: str
    items: list[OrderLineItem]
    status: OrderStatus = OrderStatus.PENDING
    payment: PaymentStatus = PaymentStatus.UNPAID
    payment_type: PaymentType | None = None
    payment_reason: str | None = None
    date_ordered: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer: str,
        location: str,
        items: list[OrderLineItem],
        date_ordered: datetime | None = None,
    ) -> Order:
        if not customer or not customer.strip():
            raise ValidationError("Customer name is required")
        if not location or not location.strip():
            raise ValidationError("Location is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        return Order(
            id=None,
            customer=customer.strip(),
            location=location.strip(),
            items=list(items),
            date_ordered=date_ordered or datetime.now(timezone.utc),
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, target: OrderStatus) -> None:
        """Move to *target*, enforcing the forward-only guard.

        Delivered additionally requires the order to be paid.  Stock
        restoration for cancellations is coordinated by the fulfillment
        service *before* calling this.
        """
        if not self.can_transition_to(target):
            raise PreconditionError(
                f"Cannot change order {self.id} from {self.status.value} "
                f"to {target.value}"
            )
        if target == OrderStatus.DELIVERED and self.payment != PaymentStatus.PAID:
            raise PreconditionError(
                "Cannot change status to Delivered unless payment is Paid"
            )
        self.status = target

    def set_payment(
        self,
        payment: PaymentStatus,
        payment_type: PaymentType | None = None,
        payment_reason: str | None = None,
    ) -> None:
        if self.status == OrderStatus.CANCELLED:
            raise PreconditionError(f"Order {self.id} is cancelled")
        self.payment = payment
        if payment_type is not None:
            self.payment_type = payment_type
        if payment_reason is not None:
            self.payment_reason = payment_reason.strip() or None

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.total_price
        return result
