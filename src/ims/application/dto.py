"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from ims.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for.

    ``variation_code`` pins an exact variation; without it the product
    name must be unambiguous across the catalog.
    """

    product_name: str
    quantity: int
    variation_code: str | None = None


@dataclass(frozen=True)
class VariationSpec:
    """Input: one variation of a product being added to the catalog."""

    name: str
    code: str
    price: str
    quantity: int = 0
    dimension: str = ""
    weight: str = ""
    sku: str = ""


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "₱15.00"
    total_price: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    customer: str
    location: str
    status: str
    payment: str
    payment_type: str | None
    payment_reason: str | None
    items: list[OrderLineItemDTO]
    total: str
    date_ordered: str


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer=order.customer,
        location=order.location,
        status=order.status.value,
        payment=order.payment.value,
        payment_type=order.payment_type.value if order.payment_type else None,
        payment_reason=order.payment_reason,
        items=[
            OrderLineItemDTO(
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                total_price=str(item.total_price),
            )
            for item in order.items
        ],
        total=str(order.total),
        date_ordered=order.date_ordered.strftime("%Y-%m-%d %H:%M UTC"),
    )
