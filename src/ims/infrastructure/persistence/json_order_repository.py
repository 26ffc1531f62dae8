"""Document-store implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from ims.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentStatus,
    PaymentType,
)
from ims.domain.model.value_objects import Money, Quantity
from ims.domain.repository.order_repository import OrderRepository
from ims.infrastructure.persistence.json_document_store import (
    JsonDocumentStore,
    time_ordered_key,
)

_ROOT = "orders"


class JsonOrderRepository(OrderRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._store.get(f"{_ROOT}/{order_id}")
        return None if raw is None else self._to_domain(order_id, raw)

    def list_all(self) -> list[Order]:
        return [
            self._to_domain(order_id, raw)
            for order_id, raw in self._store.children(_ROOT).items()
        ]

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = time_ordered_key()
        self._store.set(f"{_ROOT}/{order.id}", self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "customer": order.customer,
            "location": order.location,
            "status": order.status.value,
            "payment": order.payment.value,
            "paymentType": order.payment_type.value if order.payment_type else None,
            "paymentReason": order.payment_reason,
            "dateOrdered": order.date_ordered.isoformat(),
            "items": [
                {
                    "productId": item.product_id,
                    "variationId": item.variation_id,
                    "productName": item.product_name,
                    "orderQuantity": item.quantity.value,
                    "unitPrice": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                    "totalPrice": str(item.total_price.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(order_id: str, raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i["productId"],
                variation_id=i["variationId"],
                product_name=i["productName"],
                quantity=Quantity(int(i["orderQuantity"])),
                unit_price=Money(Decimal(i["unitPrice"]), i.get("currency", "PHP")),
            )
            for i in raw["items"]
        ]
        payment_type = raw.get("paymentType")
        return Order(
            id=order_id,
            customer=raw["customer"],
            location=raw.get("location", ""),
            items=items,
            status=OrderStatus(raw["status"]),
            payment=PaymentStatus(raw.get("payment", PaymentStatus.UNPAID.value)),
            payment_type=PaymentType(payment_type) if payment_type else None,
            payment_reason=raw.get("paymentReason"),
            date_ordered=datetime.fromisoformat(raw["dateOrdered"]),
        )
