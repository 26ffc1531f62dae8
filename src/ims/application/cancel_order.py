"""Application service: Cancel Order use case.

Pending and Shipped orders can be cancelled.  Every line's quantity is
returned to stock (logged as "Stock Cancellation Return") before the
order is marked Cancelled.
"""

from __future__ import annotations

from ims.domain.service.order_fulfillment_service import OrderFulfillmentService


class CancelOrderHandler:

    def __init__(self, fulfillment: OrderFulfillmentService) -> None:
        self._fulfillment = fulfillment

    def handle(self, order_id: str, actor: str | None = None) -> None:
        self._fulfillment.cancel_order(order_id, actor)
