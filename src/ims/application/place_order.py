"""Application service: Place Order use case.

Checkout: resolves each requested item, sells the stock through the
ledger and records a Pending/Unpaid order.
"""

from __future__ import annotations

from ims.application.dto import OrderDTO, OrderItemSpec, to_order_dto
from ims.domain.service.order_fulfillment_service import (
    LineRequest,
    OrderFulfillmentService,
)


class PlaceOrderHandler:

    def __init__(self, fulfillment: OrderFulfillmentService) -> None:
        self._fulfillment = fulfillment

    def handle(
        self,
        customer: str,
        location: str,
        item_specs: list[OrderItemSpec],
        actor: str | None = None,
    ) -> OrderDTO:
        requests = [
            LineRequest(
                product_name=spec.product_name,
                quantity=spec.quantity,
                variation_code=spec.variation_code,
            )
            for spec in item_specs
        ]
        order = self._fulfillment.place_order(customer, location, requests, actor)
        return to_order_dto(order)
