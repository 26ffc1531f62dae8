"""Application service: Advance Order Status use case."""

from __future__ import annotations

from ims.domain.exceptions import ValidationError
from ims.domain.model.order import OrderStatus
from ims.domain.service.order_fulfillment_service import OrderFulfillmentService


class AdvanceOrderStatusHandler:

    def __init__(self, fulfillment: OrderFulfillmentService) -> None:
        self._fulfillment = fulfillment

    def handle(self, order_id: str, target_status: str, actor: str | None = None) -> str:
        """Move the order to *target_status* and return the new status."""
        try:
            target = OrderStatus(target_status)
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Unknown status '{target_status}' (expected one of: {allowed})"
            ) from None
        order = self._fulfillment.advance_status(order_id, target, actor)
        return order.status.value
