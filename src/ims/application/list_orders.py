"""Application service: List Orders use case (query).

Filters mirror the sales page: date range (inclusive), status,
payment status, payment type and payment reason.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ims.application.dto import OrderDTO, to_order_dto
from ims.domain.model.order import Order
from ims.domain.repository.order_repository import OrderRepository


@dataclass(frozen=True)
class OrderFilter:
    start: date | None = None
    end: date | None = None
    status: str | None = None
    payment: str | None = None
    payment_type: str | None = None
    payment_reason: str | None = None

    def matches(self, order: Order) -> bool:
        ordered_on = order.date_ordered.date()
        if self.start is not None and ordered_on < self.start:
            return False
        if self.end is not None and ordered_on > self.end:
            return False
        if self.status and order.status.value != self.status:
            return False
        if self.payment and order.payment.value != self.payment:
            return False
        if self.payment_type and (
            order.payment_type is None or order.payment_type.value != self.payment_type
        ):
            return False
        if self.payment_reason and order.payment_reason != self.payment_reason:
            return False
        return True


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def matching(self, order_filter: OrderFilter | None = None) -> list[Order]:
        order_filter = order_filter or OrderFilter()
        return [o for o in self._order_repo.list_all() if order_filter.matches(o)]

    def handle(self, order_filter: OrderFilter | None = None) -> list[OrderDTO]:
        return [to_order_dto(o) for o in self.matching(order_filter)]
