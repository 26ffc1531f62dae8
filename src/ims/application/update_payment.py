"""Application service: Update Payment use case."""

from __future__ import annotations

from enum import Enum

from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.order import PaymentStatus, PaymentType
from ims.domain.repository.order_repository import OrderRepository


def _parse(enum_cls: type[Enum], value: str, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(
            f"Unknown {label} '{value}' (expected one of: {allowed})"
        ) from None


class UpdatePaymentHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        order_id: str,
        payment: str,
        payment_type: str | None = None,
        payment_reason: str | None = None,
    ) -> None:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        order.set_payment(
            _parse(PaymentStatus, payment, "payment status"),
            _parse(PaymentType, payment_type, "payment type") if payment_type else None,
            payment_reason,
        )
        self._order_repo.save(order)
