"""Unit tests for the Order aggregate and its business rules."""

from datetime import datetime, timezone

import pytest

from ims.domain.exceptions import PreconditionError, ValidationError
from ims.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentStatus,
    PaymentType,
)
from ims.domain.model.value_objects import Money, Quantity


def _make_item(name: str = "Red Shirt", qty: int = 1, price: str = "250.00") -> OrderLineItem:
    """Helper to build a valid line item."""
    return OrderLineItem(
        product_id="P1",
        variation_id="P1-RS-01",
        product_name=name,
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


def _order(status: OrderStatus = OrderStatus.PENDING, payment=PaymentStatus.UNPAID) -> Order:
    order = Order.create("Alice", "Cebu", [_make_item()])
    order.id = "O1"
    order.status = status
    order.payment = payment
    return order


class TestOrderCreation:

    def test_happy_path(self):
        when = datetime(2024, 5, 1, tzinfo=timezone.utc)
        order = Order.create(" Alice ", "Cebu", [_make_item(qty=2)], date_ordered=when)
        assert order.customer == "Alice"
        assert order.status == OrderStatus.PENDING
        assert order.payment == PaymentStatus.UNPAID
        assert order.payment_type is None
        assert order.date_ordered == when
        assert order.id is None  # assigned by repository

    def test_total_is_sum_of_line_items(self):
        order = Order.create("Alice", "Cebu", [
            _make_item(qty=3, price="15.00"),
            _make_item("Blue Shirt", qty=5, price="25.00"),
        ])
        assert order.total == Money.of("170.00")

    def test_line_totals_round_half_up(self):
        item = _make_item(qty=3, price="0.335")
        assert item.total_price == Money.of("1.01")

    def test_requires_customer(self):
        with pytest.raises(ValidationError, match="Customer"):
            Order.create("  ", "Cebu", [_make_item()])

    def test_requires_location(self):
        with pytest.raises(ValidationError, match="Location"):
            Order.create("Alice", "", [_make_item()])

    def test_requires_items(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create("Alice", "Cebu", [])


class TestStatusTransitions:

    @pytest.mark.parametrize("start, target", [
        (OrderStatus.PENDING, OrderStatus.SHIPPED),
        (OrderStatus.PENDING, OrderStatus.CANCELLED),
        (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
    ])
    def test_allowed(self, start, target):
        order = _order(start)
        order.transition_to(target)
        assert order.status == target

    @pytest.mark.parametrize("start", [OrderStatus.PENDING, OrderStatus.SHIPPED])
    def test_delivered_when_paid(self, start):
        order = _order(start, PaymentStatus.PAID)
        order.transition_to(OrderStatus.DELIVERED)
        assert order.status == OrderStatus.DELIVERED

    def test_delivered_requires_paid(self):
        order = _order(OrderStatus.SHIPPED, PaymentStatus.UNPAID)
        with pytest.raises(PreconditionError, match="unless payment is Paid"):
            order.transition_to(OrderStatus.DELIVERED)
        assert order.status == OrderStatus.SHIPPED

    @pytest.mark.parametrize("start, target", [
        (OrderStatus.SHIPPED, OrderStatus.PENDING),
        (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
        (OrderStatus.DELIVERED, OrderStatus.SHIPPED),
        (OrderStatus.CANCELLED, OrderStatus.PENDING),
        (OrderStatus.CANCELLED, OrderStatus.SHIPPED),
    ])
    def test_rejected(self, start, target):
        order = _order(start, PaymentStatus.PAID)
        with pytest.raises(PreconditionError, match="Cannot change order"):
            order.transition_to(target)
        assert order.status == start


class TestPayment:

    def test_set_payment(self):
        order = _order()
        order.set_payment(PaymentStatus.PAID, PaymentType.CREDIT_CARD, "Customer Request")
        assert order.payment == PaymentStatus.PAID
        assert order.payment_type == PaymentType.CREDIT_CARD
        assert order.payment_reason == "Customer Request"

    def test_omitted_fields_are_kept(self):
        order = _order()
        order.set_payment(PaymentStatus.PAID, PaymentType.CASH)
        order.set_payment(PaymentStatus.UNPAID)
        assert order.payment == PaymentStatus.UNPAID
        assert order.payment_type == PaymentType.CASH

    def test_blank_reason_clears_it(self):
        order = _order()
        order.set_payment(PaymentStatus.PAID, payment_reason="Refund")
        order.set_payment(PaymentStatus.PAID, payment_reason="  ")
        assert order.payment_reason is None

    def test_cancelled_order_rejects_payment(self):
        order = _order(OrderStatus.CANCELLED)
        with pytest.raises(PreconditionError, match="cancelled"):
            order.set_payment(PaymentStatus.PAID)
