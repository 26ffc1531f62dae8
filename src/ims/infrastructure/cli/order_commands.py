"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import click

from ims.application.advance_order import AdvanceOrderStatusHandler
from ims.application.cancel_order import CancelOrderHandler
from ims.application.dto import OrderDTO, OrderItemSpec
from ims.application.list_orders import ListOrdersHandler, OrderFilter
from ims.application.place_order import PlaceOrderHandler
from ims.application.show_order import ShowOrderHandler
from ims.application.update_payment import UpdatePaymentHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.order import OrderStatus, PaymentStatus, PaymentType
from ims.infrastructure.cli.session import Session, pass_session
from ims.infrastructure.export.xlsx_export import export_orders_xlsx
from ims.infrastructure.logging_config import get_logger

logger = get_logger("cli.order")


def _parse_items(raw: str, by_code: bool = False) -> list[OrderItemSpec]:
    """Parse 'Widget:3,Gadget:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'Name:Quantity'."
            )
        key, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{key}'."
            )
        key = key.strip()
        if by_code:
            specs.append(OrderItemSpec(product_name="", quantity=qty, variation_code=key))
        else:
            specs.append(OrderItemSpec(product_name=key, quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status}, payment={dto.payment})")
    click.echo(f"Customer: {dto.customer}  ({dto.location})")
    click.echo(f"Ordered:  {dto.date_ordered}")
    if dto.payment_type or dto.payment_reason:
        click.echo(
            f"Payment:  {dto.payment_type or 'N/A'}"
            f"  reason: {dto.payment_reason or 'N/A'}"
        )
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.total_price:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--location", required=True, help="Delivery location.")
@click.option("--items", default=None, help="Items as 'Name:Qty,Name:Qty'.")
@click.option("--codes", default=None, help="Items as 'Code:Qty,Code:Qty'.")
@pass_session
def order_create(
    session: Session,
    customer: str,
    location: str,
    items: str | None,
    codes: str | None,
) -> None:
    """Place a new order (sells stock immediately)."""
    if not items and not codes:
        raise click.ClickException("Provide --items and/or --codes")
    specs = (_parse_items(items) if items else []) + (
        _parse_items(codes, by_code=True) if codes else []
    )

    handler = PlaceOrderHandler(fulfillment=session.container.fulfillment)

    try:
        dto = handler.handle(customer, location, specs, session.actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} created")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@pass_session
def order_show(session: Session, order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=session.container.order_repository)

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--start", type=click.DateTime(["%Y-%m-%d"]), default=None, help="From date.")
@click.option("--end", type=click.DateTime(["%Y-%m-%d"]), default=None, help="To date.")
@click.option("--status", type=click.Choice([s.value for s in OrderStatus]), default=None)
@click.option("--payment", type=click.Choice([p.value for p in PaymentStatus]), default=None)
@click.option("--payment-type", type=click.Choice([t.value for t in PaymentType]), default=None)
@click.option("--payment-reason", default=None)
@click.option(
    "--export", "export_path", type=click.Path(dir_okay=False, path_type=Path),
    default=None, help="Write the matching orders to an .xlsx file.",
)
@pass_session
def order_list(
    session: Session,
    start: datetime | None,
    end: datetime | None,
    status: str | None,
    payment: str | None,
    payment_type: str | None,
    payment_reason: str | None,
    export_path: Path | None,
) -> None:
    """List orders, optionally filtered, or export them."""
    handler = ListOrdersHandler(order_repo=session.container.order_repository)
    order_filter = OrderFilter(
        start=start.date() if start else None,
        end=end.date() if end else None,
        status=status,
        payment=payment,
        payment_type=payment_type,
        payment_reason=payment_reason,
    )

    try:
        if export_path is not None:
            rows = export_orders_xlsx(handler.matching(order_filter), export_path)
            logger.info("export_written", extra={"path": str(export_path), "rows": rows})
            click.echo(f"Exported {rows} order(s) to {export_path}")
            return
        dtos = handler.handle(order_filter)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<30} {'Customer':<18} {'Status':<10} {'Payment':<8} {'Total':>12}")
    click.echo("-" * 82)
    for dto in dtos:
        click.echo(
            f"{dto.id:<30} {dto.customer:<18} {dto.status:<10} {dto.payment:<8} {dto.total:>12}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--to", "target", required=True,
    type=click.Choice([s.value for s in OrderStatus]), help="New status.",
)
@pass_session
def order_status(session: Session, order_id: str, target: str) -> None:
    """Advance an order's status (Delivered requires payment)."""
    handler = AdvanceOrderStatusHandler(fulfillment=session.container.fulfillment)

    try:
        new_status = handler.handle(order_id, target, session.actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} is now {new_status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@pass_session
def order_cancel(session: Session, order_id: str) -> None:
    """Cancel an order and return its items to stock."""
    handler = CancelOrderHandler(fulfillment=session.container.fulfillment)

    try:
        handler.handle(order_id, session.actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} cancelled; stock returned to inventory.")


@click.command("pay")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--payment", required=True, type=click.Choice([p.value for p in PaymentStatus]),
)
@click.option("--type", "payment_type", type=click.Choice([t.value for t in PaymentType]))
@click.option("--reason", "payment_reason", default=None, help="Payment reason.")
@pass_session
def order_pay(
    session: Session,
    order_id: str,
    payment: str,
    payment_type: str | None,
    payment_reason: str | None,
) -> None:
    """Record payment status, type and reason."""
    handler = UpdatePaymentHandler(order_repo=session.container.order_repository)

    try:
        handler.handle(order_id, payment, payment_type, payment_reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} payment set to {payment}.")
