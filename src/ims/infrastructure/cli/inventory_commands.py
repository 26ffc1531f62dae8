"""CLI commands for stock levels."""

from __future__ import annotations

import click

from ims.application.adjust_stock import AdjustStockHandler
from ims.application.show_inventory import ShowInventoryHandler
from ims.domain.exceptions import DomainException
from ims.domain.service.inventory_ledger import NoOp
from ims.infrastructure.cli.session import Session, pass_session


@click.command("set")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--code", "variation_code", required=True, help="Variation code.")
@click.option("--quantity", required=True, help="New stock level.")
@pass_session
def inventory_set(
    session: Session, product_id: str, variation_code: str, quantity: str
) -> None:
    """Set the stock level of a variation (logged as Added or Sold)."""
    handler = AdjustStockHandler(ledger=session.container.ledger)

    try:
        result = handler.handle(product_id, variation_code, quantity, session.actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if isinstance(result, NoOp):
        click.echo("No changes to update.")
        return

    click.echo(
        f"Quantity updated: {result.previous} -> {result.new} "
        f"({result.change_type.value})"
    )
    if not result.logged:
        click.echo("This change has already been logged.")


@click.command("show")
@click.option("--category", default=None, help="Only show this category.")
@pass_session
def inventory_show(session: Session, category: str | None) -> None:
    """Show current stock levels."""
    handler = ShowInventoryHandler(product_repo=session.container.product_repository)
    lines = handler.handle(category)

    if not lines:
        click.echo("No inventory records found.")
        return

    click.echo(f"{'Category':<14} {'Code':<10} {'Name':<20} {'Price':>10} {'Qty':>6}")
    click.echo("-" * 64)
    for line in lines:
        click.echo(
            f"{line.category:<14} {line.code:<10} {line.name:<20} "
            f"{line.price:>10} {line.quantity:>6}"
        )
