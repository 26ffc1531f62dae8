"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from ims.application.add_product import AddProductHandler
from ims.application.dto import VariationSpec
from ims.application.manage_variations import (
    AddVariationHandler,
    RemoveVariationHandler,
)
from ims.application.update_price import UpdatePriceHandler
from ims.domain.exceptions import DomainException
from ims.domain.service.inventory_ledger import NoOp
from ims.infrastructure.cli.session import Session, pass_session


def _parse_variation(raw: str) -> VariationSpec:
    """Parse 'Name:CODE:Price[:Qty]' into a VariationSpec."""
    parts = [p.strip() for p in raw.split(":")]
    if len(parts) not in (3, 4):
        raise click.BadParameter(
            f"Invalid variation '{raw}'. Expected 'Name:Code:Price[:Quantity]'."
        )
    quantity = 0
    if len(parts) == 4:
        try:
            quantity = int(parts[3])
        except ValueError:
            raise click.BadParameter(f"Invalid quantity '{parts[3]}' in '{raw}'.")
    return VariationSpec(name=parts[0], code=parts[1], price=parts[2], quantity=quantity)


@click.command("add")
@click.option("--category", required=True, help="Product category.")
@click.option(
    "--variation", "variations", multiple=True, required=True,
    help="Variation as 'Name:Code:Price[:Quantity]' (repeatable).",
)
@click.option("--image-url", default="", help="Image URL.")
@pass_session
def product_add(
    session: Session, category: str, variations: tuple[str, ...], image_url: str
) -> None:
    """Add a new product category to the catalog."""
    specs = [_parse_variation(v) for v in variations]
    handler = AddProductHandler(product_repo=session.container.product_repository)

    try:
        product = handler.handle(category, specs, image_url, session.actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product {product.id} '{product.category}' added "
        f"with {len(product.variations)} variation(s)"
    )


@click.command("list")
@pass_session
def product_list(session: Session) -> None:
    """List all products in the catalog."""
    products = session.container.product_repository.list_all()

    if not products:
        click.echo("No products found.")
        return

    for p in products:
        click.echo(f"{p.id}  {p.category}  (added {p.date_added} by {p.added_by})")
        for v in p.variations.values():
            click.echo(f"    {v.code:<10} {v.name:<20} {str(v.price):>10} {v.quantity:>6}")


@click.command("add-variation")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Variation name.")
@click.option("--code", required=True, help="Variation code (unique in product).")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--quantity", default=0, type=int, help="Initial stock.")
@click.option("--dimension", default="", help="Dimension label.")
@click.option("--weight", default="", help="Weight label.")
@click.option("--sku", default="", help="Free-form product ID label.")
@pass_session
def product_add_variation(
    session: Session,
    product_id: str,
    name: str,
    code: str,
    price: str,
    quantity: int,
    dimension: str,
    weight: str,
    sku: str,
) -> None:
    """Add a variation to an existing product."""
    handler = AddVariationHandler(product_repo=session.container.product_repository)
    spec = VariationSpec(name, code, price, quantity, dimension, weight, sku)

    try:
        handler.handle(product_id, spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Variation '{code}' added to product {product_id}")


@click.command("remove-variation")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--code", required=True, help="Variation code.")
@pass_session
def product_remove_variation(session: Session, product_id: str, code: str) -> None:
    """Remove a variation (its history is kept)."""
    handler = RemoveVariationHandler(product_repo=session.container.product_repository)

    try:
        handler.handle(product_id, code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Variation '{code}' removed from product {product_id}")


@click.command("price")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--code", "variation_code", required=True, help="Variation code.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@pass_session
def product_price(
    session: Session, product_id: str, variation_code: str, price: str
) -> None:
    """Update a variation's price."""
    handler = UpdatePriceHandler(ledger=session.container.ledger)

    try:
        result = handler.handle(product_id, variation_code, price, session.actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if isinstance(result, NoOp):
        click.echo("No changes to update.")
        return

    click.echo(f"Price updated: {result.previous} -> {result.new}")
