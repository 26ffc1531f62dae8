"""CLI commands for supplier records."""

from __future__ import annotations

import click

from ims.application.add_supplier import AddSupplierHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.cli.session import Session, pass_session


@click.command("add")
@click.option("--company", required=True, help="Company name.")
@click.option("--location", required=True, help="Company location.")
@click.option("--contact", required=True, help="Contact number or person.")
@click.option("--email", required=True, help="Contact email.")
@click.option("--material", required=True, help="Material supplied.")
@pass_session
def supplier_add(
    session: Session, company: str, location: str, contact: str, email: str, material: str
) -> None:
    """Save a supplier."""
    handler = AddSupplierHandler(supplier_repo=session.container.supplier_repository)

    try:
        supplier = handler.handle(company, location, contact, email, material)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Supplier {supplier.id} '{supplier.company}' saved")


@click.command("list")
@pass_session
def supplier_list(session: Session) -> None:
    """List all suppliers."""
    suppliers = session.container.supplier_repository.list_all()

    if not suppliers:
        click.echo("No suppliers found.")
        return

    click.echo(f"{'Company':<20} {'Location':<15} {'Contact':<15} {'Email':<25} Material")
    click.echo("-" * 90)
    for s in suppliers:
        click.echo(
            f"{s.company:<20} {s.location:<15} {s.contact:<15} {s.email:<25} {s.material}"
        )
