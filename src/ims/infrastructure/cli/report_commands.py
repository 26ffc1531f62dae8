"""CLI commands for sales reports."""

from __future__ import annotations

import calendar

import click

from ims.application.sales_report import SalesReportHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.cli.session import Session, pass_session


@click.command("sales")
@click.option("--year", type=int, default=None, help="Only orders from this year.")
@pass_session
def report_sales(session: Session, year: int | None) -> None:
    """Show delivered sales: products sold, monthly and annual totals."""
    handler = SalesReportHandler(order_repo=session.container.order_repository)

    try:
        report = handler.handle(year)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Products sold")
    if not report.products_sold:
        click.echo("  (none)")
    for name, qty in report.products_sold.items():
        click.echo(f"  {name:<25} {qty:>6}")

    click.echo()
    click.echo("Monthly sales")
    for month, amount in enumerate(report.monthly_sales, start=1):
        click.echo(f"  {calendar.month_name[month]:<12} {amount:>12.2f}")
    click.echo(f"  {'Total':<12} {report.annual_sales:>12.2f}")
