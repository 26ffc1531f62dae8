"""CLI commands for the stock and price history streams."""

from __future__ import annotations

from pathlib import Path

import click

from ims.application.show_history import HistoryLineDTO, ShowHistoryHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.change_record import HistoryStream
from ims.infrastructure.cli.session import Session, pass_session
from ims.infrastructure.export.xlsx_export import export_history_xlsx
from ims.infrastructure.logging_config import get_logger

logger = get_logger("cli.history")


def _show(
    session: Session, stream: HistoryStream, product_id: str | None
) -> list[HistoryLineDTO]:
    handler = ShowHistoryHandler(ledger=session.container.ledger)
    try:
        return handler.handle(stream, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _print(lines: list[HistoryLineDTO]) -> None:
    if not lines:
        click.echo("No changes recorded.")
        return
    click.echo(
        f"{'Date':<20} {'Code':<10} {'Name':<18} {'Prev':>8} {'Curr':>8} "
        f"{'Change':>8}  {'Type':<26} By"
    )
    click.echo("-" * 112)
    for line in lines:
        click.echo(
            f"{line.change_date:<20} {line.variation_code:<10} {line.product_name:<18} "
            f"{line.previous:>8} {line.current:>8} {line.changed:>8}  "
            f"{line.change_type:<26} {line.changed_by}"
        )


@click.command("stock")
@click.option("--product-id", default=None, help="Only this product.")
@click.option(
    "--export", "export_path", type=click.Path(dir_okay=False, path_type=Path),
    default=None, help="Write the history to an .xlsx file.",
)
@pass_session
def history_stock(
    session: Session, product_id: str | None, export_path: Path | None
) -> None:
    """Show stock change history."""
    lines = _show(session, HistoryStream.STOCK, product_id)
    if export_path is None:
        _print(lines)
        return

    try:
        rows = export_history_xlsx(lines, export_path)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    logger.info("export_written", extra={"path": str(export_path), "rows": rows})
    click.echo(f"Exported {rows} change(s) to {export_path}")


@click.command("price")
@click.option("--product-id", default=None, help="Only this product.")
@pass_session
def history_price(session: Session, product_id: str | None) -> None:
    """Show price change history."""
    _print(_show(session, HistoryStream.PRICE, product_id))
