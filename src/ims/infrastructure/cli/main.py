import logging
from pathlib import Path

import click

from ims.infrastructure.bootstrap import DATA_DIR_ENV, Container
from ims.infrastructure.cli.history_commands import history_price, history_stock
from ims.infrastructure.cli.inventory_commands import inventory_set, inventory_show
from ims.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_pay,
    order_show,
    order_status,
)
from ims.infrastructure.cli.product_commands import (
    product_add,
    product_add_variation,
    product_list,
    product_price,
    product_remove_variation,
)
from ims.infrastructure.cli.report_commands import report_sales
from ims.infrastructure.cli.session import Session
from ims.infrastructure.cli.supplier_commands import supplier_add, supplier_list
from ims.infrastructure.cli.user_commands import user_add, user_list
from ims.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=DATA_DIR_ENV,
    default=None,
    help="Directory holding the data file.",
)
@click.option("--user", "user_id", envvar="IMS_USER", default=None, help="Acting user ID.")
@click.option("--actor", envvar="IMS_ACTOR", default=None, help="Acting user's name.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
@click.pass_context
def cli(
    ctx: click.Context,
    data_dir: Path | None,
    user_id: str | None,
    actor: str | None,
    verbose: bool,
) -> None:
    """IMS: inventory, orders and sales for a small shop."""
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)
    ctx.obj = Session(Container(data_dir), user_id=user_id, actor_override=actor)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def inventory() -> None:
    """Manage stock levels."""


@cli.group()
def history() -> None:
    """Show stock and price history."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def supplier() -> None:
    """Manage suppliers."""


@cli.group()
def user() -> None:
    """Manage the user directory."""


@cli.group()
def report() -> None:
    """Sales reports."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_add_variation)
product.add_command(product_list)
product.add_command(product_price)
product.add_command(product_remove_variation)
inventory.add_command(inventory_set)
inventory.add_command(inventory_show)
history.add_command(history_stock)
history.add_command(history_price)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_pay)
order.add_command(order_show)
order.add_command(order_status)
supplier.add_command(supplier_add)
supplier.add_command(supplier_list)
user.add_command(user_add)
user.add_command(user_list)
report.add_command(report_sales)
