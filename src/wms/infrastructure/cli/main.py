from pathlib import Path

import click

from wms.infrastructure.bootstrap import Container
from wms.infrastructure.cli.inventory_commands import (
    count_delete,
    count_list,
    count_save,
    count_show,
)
from wms.infrastructure.cli.order_commands import (
    order_complete,
    order_list,
    order_pick,
    order_save,
    order_show,
    report_shortages,
    report_stats,
)
from wms.infrastructure.cli.product_commands import product_import, product_search
from wms.infrastructure.cli.user_commands import (
    user_approve,
    user_list,
    user_register,
    user_remove,
    user_role,
)
from wms.infrastructure.config import get_config
from wms.infrastructure.logging_config import setup_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the JSON collections (overrides WMS_DATA_DIR).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None) -> None:
    """Warehouse orders, picking and stocktakes."""
    config = get_config()
    if data_dir is not None:
        config.DATA_DIR = data_dir
    setup_logging(config)
    ctx.obj = Container(config)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Search and import the catalog."""


@cli.group()
def count() -> None:
    """Manage inventory counts."""


@cli.group()
def user() -> None:
    """Administer users."""


@cli.group()
def report() -> None:
    """Reports."""


# Register subcommands
order.add_command(order_complete)
order.add_command(order_list)
order.add_command(order_pick)
order.add_command(order_save)
order.add_command(order_show)
product.add_command(product_import)
product.add_command(product_search)
count.add_command(count_delete)
count.add_command(count_list)
count.add_command(count_save)
count.add_command(count_show)
user.add_command(user_approve)
user.add_command(user_list)
user.add_command(user_register)
user.add_command(user_remove)
user.add_command(user_role)
report.add_command(report_shortages)
report.add_command(report_stats)
