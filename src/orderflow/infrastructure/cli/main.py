from pathlib import Path

import click

from orderflow.infrastructure.cli.invoice_commands import invoice_generate
from orderflow.infrastructure.cli.order_commands import (
    order_calculate,
    order_create,
    order_list,
    order_show,
    order_top,
)
from orderflow.infrastructure.cli.product_commands import product_add, product_list
from orderflow.infrastructure.cli.report_commands import report_generate
from orderflow.infrastructure.config import Settings
from orderflow.infrastructure.logging_setup import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: $LOG_LEVEL or INFO).")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the JSON data files (default: $ORDERFLOW_DATA_DIR).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, data_dir: Path | None) -> None:
    """Orderflow: checkout, invoicing and sales reports."""
    settings = Settings.from_env()
    if data_dir is not None:
        settings = settings.with_data_dir(data_dir)
    configure_logging(log_level or settings.log_level)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Price, commit and look up orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def invoice() -> None:
    """Commit orders with an invoice."""


@cli.group()
def report() -> None:
    """Sales reports."""


# Register subcommands
order.add_command(order_calculate)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_top)
product.add_command(product_add)
product.add_command(product_list)
invoice.add_command(invoice_generate)
report.add_command(report_generate)
