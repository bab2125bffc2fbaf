import click

from fulfillment.infrastructure import settings
from fulfillment.infrastructure.cli.db_commands import db_init
from fulfillment.infrastructure.cli.order_commands import (
    order_checkout,
    order_list,
    order_show,
)
from fulfillment.infrastructure.cli.product_commands import product_list, product_restock
from fulfillment.infrastructure.cli.supplier_commands import supplier_orders, supplier_status
from fulfillment.infrastructure.log_config import setup_logger


@click.group()
def cli() -> None:
    """B2B ordering: order fulfillment and inventory reconciliation"""
    setup_logger(settings.LOG_LEVEL, settings.LOG_FILE)


@cli.group()
def db() -> None:
    """Manage the record store."""


@cli.group()
def order() -> None:
    """Place and inspect customer orders."""


@cli.group()
def product() -> None:
    """Browse and restock products."""


@cli.group()
def supplier() -> None:
    """Supplier order views and status changes."""


# Register subcommands
db.add_command(db_init)
order.add_command(order_checkout)
order.add_command(order_list)
order.add_command(order_show)
product.add_command(product_list)
product.add_command(product_restock)
supplier.add_command(supplier_orders)
supplier.add_command(supplier_status)
