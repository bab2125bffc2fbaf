"""CLI commands for the supplier order screen."""

from __future__ import annotations

import click

from fulfillment.application.list_supplier_orders import ListSupplierOrdersHandler
from fulfillment.application.set_order_status import SetOrderStatusHandler
from fulfillment.domain.exceptions import DomainException
from fulfillment.domain.model.order import OrderStatus
from fulfillment.infrastructure.bootstrap import order_repository


@click.command("orders")
@click.option("--supplier", "supplier_id", required=True, help="Supplier ID.")
@click.option("--search", default=None, help="Filter by customer or product name.")
def supplier_orders(supplier_id: str, search: str | None) -> None:
    """Show orders containing the supplier's products (only its own lines)."""
    handler = ListSupplierOrdersHandler(order_repo=order_repository())

    try:
        views = handler.handle(supplier_id, search=search)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not views:
        click.echo("No orders found.")
        return

    for view in views:
        customer = view.customer.customer_name if view.customer else "-"
        click.echo(
            f"Order #{view.order_id}  (status={view.status.value})  "
            f"{view.created_at:%Y-%m-%d %H:%M}  customer: {customer}"
        )
        for item in view.items:
            click.echo(
                f"  {item.product_name:<24} {item.quantity:>5} {str(item.unit_price):>10} {str(item.total_price):>10}"
            )
        click.echo(f"  {'Your subtotal':<31} {str(view.supplier_subtotal):>20}")
        click.echo()


@click.command("status")
@click.option("--supplier", "supplier_id", required=True, help="Supplier ID.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--to",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="Target status.",
)
def supplier_status(supplier_id: str, order_id: int, new_status: str) -> None:
    """Change the status of an order containing the supplier's products."""
    handler = SetOrderStatusHandler(order_repo=order_repository())

    try:
        view = handler.handle(supplier_id, order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{view.order_id} is now {view.status.value}.")
