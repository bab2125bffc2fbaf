"""CLI commands for customer orders."""

from __future__ import annotations

import click

from fulfillment.application.add_to_cart import AddToCartHandler
from fulfillment.application.checkout import CheckoutHandler
from fulfillment.application.dto import CartLineSpec, OrderDTO
from fulfillment.application.list_customer_orders import ListCustomerOrdersHandler
from fulfillment.application.show_order import ShowOrderHandler
from fulfillment.domain.exceptions import DomainException
from fulfillment.domain.model.cart import CustomerSession
from fulfillment.infrastructure.bootstrap import order_repository, product_repository


def _parse_items(raw: str) -> list[CartLineSpec]:
    """Parse 'p1:3,p2:5' into CartLineSpec list."""
    specs: list[CartLineSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(CartLineSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*51}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.unit_price:>10} {item.total_price:>10}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Order Total':<31} {dto.total_amount:>20}")


@click.command("checkout")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.option("--items", required=True, help="Cart as 'ProductID:Qty,ProductID:Qty'.")
def order_checkout(customer_id: str, items: str) -> None:
    """Fill a cart against current stock and place the order."""
    specs = _parse_items(items)

    products = product_repository()
    add_to_cart = AddToCartHandler(product_repo=products)
    checkout = CheckoutHandler(order_repo=order_repository(), product_repo=products)

    try:
        with CustomerSession.open(customer_id) as session:
            for spec in specs:
                add_to_cart.handle(session.cart, spec.product_id, spec.quantity)
            click.echo(f"Cart: {session.cart.item_count} units, total {session.cart.total()}")
            dto = checkout.handle_session(session)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} placed.")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
def order_list(customer_id: str) -> None:
    """List a customer's orders, newest first."""
    handler = ListCustomerOrdersHandler(order_repo=order_repository())

    try:
        orders = handler.handle(customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders yet.")
        return

    click.echo(f"{'Order':<8} {'Status':<11} {'Lines':>5} {'Total':>12}  Created")
    click.echo("-" * 60)
    for dto in orders:
        click.echo(
            f"#{dto.id:<7} {dto.status:<11} {len(dto.items):>5} {dto.total_amount:>12}  {dto.created_at}"
        )
