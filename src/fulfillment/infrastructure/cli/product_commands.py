"""CLI commands for products and stock."""

from __future__ import annotations

import click

from fulfillment.application.restock_product import RestockProductHandler
from fulfillment.domain.exceptions import DomainException
from fulfillment.infrastructure.bootstrap import product_repository


@click.command("list")
@click.option("--supplier", "supplier_id", default=None, help="Only this supplier's products (including sold out).")
def product_list(supplier_id: str | None) -> None:
    """List products that can be ordered (stock > 0)."""
    repo = product_repository()

    try:
        products = repo.list_by_supplier(supplier_id) if supplier_id else repo.list_available()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<8} {'Name':<24} {'Supplier':<10} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 63)
    for p in products:
        click.echo(
            f"{p.id:<8} {p.name:<24} {p.supplier_id:<10} {str(p.unit_price):>10} {p.available_stock:>7}"
        )


@click.command("restock")
@click.option("--supplier", "supplier_id", required=True, help="Supplier ID (must own the product).")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
def product_restock(supplier_id: str, product_id: str, quantity: int) -> None:
    """Add stock to one of the supplier's products."""
    handler = RestockProductHandler(product_repo=product_repository())

    try:
        stock = handler.handle(supplier_id=supplier_id, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} restocked, {stock.quantity} in stock")
