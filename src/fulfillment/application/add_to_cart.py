"""Application service: Add To Cart use case.

Looks the product up so the cart line snapshots the current price and
stock level.
"""

from __future__ import annotations

from fulfillment.domain.exceptions import EntityNotFoundError
from fulfillment.domain.model.cart import Cart, CartItem
from fulfillment.domain.repository.product_repository import ProductRepository


class AddToCartHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, cart: Cart, product_id: str, quantity: int) -> CartItem:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")
        return cart.add(product, quantity)
