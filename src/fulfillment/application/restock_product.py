"""Application service: Restock Product use case.

Suppliers may only add stock to products they own.
"""

from __future__ import annotations

from loguru import logger

from fulfillment.domain.exceptions import EntityNotFoundError, ValidationError
from fulfillment.domain.model.stock import ProductStock
from fulfillment.domain.repository.product_repository import ProductRepository


class RestockProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, supplier_id: str, product_id: str, quantity: int) -> ProductStock:
        if quantity <= 0:
            raise ValidationError("Restock quantity must be positive")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")
        if product.supplier_id != supplier_id:
            raise ValidationError(
                f"Product '{product_id}' belongs to another supplier"
            )

        stock = self._product_repo.restock(product_id, quantity)
        logger.info(
            f"Supplier {supplier_id} restocked product {product_id} "
            f"by {quantity}, now {stock.quantity}"
        )
        return stock
