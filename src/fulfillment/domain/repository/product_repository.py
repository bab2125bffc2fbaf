"""Abstract repository for products and their stock counters.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.model.product import Product
from fulfillment.domain.model.stock import ProductStock


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product snapshot with its current stock, or None."""

    @abstractmethod
    def list_available(self) -> list[Product]:
        """Return every product with stock greater than zero."""

    @abstractmethod
    def list_by_supplier(self, supplier_id: str) -> list[Product]:
        """Return every product owned by a supplier."""

    @abstractmethod
    def get_stock(self, product_id: str) -> ProductStock | None:
        """Return the current stock counter for a product, or None."""

    @abstractmethod
    def restock(self, product_id: str, quantity: int) -> ProductStock:
        """Atomically add *quantity* units and return the new counter."""
