"""ProductStock: the authoritative available-quantity counter per product.

Mutated only by decrement-on-order and supplier restock.  The store is
the system of record; this class states the rules the store applies
atomically.
"""

from __future__ import annotations

from dataclasses import dataclass

from fulfillment.domain.exceptions import (
    InsufficientStockError,
    StockShortage,
    ValidationError,
)


@dataclass
class ProductStock:
    """Invariant: ``quantity`` is never negative."""

    product_id: str
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValidationError(
                f"Stock for product '{self.product_id}' cannot be negative"
            )

    def can_supply(self, requested: int) -> bool:
        return requested <= self.quantity

    def decrement(self, requested: int) -> None:
        """Conditional decrement: applies only if ``quantity >= requested``."""
        if requested <= 0:
            raise ValidationError("Decrement quantity must be positive")
        if not self.can_supply(requested):
            raise InsufficientStockError(
                [StockShortage(self.product_id, requested, self.quantity)]
            )
        self.quantity -= requested

    def restock(self, added: int) -> None:
        if added <= 0:
            raise ValidationError("Restock quantity must be positive")
        self.quantity += added
