"""Cart aggregate: the customer's in-progress selection.

Purely local: nothing is persisted until checkout.  A cart is owned by
exactly one CustomerSession and is single-threaded by construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from fulfillment.domain.exceptions import EntityNotFoundError, ValidationError
from fulfillment.domain.model.product import Product
from fulfillment.domain.model.value_objects import Money


@dataclass
class CartItem:
    """One selected product with its snapshot price.

    Invariant at display time: ``1 <= quantity <= available_stock``.
    ``available_stock`` is a snapshot and is re-validated at checkout.
    """

    product_id: str
    name: str
    supplier_id: str
    unit_price: Money
    quantity: int
    available_stock: int

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


class Cart:

    def __init__(self) -> None:
        self._lines: dict[str, CartItem] = {}

    # --- Commands -------------------------------------------------------------

    def add(self, product: Product, quantity: int) -> CartItem:
        """Add *quantity* of *product*, merging with an existing line.

        A merged quantity is clamped to the product's available stock.
        """
        _ensure_whole_number(product.id, quantity)
        if quantity <= 0:
            raise ValidationError(
                f"Quantity for product '{product.id}' must be positive, got {quantity}"
            )
        if quantity > product.available_stock:
            raise ValidationError(
                f"Cannot add {quantity} of product '{product.id}' "
                f"(only {product.available_stock} in stock)"
            )

        existing = self._lines.get(product.id)
        if existing is None:
            line = CartItem(
                product_id=product.id,
                name=product.name,
                supplier_id=product.supplier_id,
                unit_price=product.unit_price,
                quantity=quantity,
                available_stock=product.available_stock,
            )
            self._lines[product.id] = line
            return line

        existing.available_stock = product.available_stock
        existing.unit_price = product.unit_price
        existing.quantity = min(existing.quantity + quantity, product.available_stock)
        return existing

    def set_quantity(self, product_id: str, quantity: int) -> CartItem | None:
        """Set a line's quantity, clamped to ``[1, available_stock]``.

        A quantity of 0 removes the line and returns None.
        """
        line = self._find(product_id)
        _ensure_whole_number(product_id, quantity)
        if quantity < 0:
            raise ValidationError(
                f"Quantity for product '{product_id}' cannot be negative"
            )
        if quantity == 0:
            del self._lines[product_id]
            return None
        line.quantity = max(1, min(quantity, line.available_stock))
        return line

    def remove(self, product_id: str) -> None:
        self._find(product_id)
        del self._lines[product_id]

    def clear(self) -> None:
        self._lines.clear()

    # --- Queries --------------------------------------------------------------

    @property
    def items(self) -> list[CartItem]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        """Total units across all lines (the cart badge)."""
        return sum(line.quantity for line in self._lines.values())

    def total(self) -> Money:
        return Money.sum(line.line_total for line in self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)

    def _find(self, product_id: str) -> CartItem:
        try:
            return self._lines[product_id]
        except KeyError:
            raise EntityNotFoundError(
                f"Product '{product_id}' is not in the cart"
            ) from None


def _ensure_whole_number(product_id: str, quantity) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(
            f"Quantity for product '{product_id}' must be an integer, "
            f"got {type(quantity).__name__}"
        )


@dataclass
class CustomerSession:
    """Explicit per-customer context replacing global cart state.

    Created when the customer session starts and closed when it ends;
    closing discards any unsubmitted selection.
    """

    customer_id: str
    cart: Cart = field(default_factory=Cart)
    opened_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    closed: bool = False

    @classmethod
    def open(cls, customer_id: str) -> CustomerSession:
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer ID is required")
        return cls(customer_id=customer_id.strip())

    def close(self) -> None:
        self.cart.clear()
        self.closed = True

    def __enter__(self) -> CustomerSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
