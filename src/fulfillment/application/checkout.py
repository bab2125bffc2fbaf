"""Application service: Checkout use case.

Turns a customer's cart into a persisted order:

  1. Re-validate every line against *current* stock, not the snapshot the
     cart was built from.  Any shortage rejects the whole cart.
  2. Build the order with price snapshots taken from the cart lines.
  3. Hand the order to the repository, which inserts header and lines and
     conditionally decrements stock in one atomic unit.
  4. Clear the cart only after the unit committed.

Step 1 fails fast on stale carts; the guarded decrement in step 3 is what
actually closes the race with a concurrent checkout.  Errors are never
retried here, since a blind retry could decrement stock twice.
"""

from __future__ import annotations

from loguru import logger

from fulfillment.application.dto import OrderDTO, to_order_dto
from fulfillment.domain.exceptions import (
    EmptyCartError,
    EntityNotFoundError,
    InsufficientStockError,
    StockShortage,
    ValidationError,
)
from fulfillment.domain.model.cart import Cart, CartItem, CustomerSession
from fulfillment.domain.model.order import Order, OrderLineItem
from fulfillment.domain.model.value_objects import Quantity
from fulfillment.domain.repository.order_repository import OrderRepository
from fulfillment.domain.repository.product_repository import ProductRepository


class CheckoutHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, customer_id: str, cart: Cart) -> OrderDTO:
        """Place an order for everything in *cart*.

        Raises EmptyCartError, InsufficientStockError, EntityNotFoundError
        or PersistenceError.  The cart is left intact on every failure.
        """
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer ID is required")
        if cart.is_empty:
            raise EmptyCartError("Cannot check out an empty cart")

        lines = cart.items
        self._revalidate_stock(lines)

        order = Order.create(
            customer_id=customer_id.strip(),
            items=[self._to_line_item(line) for line in lines],
        )

        try:
            placed = self._order_repo.place(order)
        except InsufficientStockError as exc:
            logger.warning(
                f"Checkout for customer {customer_id} lost a stock race: {exc}"
            )
            raise

        cart.clear()
        logger.info(
            f"Order #{placed.id} placed for customer {customer_id} "
            f"({len(placed.items)} lines, total {placed.total_amount})"
        )
        return to_order_dto(placed)

    def handle_session(self, session: CustomerSession) -> OrderDTO:
        if session.closed:
            raise ValidationError("Customer session is closed")
        return self.handle(session.customer_id, session.cart)

    # --- Internal helpers -----------------------------------------------------

    def _revalidate_stock(self, lines: list[CartItem]) -> None:
        shortages: list[StockShortage] = []

        for line in lines:
            stock = self._product_repo.get_stock(line.product_id)
            if stock is None:
                raise EntityNotFoundError(f"Product not found: '{line.product_id}'")
            if not stock.can_supply(line.quantity):
                shortages.append(
                    StockShortage(line.product_id, line.quantity, stock.quantity)
                )

        if shortages:
            logger.info(f"Checkout rejected, cart is stale: {shortages}")
            raise InsufficientStockError(shortages)

    @staticmethod
    def _to_line_item(line: CartItem) -> OrderLineItem:
        return OrderLineItem(
            product_id=line.product_id,
            product_name=line.name,
            supplier_id=line.supplier_id,
            quantity=Quantity(line.quantity),
            unit_price=line.unit_price,  # <-- price snapshot
        )
