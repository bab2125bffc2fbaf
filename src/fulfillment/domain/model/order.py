"""Order aggregate and its status lifecycle.

The Order is an aggregate root that owns its line items.  After creation
only ``status`` (and ``updated_at``) may change, and only along the
transition table below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from fulfillment.domain.exceptions import EmptyCartError, InvalidTransitionError
from fulfillment.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self]


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def ensure_transition(current: OrderStatus, target: OrderStatus) -> None:
    """Raise InvalidTransitionError unless ``current -> target`` is allowed."""
    if not current.can_transition_to(target):
        raise InvalidTransitionError(current, target)


@dataclass
class OrderLineItem:
    """Captures the price snapshot of a product at order-creation time.

    ``unit_price`` and ``total_price`` are fixed when the order is
    placed; later catalogue price changes never reach them.
    """

    product_id: str
    product_name: str
    supplier_id: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    id: int | None = None

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders.  The ``__init__`` is kept
    simple so repositories can reconstitute persisted orders without
    re-validating.
    """

    id: int | None
    customer_id: str
    items: list[OrderLineItem]
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    @staticmethod
    def create(customer_id: str, items: list[OrderLineItem]) -> Order:
        if not items:
            raise EmptyCartError("Order must contain at least one item")
        return Order(id=None, customer_id=customer_id, items=list(items))

    # --- State transitions ----------------------------------------------------

    def transition_to(self, target: OrderStatus) -> None:
        ensure_transition(self.status, target)
        self.status = target
        self.updated_at = datetime.now(timezone.utc)

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Money:
        return Money.sum(item.total_price for item in self.items)

    def quantities_by_product(self) -> dict[str, int]:
        """Units to decrement per distinct product, in first-seen order."""
        quantities: dict[str, int] = {}
        for item in self.items:
            quantities[item.product_id] = (
                quantities.get(item.product_id, 0) + item.quantity.value
            )
        return quantities
