"""Read-side shapes for the supplier order screen.

``SupplierLineRecord`` is one row of the flat, denormalized read: an order
line whose product belongs to the supplier, with its parent order's
header fields copied onto it.  ``SupplierOrderView`` is the per-order
projection rebuilt from those rows on every read; it is never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from fulfillment.domain.model.order import OrderStatus
from fulfillment.domain.model.value_objects import Money


@dataclass(frozen=True)
class CustomerSummary:
    customer_name: str
    phone: str | None = None


@dataclass(frozen=True)
class SupplierLineRecord:
    order_id: int
    order_status: OrderStatus
    order_total: Money
    order_created_at: datetime
    customer: CustomerSummary | None
    item_id: int
    product_id: str
    product_name: str
    supplier_id: str
    quantity: int
    unit_price: Money
    total_price: Money


@dataclass(frozen=True)
class SupplierOrderLine:
    item_id: int
    product_id: str
    product_name: str
    quantity: int
    unit_price: Money
    total_price: Money


@dataclass(frozen=True)
class SupplierOrderView:
    """One order as a single supplier is allowed to see it.

    ``supplier_subtotal`` covers ``items`` only, never the order's
    global total.
    """

    order_id: int
    status: OrderStatus
    created_at: datetime
    customer: CustomerSummary | None
    items: tuple[SupplierOrderLine, ...]
    supplier_subtotal: Money

    def with_status(self, status: OrderStatus) -> SupplierOrderView:
        return replace(self, status=status)

    def matches(self, term: str) -> bool:
        """Case-insensitive search on customer name or product names."""
        needle = term.strip().lower()
        if not needle:
            return True
        if self.customer and needle in self.customer.customer_name.lower():
            return True
        return any(needle in item.product_name.lower() for item in self.items)
