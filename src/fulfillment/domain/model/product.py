"""Product as seen by the ordering core.

Catalogue management (names, images, categories) belongs to the CRUD
pages; the core only needs the owning supplier, the resolved unit price
and the stock level observed at read time.
"""

from __future__ import annotations

from dataclasses import dataclass

from fulfillment.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A product snapshot read from the store.

    ``available_stock`` is the stock observed when the snapshot was
    taken; it goes stale and is re-validated at checkout.
    """

    id: str
    name: str
    supplier_id: str
    unit_price: Money
    available_stock: int

    @property
    def in_stock(self) -> bool:
        return self.available_stock > 0
