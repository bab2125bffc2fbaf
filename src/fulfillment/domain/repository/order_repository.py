"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.model.order import Order, OrderStatus
from fulfillment.domain.model.supplier_view import SupplierLineRecord


class OrderRepository(ABC):

    @abstractmethod
    def place(self, order: Order) -> Order:
        """Persist a new order and decrement stock as one atomic unit.

        Inserts the header and every line item, then applies a
        conditional decrement (``stock >= qty``) per distinct product.
        Either everything becomes visible or nothing does.  Assigns ids
        to the order and its items on success.

        Raises InsufficientStockError when a decrement guard fails and
        PersistenceError on any store failure.
        """

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order with all of its line items, or None."""

    @abstractmethod
    def list_for_customer(self, customer_id: str) -> list[Order]:
        """Return a customer's orders, newest first."""

    @abstractmethod
    def list_supplier_lines(self, supplier_id: str) -> list[SupplierLineRecord]:
        """Return every order line whose product belongs to *supplier_id*.

        Each record carries its parent order's header fields.
        """

    @abstractmethod
    def update_status(self, order_id: int, new_status: OrderStatus) -> None:
        """Write a new status and stamp ``updated_at``.

        The transition is checked against the persisted status inside the
        write; concurrent legal writes resolve last-write-wins.
        """
