"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the SQL repositories
but keep everything in dicts guarded by one lock, so ``place`` is a
single atomic unit exactly like a store transaction.  No I/O.
"""

from __future__ import annotations

import copy
import threading
from datetime import datetime, timezone
from typing import Callable

from fulfillment.domain.exceptions import (
    EntityNotFoundError,
    PersistenceError,
)
from fulfillment.domain.model.order import Order, OrderStatus, ensure_transition
from fulfillment.domain.model.product import Product
from fulfillment.domain.model.stock import ProductStock
from fulfillment.domain.model.supplier_view import CustomerSummary, SupplierLineRecord
from fulfillment.domain.repository.order_repository import OrderRepository
from fulfillment.domain.repository.product_repository import ProductRepository


class InMemoryStore:
    """Shared state behind both fake repositories."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.products: dict[str, Product] = {}
        self.stock: dict[str, ProductStock] = {}
        self.customers: dict[str, CustomerSummary] = {}
        self.orders: dict[int, Order] = {}
        self.next_order_id = 1
        self.next_item_id = 1

    def add_product(self, product: Product) -> None:
        self.products[product.id] = product
        self.stock[product.id] = ProductStock(product.id, product.available_stock)

    def add_customer(self, customer_id: str, name: str, phone: str | None = None) -> None:
        self.customers[customer_id] = CustomerSummary(name, phone)

    def stock_of(self, product_id: str) -> int:
        return self.stock[product_id].quantity


class FakeProductRepository(ProductRepository):

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def get_by_id(self, product_id: str) -> Product | None:
        with self._store.lock:
            product = self._store.products.get(product_id)
            if product is None:
                return None
            return self._with_current_stock(product)

    def list_available(self) -> list[Product]:
        with self._store.lock:
            products = [self._with_current_stock(p) for p in self._store.products.values()]
        return sorted((p for p in products if p.in_stock), key=lambda p: p.name)

    def list_by_supplier(self, supplier_id: str) -> list[Product]:
        with self._store.lock:
            products = [
                self._with_current_stock(p)
                for p in self._store.products.values()
                if p.supplier_id == supplier_id
            ]
        return sorted(products, key=lambda p: p.name)

    def get_stock(self, product_id: str) -> ProductStock | None:
        with self._store.lock:
            stock = self._store.stock.get(product_id)
            return copy.copy(stock) if stock is not None else None

    def restock(self, product_id: str, quantity: int) -> ProductStock:
        with self._store.lock:
            stock = self._store.stock.get(product_id)
            if stock is None:
                raise EntityNotFoundError(f"Product not found: '{product_id}'")
            stock.restock(quantity)
            return copy.copy(stock)

    def _with_current_stock(self, product: Product) -> Product:
        return Product(
            id=product.id,
            name=product.name,
            supplier_id=product.supplier_id,
            unit_price=product.unit_price,
            available_stock=self._store.stock[product.id].quantity,
        )


class FakeOrderRepository(OrderRepository):

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self.fail_next_place: Exception | None = None
        self.fail_next_status_write: Exception | None = None
        # runs before the atomic unit; lets tests simulate a competing writer
        self.before_place: Callable[[Order], None] | None = None
        self.status_writes: list[tuple[int, OrderStatus]] = []

    # --- Write side -----------------------------------------------------------

    def place(self, order: Order) -> Order:
        if self.before_place is not None:
            self.before_place(order)

        with self._store.lock:
            if self.fail_next_place is not None:
                exc, self.fail_next_place = self.fail_next_place, None
                raise exc

            if order.customer_id not in self._store.customers:
                raise PersistenceError(
                    f"Checkout failed: unknown customer '{order.customer_id}'"
                )

            # apply decrements on copies, publish only if all succeed
            staged: dict[str, ProductStock] = {}
            for product_id, qty in order.quantities_by_product().items():
                current = self._store.stock.get(product_id)
                if current is None:
                    raise EntityNotFoundError(f"Product not found: '{product_id}'")
                candidate = copy.copy(current)
                candidate.decrement(qty)  # raises InsufficientStockError
                staged[product_id] = candidate

            self._store.stock.update(staged)

            order.id = self._store.next_order_id
            self._store.next_order_id += 1
            for item in order.items:
                item.id = self._store.next_item_id
                self._store.next_item_id += 1
            self._store.orders[order.id] = copy.deepcopy(order)
            return order

    def update_status(self, order_id: int, new_status: OrderStatus) -> None:
        with self._store.lock:
            if self.fail_next_status_write is not None:
                exc, self.fail_next_status_write = self.fail_next_status_write, None
                raise exc
            order = self._store.orders.get(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            ensure_transition(order.status, new_status)
            order.status = new_status
            order.updated_at = datetime.now(timezone.utc)
            self.status_writes.append((order_id, new_status))

    # --- Read side ------------------------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        with self._store.lock:
            order = self._store.orders.get(order_id)
            return copy.deepcopy(order) if order is not None else None

    def list_for_customer(self, customer_id: str) -> list[Order]:
        with self._store.lock:
            orders = [
                copy.deepcopy(o)
                for o in self._store.orders.values()
                if o.customer_id == customer_id
            ]
        return sorted(orders, key=lambda o: (o.created_at, o.id), reverse=True)

    def list_supplier_lines(self, supplier_id: str) -> list[SupplierLineRecord]:
        with self._store.lock:
            records = []
            for order in self._store.orders.values():
                for item in order.items:
                    if item.supplier_id != supplier_id:
                        continue
                    records.append(
                        SupplierLineRecord(
                            order_id=order.id,
                            order_status=order.status,
                            order_total=order.total_amount,
                            order_created_at=order.created_at,
                            customer=self._store.customers.get(order.customer_id),
                            item_id=item.id,
                            product_id=item.product_id,
                            product_name=item.product_name,
                            supplier_id=item.supplier_id,
                            quantity=item.quantity.value,
                            unit_price=item.unit_price,
                            total_price=item.total_price,
                        )
                    )
            return records
