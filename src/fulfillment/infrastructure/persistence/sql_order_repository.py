"""SQL-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload, sessionmaker

from fulfillment.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    StockShortage,
)
from fulfillment.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    ensure_transition,
)
from fulfillment.domain.model.supplier_view import CustomerSummary, SupplierLineRecord
from fulfillment.domain.model.value_objects import Money, Quantity
from fulfillment.domain.repository.order_repository import OrderRepository
from fulfillment.infrastructure.persistence.database import transaction
from fulfillment.infrastructure.persistence.models import (
    CustomerModel,
    OrderItemModel,
    OrderModel,
    ProductModel,
)


class SqlOrderRepository(OrderRepository):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    # --- Write side -----------------------------------------------------------

    def place(self, order: Order) -> Order:
        with transaction(self._session_factory, "Checkout", write=True) as session:
            header = OrderModel(
                customer_id=order.customer_id,
                status=order.status.value,
                total_amount=order.total_amount.amount,
                created_at=order.created_at,
            )
            header.items = [
                OrderItemModel(
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    total_price=item.total_price.amount,
                )
                for item in order.items
            ]
            session.add(header)
            session.flush()

            for product_id, quantity in order.quantities_by_product().items():
                self._conditional_decrement(session, product_id, quantity)

            order_id = header.id
            item_ids = [row.id for row in header.items]

        order.id = order_id
        for item, item_id in zip(order.items, item_ids):
            item.id = item_id
        return order

    def update_status(self, order_id: int, new_status: OrderStatus) -> None:
        with transaction(
            self._session_factory, f"Status update of order #{order_id}", write=True
        ) as session:
            row = session.scalar(
                select(OrderModel).where(OrderModel.id == order_id).with_for_update()
            )
            if row is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            ensure_transition(OrderStatus(row.status), new_status)
            row.status = new_status.value
            row.updated_at = datetime.now(timezone.utc)

    @staticmethod
    def _conditional_decrement(session: Session, product_id: str, quantity: int) -> None:
        """``stock -= quantity`` guarded by ``stock >= quantity`` in one statement."""
        result = session.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.stock_quantity >= quantity,
            )
            .values(stock_quantity=ProductModel.stock_quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return

        available = session.scalar(
            select(ProductModel.stock_quantity).where(ProductModel.id == product_id)
        )
        if available is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")
        logger.info(
            f"Conditional decrement refused for product {product_id} "
            f"(requested {quantity}, available {available})"
        )
        raise InsufficientStockError([StockShortage(product_id, quantity, available)])

    # --- Read side ------------------------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        stmt = (
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(selectinload(OrderModel.items).selectinload(OrderItemModel.product))
        )
        with transaction(self._session_factory, f"Lookup of order #{order_id}") as session:
            row = session.scalar(stmt)
            return self._to_domain(row) if row is not None else None

    def list_for_customer(self, customer_id: str) -> list[Order]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.customer_id == customer_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .options(selectinload(OrderModel.items).selectinload(OrderItemModel.product))
        )
        with transaction(self._session_factory, "Customer order listing") as session:
            return [self._to_domain(row) for row in session.scalars(stmt)]

    def list_supplier_lines(self, supplier_id: str) -> list[SupplierLineRecord]:
        stmt = (
            select(OrderItemModel, ProductModel, OrderModel, CustomerModel)
            .join(ProductModel, OrderItemModel.product_id == ProductModel.id)
            .join(OrderModel, OrderItemModel.order_id == OrderModel.id)
            .outerjoin(CustomerModel, OrderModel.customer_id == CustomerModel.id)
            .where(ProductModel.supplier_id == supplier_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc(), OrderItemModel.id)
        )
        with transaction(self._session_factory, "Supplier order listing") as session:
            return [
                SupplierLineRecord(
                    order_id=order.id,
                    order_status=OrderStatus(order.status),
                    order_total=_money(order.total_amount),
                    order_created_at=_as_utc(order.created_at),
                    customer=(
                        CustomerSummary(customer.customer_name, customer.phone)
                        if customer is not None
                        else None
                    ),
                    item_id=item.id,
                    product_id=product.id,
                    product_name=product.name,
                    supplier_id=product.supplier_id,
                    quantity=item.quantity,
                    unit_price=_money(item.unit_price),
                    total_price=_money(item.total_price),
                )
                for item, product, order, customer in session.execute(stmt)
            ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: OrderModel) -> Order:
        items = [
            OrderLineItem(
                id=i.id,
                product_id=i.product_id,
                product_name=i.product.name,
                supplier_id=i.product.supplier_id,
                quantity=Quantity(i.quantity),
                unit_price=_money(i.unit_price),
            )
            for i in row.items
        ]
        return Order(
            id=row.id,
            customer_id=row.customer_id,
            items=items,
            status=OrderStatus(row.status),
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at) if row.updated_at else None,
        )


def _money(value) -> Money:
    return Money(Decimal(str(value)))


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
