"""SQL-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.orm import sessionmaker

from fulfillment.domain.exceptions import EntityNotFoundError
from fulfillment.domain.model.product import Product
from fulfillment.domain.model.stock import ProductStock
from fulfillment.domain.model.value_objects import Money
from fulfillment.domain.repository.product_repository import ProductRepository
from fulfillment.infrastructure.persistence.database import transaction
from fulfillment.infrastructure.persistence.models import ProductModel


class SqlProductRepository(ProductRepository):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        with transaction(self._session_factory, "Product lookup") as session:
            row = session.get(ProductModel, product_id)
            return self._to_domain(row) if row is not None else None

    def list_available(self) -> list[Product]:
        stmt = (
            select(ProductModel)
            .where(ProductModel.stock_quantity > 0)
            .order_by(ProductModel.name)
        )
        with transaction(self._session_factory, "Product listing") as session:
            return [self._to_domain(row) for row in session.scalars(stmt)]

    def list_by_supplier(self, supplier_id: str) -> list[Product]:
        stmt = (
            select(ProductModel)
            .where(ProductModel.supplier_id == supplier_id)
            .order_by(ProductModel.name)
        )
        with transaction(self._session_factory, "Product listing") as session:
            return [self._to_domain(row) for row in session.scalars(stmt)]

    def get_stock(self, product_id: str) -> ProductStock | None:
        stmt = select(ProductModel.stock_quantity).where(ProductModel.id == product_id)
        with transaction(self._session_factory, "Stock lookup") as session:
            quantity = session.scalar(stmt)
        if quantity is None:
            return None
        return ProductStock(product_id=product_id, quantity=quantity)

    def restock(self, product_id: str, quantity: int) -> ProductStock:
        with transaction(
            self._session_factory, f"Restock of '{product_id}'", write=True
        ) as session:
            result = session.execute(
                update(ProductModel)
                .where(ProductModel.id == product_id)
                .values(stock_quantity=ProductModel.stock_quantity + quantity)
            )
            if result.rowcount == 0:
                raise EntityNotFoundError(f"Product not found: '{product_id}'")
            new_quantity = session.scalar(
                select(ProductModel.stock_quantity).where(ProductModel.id == product_id)
            )
        return ProductStock(product_id=product_id, quantity=new_quantity)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: ProductModel) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            supplier_id=row.supplier_id,
            unit_price=Money(Decimal(str(row.unit_price))),
            available_stock=row.stock_quantity,
        )
