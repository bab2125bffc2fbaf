"""Demo data for a fresh database."""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from fulfillment.infrastructure.persistence.database import transaction
from fulfillment.infrastructure.persistence.models import CustomerModel, ProductModel

DEMO_CUSTOMERS = [
    ("c1", "Acme Retail", "+90 212 555 0101"),
    ("c2", "Globex Market", "+90 216 555 0202"),
]

DEMO_PRODUCTS = [
    ("p1", "Olive Oil 5L", "s1", Decimal("10.00"), 5),
    ("p2", "Hazelnut Paste", "s1", Decimal("15.00"), 20),
    ("p3", "Green Tea 1kg", "s2", Decimal("25.00"), 1),
]


def seed(session_factory: sessionmaker) -> bool:
    """Load demo customers and products; returns False if data already exists."""
    with transaction(session_factory, "Seeding", write=True) as session:
        # not forcing: only seed if empty
        if session.scalar(select(ProductModel.id).limit(1)) is not None:
            return False
        session.add_all(
            CustomerModel(id=cid, customer_name=name, phone=phone)
            for cid, name, phone in DEMO_CUSTOMERS
        )
        session.add_all(
            ProductModel(
                id=pid,
                name=name,
                supplier_id=supplier_id,
                unit_price=price,
                stock_quantity=stock,
            )
            for pid, name, supplier_id, price, stock in DEMO_PRODUCTS
        )
    return True
