"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from fulfillment.infrastructure import settings
from fulfillment.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from fulfillment.infrastructure.persistence.sql_order_repository import (
    SqlOrderRepository,
)
from fulfillment.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)


@lru_cache(maxsize=None)
def engine() -> Engine:
    return create_db_engine(settings.DATABASE_URL, settings.CHECKOUT_TIMEOUT_SECONDS)


@lru_cache(maxsize=None)
def session_factory() -> sessionmaker:
    return create_session_factory(engine())


def product_repository() -> SqlProductRepository:
    return SqlProductRepository(session_factory())


def order_repository() -> SqlOrderRepository:
    return SqlOrderRepository(session_factory())


def reset() -> None:
    """Drop cached engine/session factory (after settings change)."""
    session_factory.cache_clear()
    engine.cache_clear()
