"""SQLAlchemy engine, session factory and unit-of-work helper.

On SQLite, write units start with ``BEGIN IMMEDIATE`` so concurrent
writers queue on the database lock instead of failing mid-transaction;
reads use a plain deferred ``BEGIN`` and never take the write lock.
Foreign keys are switched on.  The driver's lock wait doubles as the
checkout timeout.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from fulfillment.domain.exceptions import PersistenceError

# connection execution option marking a unit of work that writes
WRITE_UNIT = "fulfillment_write_unit"


class Base(DeclarativeBase):
    pass


def create_db_engine(database_url: str, timeout_seconds: float = 10.0) -> Engine:
    url = make_url(database_url)

    if url.get_backend_name() != "sqlite":
        return create_engine(
            url,
            pool_pre_ping=True,
            pool_timeout=timeout_seconds,
        )

    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, connect_args={"timeout": timeout_seconds})

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # let SQLAlchemy emit BEGIN itself (see _on_begin)
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get(WRITE_UNIT):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    # models must be imported so their tables are registered on Base.metadata
    from fulfillment.infrastructure.persistence import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


@contextmanager
def transaction(session_factory: sessionmaker, action: str, write: bool = False):
    """Run one unit of work; commit on success, roll back on any error.

    A *write* unit takes the store's write lock up front (``BEGIN
    IMMEDIATE`` on SQLite) and waits at most the configured timeout.

    Driver and constraint errors surface as PersistenceError naming
    *action*.  Domain errors raised inside the block pass through
    unchanged after the rollback.
    """
    try:
        with session_factory.begin() as session:
            if write:
                session.connection(execution_options={WRITE_UNIT: True})
            yield session
    except OperationalError as exc:
        raise PersistenceError(
            f"{action} failed: record store unavailable or timed out ({exc.orig})"
        ) from exc
    except SQLAlchemyError as exc:
        raise PersistenceError(f"{action} failed: {exc}") from exc
