"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from bookstore.application.order_details import OrderDetailsHandler
from bookstore.application.place_order import PlaceOrderHandler
from bookstore.domain.service.checkout_validator import CheckoutValidator
from bookstore.infrastructure.persistence.sql_book_repository import (
    SqlBookRepository,
)
from bookstore.infrastructure.persistence.sql_connection import (
    SqlConnectionProvider,
)
from bookstore.infrastructure.persistence.sql_customer_repository import (
    SqlCustomerRepository,
)
from bookstore.infrastructure.persistence.sql_line_item_repository import (
    SqlLineItemRepository,
)
from bookstore.infrastructure.persistence.sql_order_repository import (
    SqlOrderRepository,
)

DATABASE_URL_ENV = "BOOKSTORE_DATABASE_URL"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def database_url() -> str:
    url = os.getenv(DATABASE_URL_ENV)
    if url:
        return url
    _DATA_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{_DATA_DIR / 'bookstore.db'}"


def engine(url: str | None = None) -> Engine:
    url = url or database_url()
    result = create_engine(url)
    if result.dialect.name == "sqlite":
        event.listen(result, "connect", _enable_sqlite_foreign_keys)
    return result


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def connection_provider(db: Engine) -> SqlConnectionProvider:
    # SQLite only knows SERIALIZABLE; server databases get READ COMMITTED.
    isolation = None if db.dialect.name == "sqlite" else "READ COMMITTED"
    return SqlConnectionProvider(db, isolation_level=isolation)


def book_repository(db: Engine) -> SqlBookRepository:
    return SqlBookRepository(db)


def place_order_handler(db: Engine) -> PlaceOrderHandler:
    return PlaceOrderHandler(
        connections=connection_provider(db),
        validator=CheckoutValidator(book_repository(db)),
        customer_repo=SqlCustomerRepository(db),
        order_repo=SqlOrderRepository(db),
        line_item_repo=SqlLineItemRepository(db),
    )


def order_details_handler(db: Engine) -> OrderDetailsHandler:
    return OrderDetailsHandler(
        order_repo=SqlOrderRepository(db),
        customer_repo=SqlCustomerRepository(db),
        line_item_repo=SqlLineItemRepository(db),
        book_repo=book_repository(db),
    )
