"""SQLAlchemy-backed implementation of LineItemRepository."""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from bookstore.domain.exceptions import StorageError
from bookstore.domain.model.order import LineItem
from bookstore.domain.repository.connection import TransactionalConnection
from bookstore.domain.repository.line_item_repository import LineItemRepository
from bookstore.infrastructure.persistence.schema import line_item_table
from bookstore.infrastructure.persistence.sql_connection import sql_connection_of


class SqlLineItemRepository(LineItemRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- LineItemRepository interface -----------------------------------------

    def create(
        self,
        conn: TransactionalConnection,
        order_id: int,
        book_id: int,
        quantity: int,
    ) -> None:
        statement = insert(line_item_table).values(
            customer_order_id=order_id,
            book_id=book_id,
            quantity=quantity,
        )
        try:
            sql_connection_of(conn).execute(statement)
        except SQLAlchemyError as exc:
            raise StorageError(
                f"Encountered a problem creating line item for book {book_id}"
            ) from exc

    def find_by_order_id(self, order_id: int) -> list[LineItem]:
        query = (
            select(line_item_table)
            .where(line_item_table.c.customer_order_id == order_id)
            .order_by(line_item_table.c.id)
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as exc:
            raise StorageError(
                f"Encountered a problem finding line items for order {order_id}"
            ) from exc
        return [
            LineItem(
                order_id=row["customer_order_id"],
                book_id=row["book_id"],
                quantity=row["quantity"],
            )
            for row in rows
        ]
