"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.exc import SQLAlchemyError

from bookstore.domain.exceptions import EntityNotFoundError, StorageError
from bookstore.domain.model.order import Order
from bookstore.domain.repository.connection import TransactionalConnection
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.infrastructure.persistence.schema import order_table
from bookstore.infrastructure.persistence.sql_connection import sql_connection_of


class SqlOrderRepository(OrderRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- OrderRepository interface --------------------------------------------

    def create(
        self,
        conn: TransactionalConnection,
        amount: int,
        confirmation_number: int,
        customer_id: int,
    ) -> int:
        statement = insert(order_table).values(
            amount=amount,
            confirmation_number=confirmation_number,
            customer_id=customer_id,
        )
        try:
            result = sql_connection_of(conn).execute(statement)
        except SQLAlchemyError as exc:
            raise StorageError("Encountered a problem creating a new order") from exc
        return result.inserted_primary_key[0]

    def find_by_order_id(self, order_id: int) -> Order:
        query = select(order_table).where(
            order_table.c.customer_order_id == order_id
        )
        try:
            with self._engine.connect() as conn:
                row = conn.execute(query).mappings().first()
        except SQLAlchemyError as exc:
            raise StorageError(f"Encountered a problem finding order {order_id}") from exc
        if row is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return self._to_domain(row)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: RowMapping) -> Order:
        return Order(
            order_id=row["customer_order_id"],
            amount=row["amount"],
            confirmation_number=row["confirmation_number"],
            customer_id=row["customer_id"],
            date_created=row["date_created"],
        )
