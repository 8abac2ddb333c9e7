"""SQLAlchemy-backed implementation of CustomerRepository."""

from __future__ import annotations

from datetime import date

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.exc import SQLAlchemyError

from bookstore.domain.exceptions import EntityNotFoundError, StorageError
from bookstore.domain.model.customer import Customer
from bookstore.domain.repository.connection import TransactionalConnection
from bookstore.domain.repository.customer_repository import CustomerRepository
from bookstore.infrastructure.persistence.schema import customer_table
from bookstore.infrastructure.persistence.sql_connection import sql_connection_of


class SqlCustomerRepository(CustomerRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- CustomerRepository interface -----------------------------------------

    def create(
        self,
        conn: TransactionalConnection,
        name: str,
        address: str,
        phone: str,
        email: str,
        cc_number: str,
        cc_expiration_date: date,
    ) -> int:
        statement = insert(customer_table).values(
            name=name,
            address=address,
            phone=phone,
            email=email,
            cc_number=cc_number,
            cc_exp_date=cc_expiration_date,
        )
        try:
            result = sql_connection_of(conn).execute(statement)
        except SQLAlchemyError as exc:
            raise StorageError("Encountered a problem creating a new customer") from exc
        return result.inserted_primary_key[0]

    def find_by_customer_id(self, customer_id: int) -> Customer:
        query = select(customer_table).where(
            customer_table.c.customer_id == customer_id
        )
        try:
            with self._engine.connect() as conn:
                row = conn.execute(query).mappings().first()
        except SQLAlchemyError as exc:
            raise StorageError(
                f"Encountered a problem finding customer {customer_id}"
            ) from exc
        if row is None:
            raise EntityNotFoundError(f"Customer #{customer_id} not found")
        return self._to_domain(row)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: RowMapping) -> Customer:
        return Customer(
            customer_id=row["customer_id"],
            name=row["name"],
            address=row["address"],
            phone=row["phone"],
            email=row["email"],
            cc_number=row["cc_number"],
            cc_expiration_date=row["cc_exp_date"],
        )
