"""SQLAlchemy-backed implementation of TransactionalConnection."""

from __future__ import annotations

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from bookstore.domain.exceptions import StorageError
from bookstore.domain.repository.connection import (
    ConnectionProvider,
    TransactionalConnection,
)

# Per-dialect statement bounding, in milliseconds. PostgreSQL scopes it to
# the transaction; the MySQL and SQLite settings stay on the pooled handle.
_TIMEOUT_STATEMENTS = {
    "postgresql": "SET LOCAL statement_timeout = {millis}",
    "mysql": "SET SESSION max_execution_time = {millis}",
    "sqlite": "PRAGMA busy_timeout = {millis}",
}


class SqlConnection(TransactionalConnection):

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    @property
    def connection(self) -> Connection:
        """The underlying SQLAlchemy connection, for repositories."""
        return self._connection

    # --- TransactionalConnection interface ------------------------------------

    def begin(self) -> None:
        try:
            self._connection.begin()
        except SQLAlchemyError as exc:
            raise StorageError("Could not begin transaction") from exc

    def commit(self) -> None:
        try:
            self._connection.commit()
        except SQLAlchemyError as exc:
            raise StorageError("Could not commit transaction") from exc

    def rollback(self) -> None:
        self._connection.rollback()

    def close(self) -> None:
        try:
            self._connection.close()
        except SQLAlchemyError as exc:
            raise StorageError(
                "Error during close connection for customer order"
            ) from exc

    def set_timeout(self, seconds: float) -> None:
        statement = _TIMEOUT_STATEMENTS.get(self._connection.dialect.name)
        if statement is None:
            return
        millis = max(1, int(seconds * 1000))
        try:
            self._connection.exec_driver_sql(statement.format(millis=millis))
        except SQLAlchemyError as exc:
            raise StorageError("Could not apply statement timeout") from exc


class SqlConnectionProvider(ConnectionProvider):
    """Hands out pooled connections from an Engine.

    ``isolation_level`` is passed straight to SQLAlchemy, e.g.
    ``"READ COMMITTED"`` on PostgreSQL or MySQL. None keeps the driver
    default.
    """

    def __init__(self, engine: Engine, isolation_level: str | None = None) -> None:
        self._engine = engine
        self._isolation_level = isolation_level

    def connect(self) -> SqlConnection:
        try:
            connection = self._engine.connect()
            if self._isolation_level is not None:
                connection = connection.execution_options(
                    isolation_level=self._isolation_level
                )
        except SQLAlchemyError as exc:
            raise StorageError("Could not acquire a storage connection") from exc
        return SqlConnection(connection)


def sql_connection_of(conn: TransactionalConnection) -> Connection:
    """Unwrap a connection handed to a SQL repository."""
    if not isinstance(conn, SqlConnection):
        raise TypeError(
            f"SQL repositories need a SqlConnection, got {type(conn).__name__}"
        )
    return conn.connection
