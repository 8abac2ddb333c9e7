"""Application service: Place Order use case.

Validates a checkout submission, then records the customer, the order
and its line items in one transaction. This is the only place in the
codebase that writes to more than one table at once.

No partial order is ever visible: any failure after the transaction
begins rolls everything back and surfaces a typed error. A successful
call always returns a positive order ID.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import date

import structlog

from bookstore.application.cancellation import CancellationToken, Deadline
from bookstore.domain.exceptions import (
    DeadlineExceededError,
    OrderCancelledError,
    StorageError,
)
from bookstore.domain.model.checkout import CustomerForm, ShoppingCart
from bookstore.domain.model.order import CONFIRMATION_NUMBER_LIMIT
from bookstore.domain.model.value_objects import CardExpiry
from bookstore.domain.repository.connection import (
    ConnectionProvider,
    TransactionalConnection,
)
from bookstore.domain.repository.customer_repository import CustomerRepository
from bookstore.domain.repository.line_item_repository import LineItemRepository
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.domain.service.checkout_validator import CheckoutValidator

logger = structlog.get_logger(__name__)

# Errors that already describe why the transaction was abandoned.
_PASSTHROUGH_ERRORS = (StorageError, OrderCancelledError, DeadlineExceededError)


def generate_confirmation_number() -> int:
    """Uniform draw from [0, 10**9); ``secrets`` is safe across threads."""
    return secrets.randbelow(CONFIRMATION_NUMBER_LIMIT)


class PlaceOrderHandler:

    def __init__(
        self,
        connections: ConnectionProvider,
        validator: CheckoutValidator,
        customer_repo: CustomerRepository,
        order_repo: OrderRepository,
        line_item_repo: LineItemRepository,
        confirmation_numbers: Callable[[], int] = generate_confirmation_number,
    ) -> None:
        self._connections = connections
        self._validator = validator
        self._customer_repo = customer_repo
        self._order_repo = order_repo
        self._line_item_repo = line_item_repo
        self._confirmation_numbers = confirmation_numbers

    def handle(
        self,
        form: CustomerForm,
        cart: ShoppingCart,
        cancellation: CancellationToken | None = None,
        deadline: Deadline | None = None,
    ) -> int:
        """Place an order and return its ID.

        Steps:
        1. Validate the form and cart (storage is untouched on failure).
        2. Pin the card expiry to the first day of its month.
        3. Open a connection and begin a transaction.
        4. Insert customer, order, then line items in cart order.
        5. Commit, or roll back on any failure.
        """
        self._validator.validate(form, cart)

        # Parsing already succeeded inside the validator.
        cc_expiration_date = CardExpiry.parse(
            form.cc_expiry_month, form.cc_expiry_year
        ).first_day()

        def checkpoint(conn: TransactionalConnection | None = None) -> None:
            if cancellation is not None:
                cancellation.raise_if_cancelled()
            if deadline is not None:
                deadline.raise_if_expired()
                if conn is not None:
                    conn.set_timeout(deadline.remaining())

        checkpoint()
        try:
            conn = self._connections.connect()
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError("Could not acquire a storage connection") from exc

        with conn:
            return self._perform_transaction(
                conn, form, cc_expiration_date, cart, checkpoint
            )

    # --- Transaction ----------------------------------------------------------

    def _perform_transaction(
        self,
        conn: TransactionalConnection,
        form: CustomerForm,
        cc_expiration_date: date,
        cart: ShoppingCart,
        checkpoint: Callable[[TransactionalConnection], None],
    ) -> int:
        try:
            conn.begin()
            checkpoint(conn)
            customer_id = self._customer_repo.create(
                conn,
                form.name,
                form.address,
                form.phone,
                form.email,
                form.cc_number,
                cc_expiration_date,
            )
            checkpoint(conn)
            order_id = self._order_repo.create(
                conn,
                cart.total,
                self._confirmation_numbers(),
                customer_id,
            )
            for item in cart.items:
                checkpoint(conn)
                self._line_item_repo.create(
                    conn, order_id, item.book_id, item.quantity
                )
            checkpoint(conn)
            conn.commit()
        except Exception as exc:
            self._rollback(conn, exc)
            if isinstance(exc, _PASSTHROUGH_ERRORS):
                raise
            raise StorageError("Order placement failed; transaction rolled back") from exc

        logger.info(
            "Order placed",
            order_id=order_id,
            customer_id=customer_id,
            amount=cart.total,
            item_count=len(cart.items),
        )
        return order_id

    @staticmethod
    def _rollback(conn: TransactionalConnection, cause: Exception) -> None:
        try:
            conn.rollback()
        except Exception as exc:
            logger.error("Rollback failed", error=str(exc), cause=str(cause))
            raise StorageError("Failed to roll back transaction") from exc
        logger.warning(
            "Order transaction rolled back",
            reason=type(cause).__name__,
            error=str(cause),
        )
