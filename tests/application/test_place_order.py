"""Integration tests for the PlaceOrder use case.

Uses in-memory fakes — no database.
"""

from dataclasses import replace
from datetime import date

import pytest

from bookstore.application.cancellation import CancellationToken, Deadline
from bookstore.application.place_order import (
    PlaceOrderHandler,
    generate_confirmation_number,
)
from bookstore.domain.exceptions import (
    DeadlineExceededError,
    OrderCancelledError,
    StorageError,
    ValidationError,
)
from bookstore.domain.model.checkout import ShoppingCart
from bookstore.domain.service.checkout_validator import CheckoutValidator
from tests.checkout_data import (
    sample_books,
    single_item_cart,
    three_item_cart,
    today,
    valid_form,
)
from tests.fakes import (
    FakeBookRepository,
    FakeConnectionProvider,
    FakeCustomerRepository,
    FakeDatabase,
    FakeLineItemRepository,
    FakeOrderRepository,
)


def _setup(
    fail_customer: bool = False,
    fail_line_item_on: int | None = None,
    fail_rollback: bool = False,
    confirmation_number: int = 123456789,
) -> tuple[PlaceOrderHandler, FakeDatabase, FakeConnectionProvider]:
    db = FakeDatabase(sample_books())
    connections = FakeConnectionProvider(db, fail_rollback=fail_rollback)
    handler = PlaceOrderHandler(
        connections=connections,
        validator=CheckoutValidator(FakeBookRepository(db), today=today),
        customer_repo=FakeCustomerRepository(db, fail=fail_customer),
        order_repo=FakeOrderRepository(db),
        line_item_repo=FakeLineItemRepository(db, fail_on_call=fail_line_item_on),
        confirmation_numbers=lambda: confirmation_number,
    )
    return handler, db, connections


class TestPlaceOrderHappyPath:

    def test_returns_positive_order_id(self):
        handler, _, _ = _setup()
        order_id = handler.handle(valid_form(), single_item_cart())
        assert order_id > 0

    def test_amount_is_subtotal_plus_surcharge(self):
        handler, db, _ = _setup()
        order_id = handler.handle(valid_form(), single_item_cart())
        assert db.orders[order_id].amount == 4498

    def test_surcharge_is_not_recomputed_from_items(self):
        handler, db, _ = _setup()
        cart = replace(single_item_cart(), computed_subtotal=1000, surcharge=1)
        order_id = handler.handle(valid_form(), cart)
        assert db.orders[order_id].amount == 1001

    def test_persists_one_customer_one_order_and_every_line_item(self):
        handler, db, _ = _setup()
        order_id = handler.handle(valid_form(), three_item_cart())
        assert len(db.customers) == 1
        assert len(db.orders) == 1
        assert [(li.order_id, li.book_id, li.quantity) for li in db.line_items] == [
            (order_id, 9, 1),
            (order_id, 7, 2),
            (order_id, 8, 3),
        ]

    def test_customer_is_linked_to_order(self):
        handler, db, _ = _setup()
        order_id = handler.handle(valid_form(), single_item_cart())
        customer_id = db.orders[order_id].customer_id
        customer = db.customers[customer_id]
        assert customer.name == "Jane Doe"
        assert customer.cc_number == "4111-1111-1111-1111"

    def test_expiry_is_pinned_to_first_of_month(self):
        handler, db, _ = _setup()
        handler.handle(valid_form(), single_item_cart())
        (customer,) = db.customers.values()
        assert customer.cc_expiration_date == date(2099, 12, 1)

    def test_confirmation_number_stored_verbatim(self):
        handler, db, _ = _setup(confirmation_number=0)
        order_id = handler.handle(valid_form(), single_item_cart())
        assert db.orders[order_id].confirmation_number == 0

    def test_commits_and_closes_connection(self):
        handler, _, connections = _setup()
        handler.handle(valid_form(), single_item_cart())
        (conn,) = connections.connections
        assert conn.events == ["begin", "commit", "close"]

    def test_each_call_creates_a_fresh_order(self):
        handler, db, _ = _setup()
        first = handler.handle(valid_form(), single_item_cart())
        second = handler.handle(valid_form(), single_item_cart())
        assert second > first
        assert len(db.orders) == 2
        assert len(db.customers) == 2


class TestPlaceOrderValidation:

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"name": "Jo"}, "name"),
            ({"phone": "+1 (415) 555"}, "phone"),
            ({"email": "a@b."}, "email"),
            ({"cc_expiry_month": "01", "cc_expiry_year": "2000"}, "ccExpiry"),
        ],
    )
    def test_invalid_form_never_touches_storage(self, overrides, field):
        handler, db, connections = _setup()
        with pytest.raises(ValidationError) as info:
            handler.handle(valid_form(**overrides), single_item_cart())
        assert info.value.field == field
        assert connections.connections == []
        assert db.is_empty

    def test_stale_price_rejected(self):
        handler, db, connections = _setup()
        db.books[7] = replace(db.books[7], price=2099)
        with pytest.raises(ValidationError, match="Price Error"):
            handler.handle(valid_form(), single_item_cart())
        assert connections.connections == []

    def test_empty_cart_rejected(self):
        handler, db, _ = _setup()
        with pytest.raises(ValidationError, match="Cart is empty."):
            handler.handle(valid_form(), ShoppingCart(items=[]))
        assert db.is_empty


class TestPlaceOrderAtomicity:

    def test_line_item_failure_rolls_back_everything(self):
        handler, db, connections = _setup(fail_line_item_on=2)
        with pytest.raises(StorageError):
            handler.handle(valid_form(), three_item_cart())
        assert db.is_empty
        (conn,) = connections.connections
        assert conn.events == ["begin", "rollback", "close"]

    def test_customer_failure_rolls_back(self):
        handler, db, connections = _setup(fail_customer=True)
        with pytest.raises(StorageError):
            handler.handle(valid_form(), single_item_cart())
        assert db.is_empty
        assert connections.connections[0].closed

    def test_unexpected_error_is_surfaced_as_storage_error(self):
        handler, db, _ = _setup()

        def broken() -> int:
            raise RuntimeError("entropy pool exhausted")

        handler._confirmation_numbers = broken
        with pytest.raises(StorageError, match="rolled back") as info:
            handler.handle(valid_form(), single_item_cart())
        assert isinstance(info.value.__cause__, RuntimeError)
        assert db.is_empty

    def test_failed_rollback_is_fatal_storage_error(self):
        handler, _, connections = _setup(fail_line_item_on=1, fail_rollback=True)
        with pytest.raises(StorageError, match="Failed to roll back transaction"):
            handler.handle(valid_form(), single_item_cart())
        assert connections.connections[0].closed

    def test_earlier_orders_survive_a_failed_placement(self):
        handler, db, _ = _setup(fail_line_item_on=5)
        kept = handler.handle(valid_form(), three_item_cart())
        with pytest.raises(StorageError):
            handler.handle(valid_form(), three_item_cart())
        assert list(db.orders) == [kept]
        assert len(db.line_items) == 3


class TestPlaceOrderCancellation:

    def test_cancelled_before_start_opens_no_connection(self):
        handler, db, connections = _setup()
        token = CancellationToken()
        token.cancel()
        with pytest.raises(OrderCancelledError):
            handler.handle(valid_form(), single_item_cart(), cancellation=token)
        assert connections.connections == []
        assert db.is_empty

    def test_cancel_mid_transaction_rolls_back(self):
        handler, db, connections = _setup()
        token = CancellationToken()
        original = handler._confirmation_numbers

        def cancel_then_draw() -> int:
            token.cancel()
            return original()

        handler._confirmation_numbers = cancel_then_draw
        with pytest.raises(OrderCancelledError):
            handler.handle(valid_form(), three_item_cart(), cancellation=token)
        assert db.is_empty
        assert "rollback" in connections.connections[0].events

    def test_expired_deadline(self):
        handler, db, _ = _setup()
        with pytest.raises(DeadlineExceededError):
            handler.handle(
                valid_form(), single_item_cart(), deadline=Deadline(expires_at=0.0)
            )
        assert db.is_empty

    def test_generous_deadline_allows_placement(self):
        handler, _, _ = _setup()
        order_id = handler.handle(
            valid_form(), single_item_cart(), deadline=Deadline.after(60)
        )
        assert order_id > 0

    def test_deadline_bounds_every_storage_step(self):
        handler, _, connections = _setup()
        handler.handle(
            valid_form(), three_item_cart(), deadline=Deadline.after(60)
        )
        (conn,) = connections.connections
        # after begin, after the customer, before each of 3 items, before commit
        assert len(conn.timeouts) == 6
        assert all(0 < seconds <= 60 for seconds in conn.timeouts)

    def test_no_deadline_sets_no_timeout(self):
        handler, _, connections = _setup()
        handler.handle(valid_form(), single_item_cart())
        assert connections.connections[0].timeouts == []


class TestConfirmationNumber:

    def test_range(self):
        for _ in range(1000):
            assert 0 <= generate_confirmation_number() < 1_000_000_000
