"""Domain service: checkout validation.

Runs every check on a CustomerForm and ShoppingCart in a fixed order and
raises the first failure. Book lookups are the only I/O; nothing is
written.

Order of checks:
    name, address, phone, email, cc number, cc expiry,
    cart not empty, then per item: quantity, price, category.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

import structlog

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.checkout import CustomerForm, ShoppingCart
from bookstore.domain.model.value_objects import CardExpiry, digits_only
from bookstore.domain.repository.book_repository import BookRepository

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MIN_TEXT_LENGTH = 4
MAX_TEXT_LENGTH = 45
MIN_PHONE_DIGITS = 10
MIN_CC_DIGITS = 14
MAX_CC_DIGITS = 16
MIN_QUANTITY = 0
MAX_QUANTITY = 99

EXPIRY_FIELD = "ccExpiry"


class CheckoutValidator:

    def __init__(
        self,
        book_repo: BookRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._book_repo = book_repo
        self._today = today

    def validate(self, form: CustomerForm, cart: ShoppingCart) -> None:
        """Raise ValidationError for the first failing check, else return."""
        try:
            self.validate_customer(form)
            self.validate_cart(cart)
        except ValidationError as exc:
            logger.info(
                "Checkout rejected",
                field=exc.field,
                reason=exc.message,
            )
            raise

    # --- Customer form --------------------------------------------------------

    def validate_customer(self, form: CustomerForm) -> None:
        if not _length_between(form.name, MIN_TEXT_LENGTH, MAX_TEXT_LENGTH):
            raise ValidationError("Invalid name field", field="name")

        if not _length_between(form.address, MIN_TEXT_LENGTH, MAX_TEXT_LENGTH):
            raise ValidationError("Invalid address field", field="address")

        if form.phone is None:
            raise ValidationError("Missing phone field", field="phone")
        if len(digits_only(form.phone)) < MIN_PHONE_DIGITS:
            raise ValidationError("Invalid phone field", field="phone")

        if not _is_plausible_email(form.email):
            raise ValidationError("Invalid email field", field="email")

        if form.cc_number is None:
            raise ValidationError("Missing ccNumber field", field="ccNumber")
        if not MIN_CC_DIGITS <= len(digits_only(form.cc_number)) <= MAX_CC_DIGITS:
            raise ValidationError("Invalid ccNumber field", field="ccNumber")

        if self._expiry_is_invalid(form.cc_expiry_month, form.cc_expiry_year):
            raise ValidationError(
                "Please enter a valid expiration date.", field=EXPIRY_FIELD
            )

    def _expiry_is_invalid(self, month: str | None, year: str | None) -> bool:
        try:
            expiry = CardExpiry.parse(month, year)
        except ValidationError:
            return True
        return expiry.is_before(CardExpiry.current(self._today()))

    # --- Cart -----------------------------------------------------------------

    def validate_cart(self, cart: ShoppingCart) -> None:
        if not cart.items:
            raise ValidationError("Cart is empty.")

        for item in cart.items:
            if not MIN_QUANTITY <= item.quantity <= MAX_QUANTITY:
                raise ValidationError("Invalid quantity")

            book = self._book_repo.find_by_book_id(item.book_id)
            if book.price != item.claimed_price:
                raise ValidationError("Price Error")
            if book.category_id != item.claimed_category_id:
                raise ValidationError("CategoryId Error")


def _length_between(value: str | None, low: int, high: int) -> bool:
    return value is not None and low <= len(value) <= high


def _is_plausible_email(email: str | None) -> bool:
    return (
        email is not None
        and " " not in email
        and "@" in email
        and not email.endswith(".")
    )
