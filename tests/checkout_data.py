"""Sample checkout submissions shared by the test suites."""

from __future__ import annotations

from dataclasses import replace
from datetime import date

from bookstore.domain.model.book import Book
from bookstore.domain.model.checkout import CustomerForm, ShoppingCart, ShoppingCartItem

TODAY = date(2026, 10, 19)


def today() -> date:
    return TODAY


def sample_books() -> list[Book]:
    return [
        Book(book_id=7, title="The Left Hand of Darkness", author="Ursula K. Le Guin",
             price=1999, category_id=3),
        Book(book_id=8, title="Middlemarch", author="George Eliot",
             price=1250, category_id=1),
        Book(book_id=9, title="Dune", author="Frank Herbert",
             price=899, category_id=3),
    ]


def valid_form(**overrides) -> CustomerForm:
    form = CustomerForm(
        name="Jane Doe",
        address="1 Main St",
        phone="(415) 555-0100",
        email="j@x.io",
        cc_number="4111-1111-1111-1111",
        cc_expiry_month="12",
        cc_expiry_year="2099",
    )
    return replace(form, **overrides)


def single_item_cart() -> ShoppingCart:
    return ShoppingCart(
        items=[ShoppingCartItem(book_id=7, quantity=2, claimed_price=1999,
                                claimed_category_id=3)],
        computed_subtotal=3998,
        surcharge=500,
    )


def three_item_cart() -> ShoppingCart:
    return ShoppingCart(
        items=[
            ShoppingCartItem(book_id=9, quantity=1, claimed_price=899,
                             claimed_category_id=3),
            ShoppingCartItem(book_id=7, quantity=2, claimed_price=1999,
                             claimed_category_id=3),
            ShoppingCartItem(book_id=8, quantity=3, claimed_price=1250,
                             claimed_category_id=1),
        ],
        computed_subtotal=899 + 2 * 1999 + 3 * 1250,
        surcharge=500,
    )
