"""Checkout submission: the customer form and the cart it accompanies.

These are plain input records handed over by the web and cart layers.
Nothing here is validated on construction; CheckoutValidator decides
whether a submission may become an order.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CustomerForm:
    """Raw form fields exactly as the customer typed them."""

    name: str | None
    address: str | None
    phone: str | None
    email: str | None
    cc_number: str | None
    cc_expiry_month: str | None
    cc_expiry_year: str | None


@dataclass(frozen=True)
class ShoppingCartItem:
    """One cart line with the price/category the client saw when adding it."""

    book_id: int
    quantity: int
    claimed_price: int
    claimed_category_id: int


@dataclass(frozen=True)
class ShoppingCart:
    """Cart snapshot at checkout.

    ``computed_subtotal`` and ``surcharge`` are authoritative; they are
    never re-derived from the items.
    """

    items: list[ShoppingCartItem] = field(default_factory=list)
    computed_subtotal: int = 0
    surcharge: int = 0

    @property
    def total(self) -> int:
        return self.computed_subtotal + self.surcharge
