"""Order and line-item entities plus the read-side aggregate.

Neither orders nor line items are mutated after the placing transaction
commits, so all of them are frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from bookstore.domain.model.book import Book
from bookstore.domain.model.customer import Customer

# Confirmation numbers are drawn uniformly from [0, CONFIRMATION_NUMBER_LIMIT).
CONFIRMATION_NUMBER_LIMIT = 1_000_000_000


@dataclass(frozen=True)
class Order:
    order_id: int
    amount: int  # subtotal + surcharge at placement time
    confirmation_number: int
    customer_id: int
    date_created: datetime | None = None


@dataclass(frozen=True)
class LineItem:
    order_id: int
    book_id: int
    quantity: int


@dataclass(frozen=True)
class OrderDetails:
    """Everything needed to display a placed order.

    ``books[i]`` is the catalog entry for ``line_items[i]``.
    """

    order: Order
    customer: Customer
    line_items: list[LineItem]
    books: list[Book]
