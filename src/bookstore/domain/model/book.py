"""Book entity.

Books belong to the catalog; the checkout flow only ever reads them to
confirm the price and category a customer saw when adding to the cart.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Book:
    book_id: int
    title: str
    author: str
    price: int  # minor currency units
    category_id: int
    description: str = ""
    rating: int = 0
    is_public: bool = True
    is_featured: bool = False
