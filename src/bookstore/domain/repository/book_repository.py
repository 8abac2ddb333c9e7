"""Abstract repository for the Book entity.

Defined in the domain layer so the domain never depends on
infrastructure. The checkout flow only reads books.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.book import Book


class BookRepository(ABC):

    @abstractmethod
    def find_by_book_id(self, book_id: int) -> Book:
        """Return a book by its ID; raise EntityNotFoundError if absent."""
