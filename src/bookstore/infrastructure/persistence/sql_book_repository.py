"""SQLAlchemy-backed implementation of BookRepository."""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.exc import SQLAlchemyError

from bookstore.domain.exceptions import EntityNotFoundError, StorageError
from bookstore.domain.model.book import Book
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.infrastructure.persistence.schema import book_table


class SqlBookRepository(BookRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- BookRepository interface ---------------------------------------------

    def find_by_book_id(self, book_id: int) -> Book:
        query = select(book_table).where(book_table.c.book_id == book_id)
        try:
            with self._engine.connect() as conn:
                row = conn.execute(query).mappings().first()
        except SQLAlchemyError as exc:
            raise StorageError(f"Encountered a problem finding book {book_id}") from exc
        if row is None:
            raise EntityNotFoundError(f"Book #{book_id} not found")
        return self._to_domain(row)

    # --- Catalog seeding ------------------------------------------------------

    def add(self, book: Book) -> None:
        """Insert a catalog entry. Not part of the checkout flow."""
        try:
            with self._engine.begin() as conn:
                conn.execute(insert(book_table).values(**self._to_raw(book)))
        except SQLAlchemyError as exc:
            raise StorageError(f"Encountered a problem adding book {book.book_id}") from exc

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(book: Book) -> dict:
        return {
            "book_id": book.book_id,
            "title": book.title,
            "author": book.author,
            "description": book.description,
            "price": book.price,
            "rating": book.rating,
            "is_public": book.is_public,
            "is_featured": book.is_featured,
            "category_id": book.category_id,
        }

    @staticmethod
    def _to_domain(row: RowMapping) -> Book:
        return Book(
            book_id=row["book_id"],
            title=row["title"],
            author=row["author"],
            description=row["description"],
            price=row["price"],
            rating=row["rating"],
            is_public=row["is_public"],
            is_featured=row["is_featured"],
            category_id=row["category_id"],
        )
