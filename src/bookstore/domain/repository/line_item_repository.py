"""Abstract repository for LineItem rows."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.order import LineItem
from bookstore.domain.repository.connection import TransactionalConnection


class LineItemRepository(ABC):

    @abstractmethod
    def create(
        self,
        conn: TransactionalConnection,
        order_id: int,
        book_id: int,
        quantity: int,
    ) -> None:
        """Insert one line item under ``conn``."""

    @abstractmethod
    def find_by_order_id(self, order_id: int) -> list[LineItem]:
        """Return the order's line items in insertion order."""
