"""Abstract repository for the Order entity."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.order import Order
from bookstore.domain.repository.connection import TransactionalConnection


class OrderRepository(ABC):

    @abstractmethod
    def create(
        self,
        conn: TransactionalConnection,
        amount: int,
        confirmation_number: int,
        customer_id: int,
    ) -> int:
        """Insert an order under ``conn`` and return the generated ID."""

    @abstractmethod
    def find_by_order_id(self, order_id: int) -> Order:
        """Return an order; raise EntityNotFoundError if absent."""
