"""Abstract repository for the Customer entity."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from bookstore.domain.model.customer import Customer
from bookstore.domain.repository.connection import TransactionalConnection


class CustomerRepository(ABC):

    @abstractmethod
    def create(
        self,
        conn: TransactionalConnection,
        name: str,
        address: str,
        phone: str,
        email: str,
        cc_number: str,
        cc_expiration_date: date,
    ) -> int:
        """Insert a customer under ``conn`` and return the generated ID."""

    @abstractmethod
    def find_by_customer_id(self, customer_id: int) -> Customer:
        """Return a customer; raise EntityNotFoundError if absent."""
