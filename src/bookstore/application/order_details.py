"""Application service: Order Details use case (query)."""

from __future__ import annotations

from bookstore.domain.model.order import OrderDetails
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.customer_repository import CustomerRepository
from bookstore.domain.repository.line_item_repository import LineItemRepository
from bookstore.domain.repository.order_repository import OrderRepository


class OrderDetailsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        line_item_repo: LineItemRepository,
        book_repo: BookRepository,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._line_item_repo = line_item_repo
        self._book_repo = book_repo

    def handle(self, order_id: int) -> OrderDetails:
        """Assemble an order with its customer, line items and books.

        Any missing referent raises EntityNotFoundError from the
        repository that failed to find it.
        """
        order = self._order_repo.find_by_order_id(order_id)
        customer = self._customer_repo.find_by_customer_id(order.customer_id)
        line_items = self._line_item_repo.find_by_order_id(order_id)
        books = [self._book_repo.find_by_book_id(li.book_id) for li in line_items]
        return OrderDetails(
            order=order,
            customer=customer,
            line_items=line_items,
            books=books,
        )
