"""CLI commands for placing and displaying orders."""

from __future__ import annotations

import json
from pathlib import Path

import click

from bookstore.application.cancellation import Deadline
from bookstore.domain.exceptions import DomainException, ValidationError
from bookstore.domain.model.checkout import CustomerForm, ShoppingCart, ShoppingCartItem
from bookstore.domain.model.order import OrderDetails
from bookstore.infrastructure.bootstrap import (
    engine,
    order_details_handler,
    place_order_handler,
)
from bookstore.infrastructure.cli.formatting import cents


def _parse_checkout(raw: dict) -> tuple[CustomerForm, ShoppingCart]:
    """Parse the checkout JSON document posted by the web client.

    Expected shape::

        {"customer": {"name": ..., "address": ..., "phone": ..., "email": ...,
                      "ccNumber": ..., "ccExpiryMonth": ..., "ccExpiryYear": ...},
         "cart": {"items": [{"bookId": 7, "quantity": 2,
                             "price": 1999, "categoryId": 3}],
                  "subtotal": 3998, "surcharge": 500}}
    """
    try:
        customer = raw["customer"]
        cart = raw["cart"]
        form = CustomerForm(
            name=_text_field(customer, "name"),
            address=_text_field(customer, "address"),
            phone=_text_field(customer, "phone"),
            email=_text_field(customer, "email"),
            cc_number=_text_field(customer, "ccNumber"),
            cc_expiry_month=_optional_text(customer.get("ccExpiryMonth")),
            cc_expiry_year=_optional_text(customer.get("ccExpiryYear")),
        )
        items = [
            ShoppingCartItem(
                book_id=int(item["bookId"]),
                quantity=int(item["quantity"]),
                claimed_price=int(item["price"]),
                claimed_category_id=int(item["categoryId"]),
            )
            for item in cart.get("items", [])
        ]
        shopping_cart = ShoppingCart(
            items=items,
            computed_subtotal=int(cart["subtotal"]),
            surcharge=int(cart.get("surcharge", 0)),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise click.BadParameter(f"Malformed checkout document: {exc}")
    return form, shopping_cart


def _optional_text(value) -> str | None:
    return None if value is None else str(value)


def _text_field(customer: dict, key: str) -> str | None:
    value = customer.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


@click.command("place")
@click.option(
    "--checkout",
    "checkout_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with 'customer' and 'cart' objects.",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Give up (and roll back) after this many seconds.",
)
def order_place(checkout_path: Path, timeout: float | None) -> None:
    """Place an order from a checkout submission."""
    try:
        raw = json.loads(checkout_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON in {checkout_path}: {exc}")
    form, cart = _parse_checkout(raw)

    handler = place_order_handler(engine())
    deadline = Deadline.after(timeout) if timeout is not None else None

    try:
        order_id = handler.handle(form, cart, deadline=deadline)
    except ValidationError as exc:
        where = f" ({exc.field})" if exc.field else ""
        raise click.ClickException(f"Validation failed{where}: {exc.message}")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} placed.")


def _display_order(details: OrderDetails) -> None:
    """Shared formatting for displaying an order."""
    order = details.order
    customer = details.customer
    click.echo(f"Order #{order.order_id}  (confirmation #{order.confirmation_number})")
    click.echo(f"Customer: {customer.name} <{customer.email}>")
    click.echo(f"Ship to:  {customer.address}")
    if order.date_created is not None:
        click.echo(f"Created:  {order.date_created:%Y-%m-%d %H:%M}")
    click.echo()
    click.echo(f"  {'Title':<30} {'Qty':>5} {'Price':>10}")
    click.echo(f"  {'-'*47}")
    for line_item, book in zip(details.line_items, details.books):
        click.echo(
            f"  {book.title[:30]:<30} {line_item.quantity:>5} {cents(book.price):>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {cents(order.amount):>19}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of a placed order."""
    handler = order_details_handler(engine())

    try:
        details = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(details)
