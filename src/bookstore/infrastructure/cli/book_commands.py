"""CLI commands for catalog books."""

from __future__ import annotations

import click

from bookstore.domain.exceptions import DomainException
from bookstore.domain.model.book import Book
from bookstore.infrastructure.bootstrap import book_repository, engine
from bookstore.infrastructure.cli.formatting import cents


@click.command("add")
@click.option("--id", "book_id", required=True, type=int, help="Book ID.")
@click.option("--title", required=True, help="Book title.")
@click.option("--author", required=True, help="Book author.")
@click.option("--price", required=True, type=int, help="Price in cents.")
@click.option("--category-id", required=True, type=int, help="Category ID.")
def book_add(book_id: int, title: str, author: str, price: int, category_id: int) -> None:
    """Add a book to the catalog."""
    book = Book(
        book_id=book_id,
        title=title,
        author=author,
        price=price,
        category_id=category_id,
    )
    try:
        book_repository(engine()).add(book)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book #{book.book_id} added: {book.title}")


@click.command("show")
@click.option("--id", "book_id", required=True, type=int, help="Book ID to display.")
def book_show(book_id: int) -> None:
    """Show a catalog book."""
    try:
        book = book_repository(engine()).find_by_book_id(book_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book #{book.book_id}: {book.title} by {book.author}")
    click.echo(f"Price:    {cents(book.price)}")
    click.echo(f"Category: {book.category_id}")
