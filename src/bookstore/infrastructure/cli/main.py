import click

from bookstore.infrastructure.cli.book_commands import book_add, book_show
from bookstore.infrastructure.cli.db_commands import db_init
from bookstore.infrastructure.cli.order_commands import order_place, order_show
from bookstore.infrastructure.logging_setup import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL (e.g. DEBUG).")
def cli(log_level: str | None) -> None:
    """Bookstore — order placement"""
    configure_logging(log_level)


@cli.group()
def db() -> None:
    """Manage the database."""


@cli.group()
def book() -> None:
    """Manage catalog books."""


@cli.group()
def order() -> None:
    """Place and inspect orders."""


# Register subcommands
db.add_command(db_init)
book.add_command(book_add)
book.add_command(book_show)
order.add_command(order_place)
order.add_command(order_show)
