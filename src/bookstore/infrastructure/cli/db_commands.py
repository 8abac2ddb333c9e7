"""CLI commands for database setup."""

from __future__ import annotations

import click

from bookstore.infrastructure.bootstrap import database_url, engine
from bookstore.infrastructure.persistence.schema import create_schema


@click.command("init")
def db_init() -> None:
    """Create the bookstore tables if they do not exist."""
    create_schema(engine())
    click.echo(f"Schema ready at {database_url()}")
