"""SQLAlchemy Core table definitions.

Amounts and prices are integers in minor currency units, the same unit
the cart reports them in.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    func,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

book_table = Table(
    "book",
    metadata,
    Column("book_id", Integer, primary_key=True),
    Column("title", String(60), nullable=False),
    Column("author", String(60), nullable=False),
    Column("description", String(1000), nullable=False, default=""),
    Column("price", Integer, nullable=False),
    Column("rating", Integer, nullable=False, default=0),
    Column("is_public", Boolean, nullable=False, default=True),
    Column("is_featured", Boolean, nullable=False, default=False),
    Column("category_id", Integer, nullable=False),
)

customer_table = Table(
    "customer",
    metadata,
    Column("customer_id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(45), nullable=False),
    Column("address", String(45), nullable=False),
    Column("phone", String(45), nullable=False),
    Column("email", String(45), nullable=False),
    Column("cc_number", String(45), nullable=False),
    Column("cc_exp_date", Date, nullable=False),
)

order_table = Table(
    "customer_order",
    metadata,
    Column("customer_order_id", Integer, primary_key=True, autoincrement=True),
    Column("amount", Integer, nullable=False),
    Column("date_created", DateTime, nullable=False, server_default=func.now()),
    Column("confirmation_number", Integer, nullable=False),
    Column(
        "customer_id",
        Integer,
        ForeignKey("customer.customer_id"),
        nullable=False,
    ),
)

# ``id`` only exists to preserve insertion order on read.
line_item_table = Table(
    "customer_order_line_item",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "customer_order_id",
        Integer,
        ForeignKey("customer_order.customer_order_id"),
        nullable=False,
    ),
    Column("book_id", Integer, ForeignKey("book.book_id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    UniqueConstraint("customer_order_id", "book_id"),
)


def create_schema(engine: Engine) -> None:
    """Create every table that does not exist yet."""
    metadata.create_all(engine)
