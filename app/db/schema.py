# app/db/schema.py

from sqlalchemy import (
    MetaData, Table, Column, Integer, String,
    Date, Text, Uuid, text
)

metadata = MetaData()

# Same generator on every table with a UUID key; provided by the uuid-ossp
# extension on PostgreSQL and by a connection function on SQLite.
UUID_DEFAULT = text("uuid_generate_v4()")

users = Table(
    "users",
    metadata,
    Column("id", Uuid(as_uuid=False), primary_key=True, server_default=UUID_DEFAULT),
    Column("name", String(255), nullable=False),
    Column("email", Text, nullable=False, unique=True),
    Column("password", Text, nullable=False),
)

customers = Table(
    "customers",
    metadata,
    Column("id", Uuid(as_uuid=False), primary_key=True, server_default=UUID_DEFAULT),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("image_url", String(255), nullable=False),
)

# customer_id intentionally has no ForeignKey: invoices may reference
# customers that were never seeded.
invoices = Table(
    "invoices",
    metadata,
    Column("id", Uuid(as_uuid=False), primary_key=True, server_default=UUID_DEFAULT),
    Column("customer_id", Uuid(as_uuid=False), nullable=False),
    Column("amount", Integer, nullable=False),
    Column("status", String(255), nullable=False),
    Column("date", Date, nullable=False),
)

revenue = Table(
    "revenue",
    metadata,
    Column("month", String(4), nullable=False, unique=True),
    Column("revenue", Integer, nullable=False),
)

# Seeding order; invoices read more plausibly once customers exist.
SEED_ORDER = (users, customers, invoices, revenue)


def uses_generated_uuid(table: Table) -> bool:
    return any(
        isinstance(col.type, Uuid) and col.server_default is not None
        for col in table.columns
    )
