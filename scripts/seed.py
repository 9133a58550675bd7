# scripts/seed.py

import argparse
import asyncio
import hashlib
import logging
import sys
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from sqlalchemy import Table, text
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.schema import CreateTable

from app import placeholder_data
from app.db.engine import connect
from app.db.schema import (
    SEED_ORDER, customers, invoices, revenue, users, uses_generated_uuid
)
from app.errors import HashingError, InsertError, SchemaError, SeedError
from app.models.customers import CustomerSeed
from app.models.dashboard import RevenueSeed
from app.models.invoices import InvoiceSeed
from app.models.users import UserSeed
from app.security import hash_password
from app.settings import SETTINGS

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


# ---- Data ----

@dataclass
class SeedData:
    users: List[UserSeed] = field(default_factory=list)
    customers: List[CustomerSeed] = field(default_factory=list)
    invoices: List[InvoiceSeed] = field(default_factory=list)
    revenue: List[RevenueSeed] = field(default_factory=list)


def load_placeholder_data() -> SeedData:
    return SeedData(
        users=[UserSeed(**u) for u in placeholder_data.users],
        customers=[CustomerSeed(**c) for c in placeholder_data.customers],
        invoices=[InvoiceSeed(**i) for i in placeholder_data.invoices],
        revenue=[RevenueSeed(**r) for r in placeholder_data.revenue],
    )


@dataclass
class TableReport:
    table: str
    submitted: int
    inserted: int

    @property
    def skipped(self) -> int:
        return self.submitted - self.inserted


@dataclass
class SeedReport:
    tables: List[TableReport] = field(default_factory=list)


# ---- Helpers ----

def invoice_id(position: int, invoice: InvoiceSeed) -> str:
    """
    Stable id for a fixture invoice that has none, so re-runs hit
    ON CONFLICT (id) instead of inserting a second copy.
    """
    parts = [
        "invoice",
        str(position),
        invoice.customer_id,
        str(invoice.amount),
        invoice.status,
        invoice.date.isoformat(),
    ]
    h = hashlib.sha256("||".join(parts).encode("utf-8")).hexdigest()
    return str(uuid.UUID(h[:32]))


def _insert_for(dialect_name: str):
    try:
        return _DIALECT_INSERTS[dialect_name]
    except KeyError:
        raise ValueError(f"Unsupported database dialect: {dialect_name}")


async def _gather_settled(aws: Iterable[Awaitable[Any]]) -> List[Any]:
    """
    Run every awaitable concurrently, wait for all of them to finish, then
    raise the first failure (in submission order) if there was one.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


# ---- Schema ----

async def ensure_table(engine: AsyncEngine, table: Table) -> None:
    """
    CREATE TABLE IF NOT EXISTS for one table (plus uuid-ossp on PostgreSQL).
    """
    try:
        async with engine.begin() as conn:
            if conn.dialect.name == "postgresql" and uses_generated_uuid(table):
                await conn.execute(text('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"'))
            await conn.execute(CreateTable(table, if_not_exists=True))
    except SQLAlchemyError as e:
        raise SchemaError(f"Could not create table {table.name!r}: {e}", table=table.name) from e

    logger.info('Created "%s" table', table.name)


# ---- Loading ----

async def bulk_insert(
    engine: AsyncEngine,
    table: Table,
    records: List[Any],
    conflict_key: str,
    to_row: Callable[[Any], Awaitable[Dict[str, Any]]],
) -> TableReport:
    """
    Insert every record concurrently with ON CONFLICT (conflict_key) DO NOTHING.

    A conflicting row is counted as skipped. Any other failure fails the
    batch once all inserts have settled.
    """
    insert = _insert_for(engine.dialect.name)

    async def insert_one(record) -> bool:
        row = await to_row(record)
        stmt = insert(table).values(**row).on_conflict_do_nothing(index_elements=[conflict_key])
        try:
            async with engine.begin() as conn:
                result = await conn.execute(stmt)
        except SQLAlchemyError as e:
            raise InsertError(f"Insert into {table.name!r} failed: {e}", table=table.name) from e
        return result.rowcount == 1

    inserted = await _gather_settled(insert_one(r) for r in records)
    return TableReport(table=table.name, submitted=len(records), inserted=sum(inserted))


async def _user_row(user: UserSeed) -> Dict[str, Any]:
    try:
        hashed = await asyncio.to_thread(hash_password, user.password)
    except (ValueError, TypeError) as e:
        raise HashingError(f"Could not hash password for {user.email}: {e}", table="users") from e
    return {"id": user.id, "name": user.name, "email": user.email, "password": hashed}


async def _plain_row(record) -> Dict[str, Any]:
    return record.model_dump()


async def _seed_table(engine, table, records, conflict_key, to_row) -> TableReport:
    try:
        await ensure_table(engine, table)
        report = await bulk_insert(engine, table, records, conflict_key, to_row)
    except Exception as e:
        logger.error("Error seeding %s: %s", table.name, e)
        raise

    logger.info("Seeded %d %s (%d already present)", report.inserted, table.name, report.skipped)
    return report


async def seed_users(engine: AsyncEngine, records: List[UserSeed]) -> TableReport:
    return await _seed_table(engine, users, records, "id", _user_row)


async def seed_customers(engine: AsyncEngine, records: List[CustomerSeed]) -> TableReport:
    return await _seed_table(engine, customers, records, "id", _plain_row)


async def seed_invoices(engine: AsyncEngine, records: List[InvoiceSeed]) -> TableReport:
    pinned = [
        inv if inv.id else inv.model_copy(update={"id": invoice_id(i, inv)})
        for i, inv in enumerate(records)
    ]
    return await _seed_table(engine, invoices, pinned, "id", _plain_row)


async def seed_revenue(engine: AsyncEngine, records: List[RevenueSeed]) -> TableReport:
    return await _seed_table(engine, revenue, records, "month", _plain_row)


# ---- Orchestration ----

class RunState(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    SEEDING = "seeding"
    CLOSING = "closing"
    DONE = "done"
    FAILED = "failed"


class SeedRun:
    """
    One pass over users -> customers -> invoices -> revenue.

    The database is held for the whole run and released exactly once,
    whether the run finishes or a step fails. The first failing step
    stops the run.
    """

    def __init__(self, database_url: Optional[str] = None, data: Optional[SeedData] = None):
        self.database_url = database_url
        self.data = data if data is not None else load_placeholder_data()
        self.state = RunState.IDLE
        self.current_table: Optional[str] = None
        self.history: List[str] = [RunState.IDLE.value]

    def _transition(self, state: RunState, table: Optional[str] = None) -> None:
        self.state = state
        self.current_table = table
        self.history.append(f"{state.value}:{table}" if table else state.value)
        logger.debug("Seed run -> %s", self.history[-1])

    def steps(self):
        seeders = {
            "users": seed_users,
            "customers": seed_customers,
            "invoices": seed_invoices,
            "revenue": seed_revenue,
        }
        return [
            (table.name, seeders[table.name], getattr(self.data, table.name))
            for table in SEED_ORDER
        ]

    async def run(self) -> SeedReport:
        report = SeedReport()
        self._transition(RunState.CONNECTING)
        try:
            async with connect(self.database_url) as engine:
                try:
                    for name, step, records in self.steps():
                        self._transition(RunState.SEEDING, name)
                        report.tables.append(await step(engine, records))
                finally:
                    self._transition(RunState.CLOSING)
        except Exception:
            self._transition(RunState.FAILED)
            raise

        self._transition(RunState.DONE)
        return report


async def seed(database_url: Optional[str] = None, data: Optional[SeedData] = None) -> SeedReport:
    return await SeedRun(database_url, data).run()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the dashboard database with placeholder data.")
    parser.add_argument("--database-url", default=SETTINGS.database_url)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=SETTINGS.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        report = asyncio.run(seed(args.database_url))
    except SeedError as e:
        logger.error("An error occurred while attempting to seed the database: %s", e)
        return 1
    except Exception:
        logger.exception("An error occurred while attempting to seed the database")
        return 1

    for t in report.tables:
        logger.info("%-10s submitted=%d inserted=%d skipped=%d", t.table, t.submitted, t.inserted, t.skipped)
    return 0


if __name__ == "__main__":
    sys.exit(main())
