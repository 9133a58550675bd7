"""Shared pytest fixtures for dashboard tests."""

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import func, inspect, select

from app.db.engine import create_engine, get_engine
from app.main import app
from scripts.seed import seed


@pytest.fixture
def database_url(tmp_path):
    """SQLite database file that lives for a single test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}"


@pytest_asyncio.fixture
async def engine(database_url):
    """Engine on the test database, used to inspect what a seed run wrote."""
    engine = create_engine(database_url)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def seeded_engine(database_url, engine):
    """Engine on a database seeded with the placeholder data."""
    await seed(database_url)
    return engine


@pytest_asyncio.fixture
async def client(seeded_engine):
    """HTTP client for the API, reading from the seeded test database."""
    app.dependency_overrides[get_engine] = lambda: seeded_engine
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def count_rows(engine, table):
    async with engine.connect() as conn:
        return (await conn.execute(select(func.count()).select_from(table))).scalar_one()


async def has_table(engine, name):
    async with engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table(name))
