# app/db/engine.py

import logging
import uuid
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator, Optional

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.errors import DatabaseConnectionError
from app.settings import SETTINGS

logger = logging.getLogger(__name__)


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    # Same server default as the uuid-ossp extension on PostgreSQL.
    # Hex form matches how sqlalchemy.Uuid stores values on SQLite.
    dbapi_connection.create_function("uuid_generate_v4", 0, lambda: uuid.uuid4().hex)


def create_engine(database_url: Optional[str] = None) -> AsyncEngine:
    # echo=True if you want to see SQL printed in the terminal
    engine = create_async_engine(database_url or SETTINGS.database_url, future=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _register_sqlite_functions)
    return engine


@lru_cache(maxsize=None)
def get_engine() -> AsyncEngine:
    """
    Engine shared by the API for the lifetime of the process.
    """
    return create_engine()


async def _release(engine: AsyncEngine, safe_url: str, in_flight: bool = False) -> None:
    try:
        await engine.dispose()
    except (SQLAlchemyError, OSError) as e:
        if in_flight:
            # Keep the error that is already propagating.
            logger.error("Could not release %s: %s", safe_url, e)
            return
        raise DatabaseConnectionError(f"Could not release {safe_url}: {e}") from e
    logger.info("Closed connection to %s", safe_url)


@asynccontextmanager
async def connect(database_url: Optional[str] = None) -> AsyncIterator[AsyncEngine]:
    """
    Acquire the database for one seed run and release it on every exit path.
    """
    engine = create_engine(database_url)
    safe_url = engine.url.render_as_string(hide_password=True)

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        await _release(engine, safe_url, in_flight=True)
        raise DatabaseConnectionError(f"Could not connect to {safe_url}: {e}") from e

    logger.info("Connected to %s", safe_url)
    try:
        yield engine
    except BaseException:
        await _release(engine, safe_url, in_flight=True)
        raise
    await _release(engine, safe_url)
