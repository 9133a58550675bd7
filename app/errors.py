# app/errors.py
"""
Errors raised by the seed pipeline.

Every error carries the table whose step failed (None when the failure
happened before any table was touched, e.g. while connecting).
"""

from typing import Optional


class SeedError(Exception):
    """Base class for seeding failures."""

    def __init__(self, message: str, table: Optional[str] = None):
        super().__init__(message)
        self.table = table


class SchemaError(SeedError):
    """CREATE EXTENSION / CREATE TABLE failed (bad DDL, missing privilege)."""


class InsertError(SeedError):
    """An insert failed for a reason other than the declared conflict key."""


class HashingError(SeedError):
    """A seed password could not be hashed."""


class DatabaseConnectionError(SeedError):
    """The database could not be reached."""
