"""SQLAlchemy-backed insertion callbacks for DatabaseSeeder.

Each callback inserts one record in its own transaction and returns the
generated primary key via `INSERT ... RETURNING`.

Usage:
    engine = create_async_engine("postgresql+asyncpg://...")
    await seeder.populate_async("users.yml", User, async_inserter(engine, "users"))
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Awaitable, Callable, Mapping

from pydantic import BaseModel
from sqlalchemy import column, insert, table
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


def row_from_record(record: Any) -> dict[str, Any]:
    """Convert a typed record into a column -> value mapping."""
    if isinstance(record, BaseModel):
        return record.model_dump()
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return dataclasses.asdict(record)
    if isinstance(record, Mapping):
        return dict(record)
    raise TypeError(f"cannot build a table row from {type(record).__name__}")


def _insert_statement(table_name: str, row: Mapping[str, Any], id_column: str):
    names = [name for name in row if name != id_column] + [id_column]
    target = table(table_name, *(column(name) for name in names))
    return insert(target).values(**row).returning(target.c[id_column])


def inserter(engine: Engine, table_name: str, id_column: str = "id") -> Callable[[Any], int]:
    """Build a synchronous insertion callback for `table_name`."""

    def _insert(record: Any) -> int:
        row = row_from_record(record)
        with engine.begin() as conn:
            identifier = conn.execute(_insert_statement(table_name, row, id_column)).scalar_one()
        logger.debug("Inserted row into %s with %s=%s", table_name, id_column, identifier)
        return identifier

    return _insert


def async_inserter(
    engine: AsyncEngine,
    table_name: str,
    id_column: str = "id",
) -> Callable[[Any], Awaitable[int]]:
    """Build an asynchronous insertion callback for `table_name`."""

    async def _insert(record: Any) -> int:
        row = row_from_record(record)
        async with engine.begin() as conn:
            result = await conn.execute(_insert_statement(table_name, row, id_column))
            identifier = result.scalar_one()
        logger.debug("Inserted row into %s with %s=%s", table_name, id_column, identifier)
        return identifier

    return _insert
