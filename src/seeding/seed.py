"""Ordered database seeding from fixture files.

A DatabaseSeeder is one seeding session. Each `populate` call loads a
fixture file, hands every record to an insertion callback in document order,
and stores the returned id under the record's label so later files can
refer to it with `${{ REF(label) }}`.

Usage:
    seeder = DatabaseSeeder(base_dir="fixtures")

    # Synchronous callback:
    seeder.populate("companies.yml", Company, insert_company)

    # Asynchronous callback (from an event loop):
    await seeder.populate_async("users.yml", User, insert_user)
"""
from __future__ import annotations

import inspect
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from pydantic import TypeAdapter

from seeding.errors import DuplicateLabelError, InsertionError
from seeding.labels import LabelStore, check_identifier
from seeding.loader import load_records
from seeding.reader import PathLike

logger = logging.getLogger(__name__)

T = TypeVar("T")

Insert = Callable[[T], int]
AsyncInsert = Callable[[T], Union[int, Awaitable[int]]]


class DatabaseSeeder:
    """Seeding session owning one LabelStore.

    Within a file every record is fully inserted and its id stored before
    the next record is touched. References resolve only against files
    completed earlier in the session; nothing is rolled back on failure.
    """

    def __init__(self, base_dir: Optional[PathLike] = None) -> None:
        self.base_dir: Optional[Path] = Path(base_dir) if base_dir is not None else None
        self.filenames: list[str] = []
        self._labels = LabelStore()

    @property
    def labels(self) -> LabelStore:
        return self._labels

    def set_dir(self, base_dir: PathLike) -> None:
        self.base_dir = Path(base_dir)

    # -----------------------------------------------------------------------
    # Shared sequencing core
    # -----------------------------------------------------------------------

    def _prepare(self, filename: PathLike, record_type: Union[type[T], TypeAdapter[T]]) -> dict[str, T]:
        """Load and validate a whole file without touching the label store."""
        name = str(filename)
        records = load_records(name, record_type, base_dir=self.base_dir, labels=self._labels)
        for label in records:
            if label in self._labels:
                raise DuplicateLabelError(label, name)
        self.filenames.append(name)
        logger.info("Seeding %d records from %s", len(records), name)
        return records

    def _commit(self, filename: str, label: str, identifier: Any, ids: list[int]) -> None:
        try:
            checked = check_identifier(identifier)
        except (TypeError, ValueError) as exc:
            raise InsertionError(label, filename, str(exc)) from exc
        self._labels.add(label, checked)
        ids.append(checked)
        logger.debug("Inserted %s from %s with id %d", label, filename, checked)

    def _finish(self, filename: str, ids: list[int]) -> list[int]:
        logger.info("Seeded %d records from %s", len(ids), filename)
        return ids

    # -----------------------------------------------------------------------
    # Entry points
    # -----------------------------------------------------------------------

    def populate(
        self,
        filename: PathLike,
        record_type: Union[type[T], TypeAdapter[T]],
        insert: Insert[T],
    ) -> list[int]:
        """Insert every record of `filename` with a synchronous callback.

        Args:
            filename: Fixture path, relative to the session base directory.
            record_type: Record type the file is validated into.
            insert: Persists one record and returns its id.

        Returns:
            Inserted ids in document order.

        Raises:
            InsertionError: `insert` raised, or did not return an int id.
        """
        name = str(filename)
        records = self._prepare(name, record_type)
        ids: list[int] = []
        for label, record in records.items():
            try:
                identifier = insert(record)
            except Exception as exc:
                raise InsertionError(label, name, str(exc)) from exc
            if inspect.isawaitable(identifier):
                if inspect.iscoroutine(identifier):
                    identifier.close()
                raise InsertionError(
                    label,
                    name,
                    "insert callback returned an awaitable, use populate_async instead",
                )
            self._commit(name, label, identifier, ids)
        return self._finish(name, ids)

    async def populate_async(
        self,
        filename: PathLike,
        record_type: Union[type[T], TypeAdapter[T]],
        insert: AsyncInsert[T],
    ) -> list[int]:
        """Insert every record of `filename`, awaiting each insertion in turn.

        `insert` may be a coroutine function or return an id directly. A
        cancelled insertion leaves no entry in the label store.
        """
        name = str(filename)
        records = self._prepare(name, record_type)
        ids: list[int] = []
        for label, record in records.items():
            try:
                identifier = insert(record)
                if inspect.isawaitable(identifier):
                    identifier = await identifier
            except Exception as exc:
                raise InsertionError(label, name, str(exc)) from exc
            self._commit(name, label, identifier, ids)
        return self._finish(name, ids)
