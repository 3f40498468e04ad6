"""Typed loading of fixture files.

A fixture file is read, its embedded tags are resolved, and each record is
validated into the caller's record type with pydantic. Record order follows
the document order.

Usage:
    loader = StructLoader("items.yml", Item, base_dir="fixtures")
    loader.load()
    melon = loader.get("Melon")
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Generic, Iterator, Mapping, Optional, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from seeding.errors import (
    AlreadyLoadedError,
    DeserializationError,
    LabelNotFoundError,
    MalformedTagError,
    NotLoadedError,
    UnresolvedReferenceError,
)
from seeding.reader import PathLike, read_document
from seeding.resolvers import LabelSource, TagResolver
from seeding.tags import resolve_tree

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _adapter(record_type: Union[type[T], TypeAdapter[T]]) -> TypeAdapter[T]:
    if isinstance(record_type, TypeAdapter):
        return record_type
    return TypeAdapter(record_type)


def resolve_document(
    document: Mapping[str, Any],
    filename: str,
    labels: Optional[LabelSource] = None,
    overrides: Optional[Mapping[str, int]] = None,
) -> dict[str, Any]:
    """Resolve tags in every record of a parsed document."""
    resolver = TagResolver(labels, overrides)
    resolved: dict[str, Any] = {}
    for label, node in document.items():
        try:
            resolved[label] = resolve_tree(node, resolver)
        except (MalformedTagError, UnresolvedReferenceError) as exc:
            exc.locate(label, filename)
            raise
    return resolved


def load_records(
    filename: PathLike,
    record_type: Union[type[T], TypeAdapter[T]],
    *,
    base_dir: Optional[PathLike] = None,
    labels: Optional[LabelSource] = None,
    overrides: Optional[Mapping[str, int]] = None,
) -> dict[str, T]:
    """Read `filename`, resolve its tags and validate every record.

    Args:
        filename: Fixture path, relative to `base_dir` unless absolute.
        record_type: Anything pydantic can validate, or a ready TypeAdapter.
        base_dir: Directory for relative paths. Defaults to settings.
        labels: Ids available to REF tags.
        overrides: Extra label -> id pairs that win over `labels`.

    Returns:
        Ordered mapping of label -> record, in document order.
    """
    name = str(filename)
    adapter = _adapter(record_type)
    document = read_document(filename, base_dir)
    resolved = resolve_document(document, name, labels, overrides)

    records: dict[str, T] = {}
    for label, node in resolved.items():
        try:
            records[label] = adapter.validate_python(node)
        except ValidationError as exc:
            raise DeserializationError(
                label,
                name,
                errors=exc.errors(include_url=False),
                reason=str(exc),
            ) from exc
    logger.debug("Loaded %d records from %s", len(records), name)
    return records


class StructLoader(Generic[T]):
    """Holds the typed records of one fixture file.

    Records are loaded once; a second `load` raises AlreadyLoadedError.
    """

    def __init__(
        self,
        filename: PathLike,
        record_type: Union[type[T], TypeAdapter[T]],
        base_dir: Optional[PathLike] = None,
    ) -> None:
        self.filename = str(filename)
        self.base_dir: Optional[Path] = Path(base_dir) if base_dir is not None else None
        self._adapter = _adapter(record_type)
        self._records: Optional[dict[str, T]] = None

    @property
    def loaded(self) -> bool:
        return self._records is not None

    def load(
        self,
        labels: Optional[LabelSource] = None,
        overrides: Optional[Mapping[str, int]] = None,
    ) -> StructLoader[T]:
        """Load the file, resolving REF tags against `labels` and `overrides`."""
        logger.info("Loading %s", self.filename)
        if self._records is not None:
            raise AlreadyLoadedError(self.filename)

        self._records = load_records(
            self.filename,
            self._adapter,
            base_dir=self.base_dir,
            labels=labels,
            overrides=overrides,
        )
        return self

    @property
    def records(self) -> dict[str, T]:
        if self._records is None:
            raise NotLoadedError(self.filename)
        return self._records

    def get(self, label: str) -> T:
        try:
            return self.records[label]
        except KeyError:
            raise LabelNotFoundError(label, self.filename) from None

    def labels(self) -> list[str]:
        return list(self.records)

    def __contains__(self, label: object) -> bool:
        return self._records is not None and label in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)
