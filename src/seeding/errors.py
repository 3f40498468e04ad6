"""Exception hierarchy for fixture loading and seeding.

Every error raised by the package derives from SeedingError and carries
enough context (label, file) to locate the offending record.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any


class SeedingError(Exception):
    """Base class for all fixture loading and seeding failures."""


class FixtureNotFoundError(SeedingError, FileNotFoundError):
    """The fixture file does not exist or cannot be opened."""

    def __init__(self, path: Path | str, reason: str | None = None) -> None:
        self.path = str(path)
        message = f"Can't open the fixture file: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class FixtureParseError(SeedingError):
    """The fixture file is not a well-formed YAML mapping."""

    def __init__(
        self,
        filename: str,
        reason: str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.filename = filename
        self.reason = reason
        self.line = line
        self.column = column
        location = filename
        if line is not None:
            location = f"{filename}:{line}:{column}"
        super().__init__(f"failed to parse fixture {location}: {reason}")


class _RecordError(SeedingError):
    """Error tied to a record label within a fixture file."""

    def __init__(self, message: str, label: str | None = None, filename: str | None = None) -> None:
        self.label = label
        self.filename = filename
        self.message = message
        super().__init__(self._format())

    def _format(self) -> str:
        where = []
        if self.filename:
            where.append(f"file={self.filename}")
        if self.label is not None:
            where.append(f"label={self.label}")
        if not where:
            return self.message
        return f"{self.message} [{', '.join(where)}]"

    def locate(self, label: str | None = None, filename: str | None = None) -> None:
        """Attach record location once it is known further up the stack."""
        if self.label is None:
            self.label = label
        if self.filename is None:
            self.filename = filename
        self.args = (self._format(),)


class MalformedTagError(_RecordError):
    """A `${{ ... }}` placeholder is unterminated or has unknown inner syntax."""

    def __init__(
        self,
        text: str,
        position: int,
        reason: str,
        label: str | None = None,
        filename: str | None = None,
    ) -> None:
        self.text = text
        self.position = position
        super().__init__(f"malformed tag at offset {position} in {text!r}: {reason}", label, filename)


class UnresolvedReferenceError(_RecordError):
    """A REF tag names a label that has not been inserted yet."""

    def __init__(self, reference: str, label: str | None = None, filename: str | None = None) -> None:
        self.reference = reference
        super().__init__(
            f"failed to identify a record referred by the label: `{reference}`",
            label,
            filename,
        )


class LabelNotFoundError(_RecordError, KeyError):
    """A loaded document has no record under the requested label."""

    def __init__(self, label: str, filename: str | None = None) -> None:
        super().__init__("no record was found under this label", label, filename)

    def __str__(self) -> str:
        return self.args[0]


class DeserializationError(_RecordError):
    """A resolved node does not match the shape of the target record type."""

    def __init__(
        self,
        label: str,
        filename: str,
        errors: list[dict[str, Any]] | None = None,
        reason: str | None = None,
    ) -> None:
        self.errors = errors or []
        super().__init__(f"deserialization failed: {reason or 'schema mismatch'}", label, filename)


class DuplicateLabelError(_RecordError):
    """A label is already present in the session's label store."""

    def __init__(self, label: str, filename: str | None = None) -> None:
        super().__init__("label has already been stored in this session", label, filename)


class InsertionError(_RecordError):
    """The insertion callback failed for a record; the original error is the cause."""

    def __init__(self, label: str, filename: str, reason: str) -> None:
        super().__init__(f"insertion failed: {reason}", label, filename)


class AlreadyLoadedError(_RecordError):
    """StructLoader.load was called twice on the same loader."""

    def __init__(self, filename: str) -> None:
        super().__init__("the records have been loaded already", None, filename)


class NotLoadedError(_RecordError):
    """Records were requested before StructLoader.load was called."""

    def __init__(self, filename: str) -> None:
        super().__init__("no records have been loaded yet", None, filename)
