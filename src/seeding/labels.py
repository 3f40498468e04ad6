"""Session-scoped store of label -> inserted record id."""
from __future__ import annotations

from typing import Iterator, Optional

from seeding.errors import DuplicateLabelError, UnresolvedReferenceError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def check_identifier(identifier: object) -> int:
    """Validate that `identifier` is a signed 64-bit integer and return it."""
    if isinstance(identifier, bool) or not isinstance(identifier, int):
        raise TypeError(f"record id must be an int, got {type(identifier).__name__}")
    if not INT64_MIN <= identifier <= INT64_MAX:
        raise ValueError(f"record id {identifier} is outside the signed 64-bit range")
    return identifier


class LabelStore:
    """Ordered, append-only mapping from record label to record id.

    A label is written once, right after its record was inserted, and never
    overwritten or removed. One store belongs to one seeding session.
    """

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}

    def add(self, label: str, identifier: int) -> None:
        if label in self._ids:
            raise DuplicateLabelError(label)
        self._ids[label] = check_identifier(identifier)

    def resolve(self, label: str) -> str:
        """Return the id stored for `label`, formatted for substitution."""
        try:
            return str(self._ids[label])
        except KeyError:
            raise UnresolvedReferenceError(label) from None

    def get(self, label: str, default: Optional[int] = None) -> Optional[int]:
        return self._ids.get(label, default)

    def items(self):
        return self._ids.items()

    def as_dict(self) -> dict[str, int]:
        return dict(self._ids)

    def __getitem__(self, label: str) -> int:
        return self._ids[label]

    def __contains__(self, label: object) -> bool:
        return label in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"LabelStore({self._ids!r})"
