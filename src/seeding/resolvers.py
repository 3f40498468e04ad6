"""Resolution of REF and ENV tags."""
from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, Union

from seeding.errors import UnresolvedReferenceError
from seeding.labels import LabelStore
from seeding.tags import Tag, TagKind

logger = logging.getLogger(__name__)

LabelSource = Union[LabelStore, Mapping[str, int]]


def resolve_environment(name: str, default: Optional[str] = None) -> str:
    """Return the value of environment variable `name`.

    An unset variable falls back to `default`, and to an empty string when no
    default is given. A variable explicitly set to "" stays "".
    """
    value = os.environ.get(name)
    if value is not None:
        return value
    if default is not None:
        logger.debug("Environment variable %s is not set, using default", name)
        return default
    logger.debug("Environment variable %s is not set and has no default", name)
    return ""


def resolve_reference(
    label: str,
    labels: Optional[LabelSource] = None,
    overrides: Optional[Mapping[str, int]] = None,
) -> str:
    """Return the id of the record stored under `label` as a string.

    `overrides` take precedence over `labels`.

    Raises:
        UnresolvedReferenceError: neither source knows `label`.
    """
    if overrides and label in overrides:
        return str(overrides[label])
    if isinstance(labels, LabelStore):
        return labels.resolve(label)
    if labels is not None and label in labels:
        return str(labels[label])
    raise UnresolvedReferenceError(label)


class TagResolver:
    """Callable resolving any Tag against one label source."""

    def __init__(
        self,
        labels: Optional[LabelSource] = None,
        overrides: Optional[Mapping[str, int]] = None,
    ) -> None:
        self.labels = labels
        self.overrides = dict(overrides or {})

    def __call__(self, tag: Tag) -> str:
        if tag.kind is TagKind.REFERENCE:
            return resolve_reference(tag.argument, self.labels, self.overrides)
        if tag.kind is TagKind.ENVIRONMENT:
            return resolve_environment(tag.argument, tag.default)
        raise ValueError(f"unsupported tag kind: {tag.kind!r}")
