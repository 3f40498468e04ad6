"""Fixture file reading and YAML parsing.

Fixture files are YAML documents whose top level is a mapping from record
label to record body. Local tags such as `!Family` mark sum-type variants and
are turned into plain nodes that pydantic can discriminate on:

    plan: !Standard                    ->  "Standard"
    plan: !Family {shared_membership: 4}
                                       ->  {"kind": "Family", "shared_membership": 4}
    plan: !Trial 30                    ->  {"kind": "Trial", "value": 30}
    plan: !Bundle [a, b]               ->  {"kind": "Bundle", "items": ["a", "b"]}
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from seeding import settings
from seeding.errors import FixtureNotFoundError, FixtureParseError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FixtureLoader(yaml.SafeLoader):
    """SafeLoader that understands `!Variant` annotations."""


def _construct_variant(loader: FixtureLoader, suffix: str, node: yaml.Node) -> Any:
    if isinstance(node, yaml.MappingNode):
        body = loader.construct_mapping(node, deep=True)
        return {settings.VARIANT_KEY: suffix, **body}
    if isinstance(node, yaml.SequenceNode):
        return {settings.VARIANT_KEY: suffix, "items": loader.construct_sequence(node, deep=True)}
    if node.value == "":
        return suffix
    # Re-resolve the untagged scalar so `!Trial 30` keeps 30 as an int.
    plain = node.style is None
    implicit = loader.resolve(yaml.ScalarNode, node.value, (plain, not plain))
    value = loader.construct_object(yaml.ScalarNode(implicit, node.value, style=node.style), deep=True)
    return {settings.VARIANT_KEY: suffix, "value": value}


FixtureLoader.add_multi_constructor("!", _construct_variant)


def resolve_path(filename: PathLike, base_dir: Optional[PathLike] = None) -> Path:
    """Return the path of `filename` relative to `base_dir`.

    Absolute filenames are used as is. Without a base directory the
    configured default (SEEDING_FIXTURES_DIR or the cwd) applies.
    """
    base = Path(base_dir) if base_dir is not None else settings.default_base_dir()
    return base / filename


def parse_document(raw_text: str, filename: str) -> dict[str, Any]:
    """Parse YAML text into an ordered label -> node mapping."""
    try:
        document = yaml.load(raw_text, Loader=FixtureLoader)
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark
        line = mark.line + 1 if mark is not None else None
        column = mark.column + 1 if mark is not None else None
        raise FixtureParseError(filename, str(exc.problem or exc), line, column) from exc
    except yaml.YAMLError as exc:
        raise FixtureParseError(filename, str(exc)) from exc

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise FixtureParseError(
            filename,
            f"top level must be a mapping of labels to records, got {type(document).__name__}",
        )
    return {str(label): node for label, node in document.items()}


def read_document(filename: PathLike, base_dir: Optional[PathLike] = None) -> dict[str, Any]:
    """Read and parse one fixture file."""
    path = resolve_path(filename, base_dir)
    try:
        raw_text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FixtureNotFoundError(path) from exc
    except (IsADirectoryError, PermissionError) as exc:
        raise FixtureNotFoundError(path, exc.strerror) from exc

    logger.debug("Read fixture %s (%d bytes)", path, len(raw_text))
    return parse_document(raw_text, str(filename))
