"""Embedded tag scanning for fixture documents.

Tags are placeholders written inside scalar string values:

    ${{ REF(label) }}              id of a record inserted earlier in the session
    ${{ ENV(NAME) }}               environment variable, empty string when unset
    ${{ ENV(NAME:-default) }}      environment variable with a literal fallback

Scanning happens on the parsed YAML tree, never on raw text, so keys and
non-string scalars are left untouched. A tag may share a scalar with literal
text; each tag is replaced in place.
"""
from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from seeding.errors import MalformedTagError

logger = logging.getLogger(__name__)

TAG_OPEN = "${{"
TAG_CLOSE = "}}"


class TagKind(str, enum.Enum):
    REFERENCE = "REF"
    ENVIRONMENT = "ENV"


@dataclass(frozen=True)
class Tag:
    """A parsed placeholder. `default` is only meaningful for ENV tags."""

    kind: TagKind
    argument: str
    default: Optional[str] = None


@dataclass(frozen=True)
class LiteralText:
    text: str


@dataclass(frozen=True)
class TagToken:
    tag: Tag
    start: int
    end: int


Token = Union[LiteralText, TagToken]
Resolve = Callable[[Tag], str]


def _parse_reference(match: re.Match[str]) -> Tag:
    return Tag(TagKind.REFERENCE, match.group("label").strip())


def _parse_environment(match: re.Match[str]) -> Tag:
    return Tag(TagKind.ENVIRONMENT, match.group("name"), match.group("default"))


# Inner syntax of each tag form, matched against the trimmed text between
# `${{` and `}}`. New tag kinds are added here.
TAG_FORMS: list[tuple[re.Pattern[str], Callable[[re.Match[str]], Tag]]] = [
    (re.compile(r"REF\((?P<label>.*\S.*)\)", re.DOTALL), _parse_reference),
    (
        re.compile(r"ENV\(\s*(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?:\s*:-(?P<default>.*))?\s*\)", re.DOTALL),
        _parse_environment,
    ),
]


def parse_tag(inner: str, text: str = "", position: int = 0) -> Tag:
    """Parse the content between `${{` and `}}` into a Tag."""
    body = inner.strip()
    for pattern, build in TAG_FORMS:
        match = pattern.fullmatch(body)
        if match is not None:
            return build(match)
    raise MalformedTagError(text or inner, position, f"unrecognized tag syntax `{body}`")


def tokenize(text: str) -> list[Token]:
    """Split a scalar into literal runs and tags.

    Raises:
        MalformedTagError: a `${{` has no closing `}}` or an unknown form.
    """
    tokens: list[Token] = []
    index = 0
    while index < len(text):
        start = text.find(TAG_OPEN, index)
        if start < 0:
            tokens.append(LiteralText(text[index:]))
            break
        if start > index:
            tokens.append(LiteralText(text[index:start]))
        inner_start = start + len(TAG_OPEN)
        close = text.find(TAG_CLOSE, inner_start)
        if close < 0:
            raise MalformedTagError(text, start, "`${{` is not closed by `}}`")
        tag = parse_tag(text[inner_start:close], text, start)
        end = close + len(TAG_CLOSE)
        tokens.append(TagToken(tag, start, end))
        index = end
    return tokens


def find_tags(text: str) -> list[Tag]:
    return [token.tag for token in tokenize(text) if isinstance(token, TagToken)]


def render(text: str, resolve: Resolve) -> str:
    """Return `text` with every tag replaced by `resolve(tag)`."""
    if TAG_OPEN not in text:
        return text
    parts = []
    for token in tokenize(text):
        if isinstance(token, LiteralText):
            parts.append(token.text)
        else:
            replacement = resolve(token.tag)
            logger.debug("Resolved %s(%s) -> %r", token.tag.kind.value, token.tag.argument, replacement)
            parts.append(replacement)
    return "".join(parts)


def resolve_tree(node: Any, resolve: Resolve) -> Any:
    """Walk a generic YAML tree depth-first, rendering every string scalar.

    Dict keys are never scanned. Tuples (`!!omap` / `!!pairs` entries) are
    walked like sequences. Non-string scalars are returned as is.
    """
    if isinstance(node, str):
        return render(node, resolve)
    if isinstance(node, dict):
        return {key: resolve_tree(value, resolve) for key, value in node.items()}
    if isinstance(node, (list, tuple)):
        return type(node)(resolve_tree(item, resolve) for item in node)
    return node
