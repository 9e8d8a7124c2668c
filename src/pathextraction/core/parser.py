"""Search path text parser.

Accepted shapes::

    ()                      zero-length path, matches the root
    (foo bar)               field names
    (foo 0 *)               index and wildcard
    (A::foo)                annotation requirement on a component
    A::(foo)                annotation requirement on the anchor value
    ('a b' "1" '*')         quoted tokens are always field names
    ($ion_extractor_field::*)  literal field named "*"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, NamedTuple

from ..errors import InvalidPathSpecification
from .components import FIELD_ESCAPE, Annotations, Field, Index, PathComponent, Wildcard

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<space>\s+)
    |(?P<open>\()
    |(?P<close>\))
    |(?P<sep>::)
    |(?P<quoted>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
    |(?P<bare>[^\s()'":]+)
    """,
    re.VERBOSE | re.DOTALL,
)
_INTEGER = re.compile(r"^-?\d+$")
_ESCAPE = re.compile(r"\\(.)", re.DOTALL)


class _Token(NamedTuple):
    kind: str
    text: str
    offset: int


class _Atom(NamedTuple):
    text: str
    quoted: bool


@dataclass(frozen=True, slots=True)
class ParsedSearchPath:
    """Structured form of a search path text."""

    annotations: Annotations
    components: tuple[PathComponent, ...]


def parse_search_path(text: str) -> ParsedSearchPath:
    """Parse search path text into anchor annotations and components."""
    if not isinstance(text, str):
        raise InvalidPathSpecification(
            f"Search path must be a string, got {type(text).__name__}"
        )

    tokens = list(_tokenize(text))
    cursor = 0

    anchor_annotations, cursor = _read_annotations(tokens, cursor, text)
    if cursor >= len(tokens) or tokens[cursor].kind != "open":
        raise InvalidPathSpecification("Search path must be a parenthesised list", text=text)
    cursor += 1

    components: list[PathComponent] = []
    while True:
        if cursor >= len(tokens):
            raise InvalidPathSpecification("Unterminated search path", text=text)
        if tokens[cursor].kind == "close":
            cursor += 1
            break
        annotations, cursor = _read_annotations(tokens, cursor, text)
        if cursor >= len(tokens) or tokens[cursor].kind not in ("quoted", "bare"):
            raise InvalidPathSpecification("Annotations must precede a path token", text=text)
        components.append(_to_component(_atom(tokens[cursor]), annotations, text))
        cursor += 1

    if cursor != len(tokens):
        raise InvalidPathSpecification(
            f"Unexpected content after search path at offset {tokens[cursor].offset}",
            text=text,
        )

    names = [atom.text for atom in anchor_annotations]
    return ParsedSearchPath(Annotations(tuple(names)), tuple(components))


def _tokenize(text: str) -> Iterator[_Token]:
    offset = 0
    while offset < len(text):
        match = _TOKEN_PATTERN.match(text, offset)
        if match is None:
            raise InvalidPathSpecification(
                f"Unexpected character {text[offset]!r} at offset {offset}", text=text
            )
        kind = match.lastgroup or ""
        if kind != "space":
            yield _Token(kind, match.group(), offset)
        offset = match.end()


def _read_annotations(
    tokens: list[_Token], cursor: int, text: str
) -> tuple[list[_Atom], int]:
    annotations: list[_Atom] = []
    while (
        cursor + 1 < len(tokens)
        and tokens[cursor].kind in ("quoted", "bare")
        and tokens[cursor + 1].kind == "sep"
    ):
        annotations.append(_atom(tokens[cursor]))
        cursor += 2
    if cursor < len(tokens) and tokens[cursor].kind == "sep":
        raise InvalidPathSpecification(
            f"Dangling '::' at offset {tokens[cursor].offset}", text=text
        )
    return annotations, cursor


def _atom(token: _Token) -> _Atom:
    if token.kind == "quoted":
        return _Atom(_ESCAPE.sub(r"\1", token.text[1:-1]), True)
    return _Atom(token.text, False)


def _to_component(atom: _Atom, annotations: list[_Atom], text: str) -> PathComponent:
    escaped = any(a.text == FIELD_ESCAPE and not a.quoted for a in annotations)
    required = Annotations(
        tuple(a.text for a in annotations if a.quoted or a.text != FIELD_ESCAPE)
    )

    if atom.quoted or escaped:
        return Field(atom.text, required)
    if atom.text == "*":
        return Wildcard(required)
    if _INTEGER.match(atom.text):
        position = int(atom.text)
        if position < 0:
            raise InvalidPathSpecification(
                f"Index must be non-negative, got {position}", text=text
            )
        return Index(position, required)
    return Field(atom.text, required)
