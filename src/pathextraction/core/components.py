"""Path component matchers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Union

from ..errors import InvalidPathSpecification

Position = Union[str, int]

# Annotation that turns a following `*` into the literal field name "*".
FIELD_ESCAPE = "$ion_extractor_field"

_BARE_TOKEN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _fold(text: str, case_insensitive: bool) -> str:
    return text.casefold() if case_insensitive else text


@dataclass(frozen=True, slots=True)
class Annotations:
    """Set of annotations a value must carry."""

    required: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for annotation in self.required:
            if not isinstance(annotation, str):
                raise InvalidPathSpecification(
                    f"Annotations must be strings, got {type(annotation).__name__}"
                )

    @classmethod
    def of(cls, annotations: Iterable[str] | None) -> "Annotations":
        if annotations is None:
            return cls()
        if isinstance(annotations, str):
            return cls((annotations,))
        return cls(tuple(annotations))

    def __bool__(self) -> bool:
        return bool(self.required)

    def match(self, value_annotations: Iterable[str], case_insensitive: bool = False) -> bool:
        if not self.required:
            return True
        present = {_fold(a, case_insensitive) for a in value_annotations}
        return all(_fold(a, case_insensitive) in present for a in self.required)


@dataclass(frozen=True, slots=True)
class Field:
    """Matches a struct child by field name."""

    name: str
    annotations: Annotations = field(default_factory=Annotations)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise InvalidPathSpecification(
                f"Field name must be a string, got {type(self.name).__name__}"
            )


@dataclass(frozen=True, slots=True)
class Index:
    """Matches a sequence child by its 0-based ordinal."""

    position: int
    annotations: Annotations = field(default_factory=Annotations)

    def __post_init__(self) -> None:
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise InvalidPathSpecification(
                f"Index position must be an integer, got {type(self.position).__name__}"
            )
        if self.position < 0:
            raise InvalidPathSpecification(f"Index position must be non-negative, got {self.position}")


@dataclass(frozen=True, slots=True)
class Wildcard:
    """Matches any field name or index."""

    annotations: Annotations = field(default_factory=Annotations)


PathComponent = Union[Field, Index, Wildcard]


def matches(
    component: PathComponent,
    position: Position,
    annotations: Iterable[str],
    case_insensitive: bool = False,
) -> bool:
    """Return True when ``component`` accepts a child at ``position``.

    ``position`` is a field name for struct children and an ordinal for
    sequence children.
    """
    if isinstance(component, Field):
        if not isinstance(position, str):
            return False
        if _fold(component.name, case_insensitive) != _fold(position, case_insensitive):
            return False
    elif isinstance(component, Index):
        if isinstance(position, str) or position != component.position:
            return False
    elif not isinstance(component, Wildcard):
        raise TypeError(f"Unknown path component: {component!r}")

    return component.annotations.match(annotations, case_insensitive)


def describe(component: PathComponent) -> str:
    """Render a component in search path text form."""
    if isinstance(component, Field):
        token = component.name if _is_bare(component.name) else _quote(component.name)
    elif isinstance(component, Index):
        token = str(component.position)
    else:
        token = "*"
    return render_annotations(component.annotations) + token


def render_annotations(annotations: Annotations) -> str:
    return "".join(f"{a if _is_bare(a) else _quote(a)}::" for a in annotations.required)


def _is_bare(text: str) -> bool:
    return bool(_BARE_TOKEN.match(text)) and text != FIELD_ESCAPE


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"
