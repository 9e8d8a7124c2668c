"""Registered search path definition."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from ..errors import InvalidPathSpecification
from .components import Annotations, Field, Index, PathComponent, Wildcard, describe, render_annotations

Callback = Callable[[Any, Any], int]


@dataclass(frozen=True, slots=True)
class SearchPath:
    """Immutable sequence of components bound to a callback.

    ``annotations`` constrains the value the path is anchored at: the
    document root, or any entered container when relative matching is on.
    """

    components: tuple[PathComponent, ...]
    callback: Callback
    annotations: Annotations = field(default_factory=Annotations)

    def __post_init__(self) -> None:
        for component in self.components:
            if not isinstance(component, (Field, Index, Wildcard)):
                raise InvalidPathSpecification(
                    f"Unsupported path component {component!r}"
                )

    @classmethod
    def of(
        cls,
        components: Iterable[PathComponent],
        callback: Callback,
        annotations: Iterable[str] | Annotations | None = None,
    ) -> "SearchPath":
        if not isinstance(annotations, Annotations):
            annotations = Annotations.of(annotations)
        return cls(tuple(components), callback, annotations)

    @property
    def length(self) -> int:
        return len(self.components)

    def is_terminal(self, matched: int) -> bool:
        """True when the component at ``matched`` is the last one."""
        return matched == len(self.components) - 1

    def __str__(self) -> str:
        return render_annotations(self.annotations) + "(" + " ".join(describe(c) for c in self.components) + ")"
