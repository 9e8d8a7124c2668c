"""In-memory annotated tree and a cursor over it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .errors import ProtocolViolation


class Struct(list):
    """Ordered ``(name, value)`` pairs; field names may repeat."""

    def __init__(self, pairs: Iterable[tuple[str, Any]] = ()):
        super().__init__((str(name), value) for name, value in pairs)

    def get_all(self, name: str) -> list[Any]:
        return [value for key, value in self if key == name]

    def __repr__(self) -> str:
        return f"Struct({list.__repr__(self)})"


@dataclass(frozen=True, slots=True)
class Annotated:
    """A value tagged with annotations."""

    value: Any
    annotations: tuple[str, ...] = field(default_factory=tuple)


def unwrap(node: Any) -> tuple[Any, tuple[str, ...]]:
    """Split a node into its bare value and annotations."""
    annotations: list[str] = []
    while isinstance(node, Annotated):
        annotations.extend(node.annotations)
        node = node.value
    return node, tuple(annotations)


def is_container(value: Any) -> bool:
    return isinstance(value, (Struct, Mapping, list, tuple))


def children(value: Any) -> list[tuple[str | int, Any]]:
    if isinstance(value, Struct):
        return list(value)
    if isinstance(value, Mapping):
        return [(str(key), item) for key, item in value.items()]
    if isinstance(value, (list, tuple)):
        return list(enumerate(value))
    raise TypeError(f"{type(value).__name__} is not a container")


def to_python(node: Any) -> Any:
    """Materialise a node as plain Python data.

    Annotations are dropped; repeated struct fields keep the last value.
    """
    value, _ = unwrap(node)
    if isinstance(value, (Struct, Mapping)):
        return {str(key): to_python(item) for key, item in children(value)}
    if isinstance(value, (list, tuple)):
        return [to_python(item) for item in value]
    return value


@dataclass(slots=True)
class _Frame:
    entries: list[tuple[str | int | None, Any]]
    index: int = -1


class TreeCursor:
    """Cursor over a tree built from ``Struct``, mappings, sequences and scalars.

    The cursor starts positioned on ``root`` at depth zero.
    """

    def __init__(self, root: Any):
        self._frames: list[_Frame] = [_Frame([(None, root)], 0)]

    def depth(self) -> int:
        return len(self._frames) - 1

    def position(self) -> str | int | None:
        entry = self._current_entry()
        return entry[0] if entry is not None else None

    def ordinal(self) -> int:
        """Index of the current value among its siblings."""
        return self._frames[-1].index

    def annotations(self) -> tuple[str, ...]:
        entry = self._current_entry()
        if entry is None:
            return ()
        return unwrap(entry[1])[1]

    def is_container(self) -> bool:
        entry = self._current_entry()
        return entry is not None and is_container(unwrap(entry[1])[0])

    def value(self) -> Any:
        """Plain Python value of the current node."""
        entry = self._current_entry()
        if entry is None:
            raise ProtocolViolation("Cursor is not positioned on a value")
        return to_python(entry[1])

    def location(self) -> list[str | int]:
        """Positions leading from the root to the current value."""
        path: list[str | int] = []
        for frame in self._frames[1:]:
            if 0 <= frame.index < len(frame.entries):
                path.append(frame.entries[frame.index][0])
        return path

    def step_in(self) -> None:
        entry = self._current_entry()
        if entry is None:
            raise ProtocolViolation("Cannot step in: cursor is not positioned on a value")
        value, _ = unwrap(entry[1])
        if not is_container(value):
            raise ProtocolViolation(f"Cannot step into a {type(value).__name__} value")
        self._frames.append(_Frame(children(value)))

    def step_out(self) -> None:
        if len(self._frames) == 1:
            raise ProtocolViolation("Cannot step out at depth zero")
        self._frames.pop()

    def next(self) -> bool:
        frame = self._frames[-1]
        if frame.index < len(frame.entries):
            frame.index += 1
        return frame.index < len(frame.entries)

    def _current_entry(self) -> tuple[str | int | None, Any] | None:
        frame = self._frames[-1]
        if 0 <= frame.index < len(frame.entries):
            return frame.entries[frame.index]
        return None
