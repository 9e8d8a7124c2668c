"""Single-pass search path evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, NamedTuple, Protocol, Sequence, runtime_checkable

import structlog

from ..errors import ProtocolViolation
from .components import Position, matches
from .search_path import SearchPath

_logger = structlog.get_logger(__name__)


@runtime_checkable
class Cursor(Protocol):
    """Forward-only traversal handle over a tree document.

    ``next`` moves to the following sibling (or to the first child right
    after ``step_in``) and returns False once the container is exhausted.
    Cursors may also provide ``ordinal()``, the index of the current value
    among its siblings, so that skips over repeated field names are caught.
    """

    def depth(self) -> int:
        """Number of containers the cursor is currently inside."""

    def position(self) -> Position | None:
        """Field name or ordinal of the current value, None at the top level."""

    def annotations(self) -> Sequence[str]:
        """Annotations carried by the current value."""

    def is_container(self) -> bool:
        """True when the current value can be stepped into."""

    def step_in(self) -> None:
        """Enter the current container, before its first child."""

    def step_out(self) -> None:
        """Leave the current container, skipping its remaining children."""

    def next(self) -> bool:
        """Advance to the next sibling."""


@dataclass(frozen=True, slots=True)
class ExtractorConfig:
    """Matching options shared by every evaluation of an extractor."""

    match_relative_paths: bool = False
    match_case_insensitive: bool = False


class _Candidate(NamedTuple):
    order: int
    path: SearchPath
    matched: int

    def advance(self) -> "_Candidate":
        return _Candidate(self.order, self.path, self.matched + 1)


class PathExtractor:
    """Evaluates registered search paths against one traversal at a time.

    Instances are immutable and may be shared between threads as long as
    each evaluation uses its own cursor.
    """

    def __init__(
        self,
        search_paths: Iterable[SearchPath],
        config: ExtractorConfig | None = None,
    ) -> None:
        self._search_paths = tuple(search_paths)
        self._config = config or ExtractorConfig()
        indexed = list(enumerate(self._search_paths))
        self._root_paths = tuple(sp for _, sp in indexed if sp.length == 0)
        self._seeds = tuple(
            _Candidate(order, sp, 0) for order, sp in indexed if sp.length > 0
        )
        # Re-seeded paths may start matching in any nested container.
        self._descend_always = self._config.match_relative_paths and bool(self._seeds)

    @property
    def config(self) -> ExtractorConfig:
        return self._config

    @property
    def search_paths(self) -> tuple[SearchPath, ...]:
        return self._search_paths

    def match(self, cursor: Cursor, context: Any = None) -> None:
        """Run every registered search path over the value under ``cursor``.

        Callbacks receive ``(cursor, context)`` and return a step-out count.
        """
        initial_depth = cursor.depth()
        if initial_depth != 0 and not self._config.match_relative_paths:
            raise ProtocolViolation(
                f"Cursor must be at depth zero, it was at depth {initial_depth}"
            )

        annotations = tuple(cursor.annotations())
        for search_path in self._root_paths:
            if self._anchor_matches(search_path, annotations):
                self._invoke_callback(cursor, search_path, context, initial_depth)

        if not cursor.is_container():
            return

        candidates = self._seed(annotations)
        if not candidates and not self._descend_always:
            return

        cursor.step_in()
        self._match_recursive(cursor, candidates, context, initial_depth)
        cursor.step_out()

    def _match_recursive(
        self,
        cursor: Cursor,
        candidates: list[_Candidate],
        context: Any,
        initial_depth: int,
    ) -> int:
        case_insensitive = self._config.match_case_insensitive
        while cursor.next():
            position = cursor.position()
            annotations = tuple(cursor.annotations())

            step_out = 0
            partial_matches: list[_Candidate] = []
            for candidate in candidates:
                component = candidate.path.components[candidate.matched]
                if not matches(component, position, annotations, case_insensitive):
                    continue
                if candidate.path.is_terminal(candidate.matched):
                    step_out = max(
                        step_out,
                        self._invoke_callback(cursor, candidate.path, context, initial_depth),
                    )
                else:
                    partial_matches.append(candidate.advance())

            if step_out > 0:
                _logger.debug(
                    "extractor.step_out",
                    depth=cursor.depth() - initial_depth,
                    position=position,
                    remaining=step_out - 1,
                )
                return step_out - 1

            if not cursor.is_container():
                continue

            if self._config.match_relative_paths:
                partial_matches = self._merge(partial_matches, self._seed(annotations))
            if not partial_matches and not self._descend_always:
                continue

            cursor.step_in()
            step_out = self._match_recursive(cursor, partial_matches, context, initial_depth)
            cursor.step_out()
            if step_out > 0:
                return step_out - 1

        return 0

    def _seed(self, annotations: Sequence[str]) -> list[_Candidate]:
        return [c for c in self._seeds if self._anchor_matches(c.path, annotations)]

    def _anchor_matches(self, search_path: SearchPath, annotations: Sequence[str]) -> bool:
        return search_path.annotations.match(annotations, self._config.match_case_insensitive)

    @staticmethod
    def _merge(carried: list[_Candidate], seeded: list[_Candidate]) -> list[_Candidate]:
        if not seeded:
            return carried
        if not carried:
            return seeded
        return sorted(carried + seeded, key=lambda candidate: candidate.order)

    @staticmethod
    def _invoke_callback(
        cursor: Cursor,
        search_path: SearchPath,
        context: Any,
        initial_depth: int,
    ) -> int:
        depth = cursor.depth()
        position = cursor.position()
        ordinal = _ordinal(cursor)

        step_out = search_path.callback(cursor, context)

        if cursor.depth() != depth:
            _logger.warning(
                "extractor.protocol_violation",
                search_path=str(search_path),
                reason="depth_changed",
            )
            raise ProtocolViolation(
                "Cursor must be at the same depth when returning from a callback. "
                f"initial: {depth}, new: {cursor.depth()}"
            )
        if cursor.position() != position or _ordinal(cursor) != ordinal:
            _logger.warning(
                "extractor.protocol_violation",
                search_path=str(search_path),
                reason="cursor_advanced",
            )
            raise ProtocolViolation(
                f"Callback advanced the cursor past the matched value at {position!r}"
            )

        relative_depth = depth - initial_depth
        if isinstance(step_out, bool) or not isinstance(step_out, int):
            raise ProtocolViolation(
                f"Callback for {search_path} must return an int, got {type(step_out).__name__}"
            )
        if step_out < 0 or step_out > relative_depth:
            raise ProtocolViolation(
                "Callback return must be between zero and the cursor relative depth. "
                f"return: {step_out}, relative depth: {relative_depth}"
            )
        return step_out


def _ordinal(cursor: Cursor) -> int | None:
    """Sibling ordinal of the current value, when the cursor exposes one."""
    ordinal = getattr(cursor, "ordinal", None)
    return ordinal() if callable(ordinal) else None
