"""Builder assembling search paths into an immutable extractor."""

from __future__ import annotations

from typing import Iterable, Sequence

from .core.components import Annotations
from .core.extractor import ExtractorConfig, PathExtractor
from .core.parser import parse_search_path
from .core.search_path import Callback, SearchPath
from .errors import ConfigurationError, InvalidPathSpecification

DEFAULT_MATCH_RELATIVE_PATHS = False
DEFAULT_MATCH_CASE_INSENSITIVE = False


class PathExtractorBuilder:
    """Collects search paths and options, then builds a ``PathExtractor``."""

    def __init__(self) -> None:
        self._search_paths: list[SearchPath] = []
        self._match_relative_paths = DEFAULT_MATCH_RELATIVE_PATHS
        self._match_case_insensitive = DEFAULT_MATCH_CASE_INSENSITIVE

    @classmethod
    def standard(cls) -> "PathExtractorBuilder":
        """Builder with default configuration."""
        return cls()

    def build(self) -> PathExtractor:
        """Create an extractor; later builder changes do not affect it."""
        config = ExtractorConfig(
            match_relative_paths=self._match_relative_paths,
            match_case_insensitive=self._match_case_insensitive,
        )
        return PathExtractor(tuple(self._search_paths), config)

    def with_match_relative_paths(self, match_relative_paths: bool) -> "PathExtractorBuilder":
        """When True, search paths may start matching in any container."""
        self._match_relative_paths = bool(match_relative_paths)
        return self

    def with_match_case_insensitive(self, match_case_insensitive: bool) -> "PathExtractorBuilder":
        """When True, field names and annotations are compared ignoring case."""
        self._match_case_insensitive = bool(match_case_insensitive)
        return self

    def with_search_path(
        self,
        search_path: str | Sequence,
        callback: Callback,
        annotations: Iterable[str] | None = None,
    ) -> "PathExtractorBuilder":
        """Register ``callback`` for a search path.

        ``search_path`` is either text such as ``"(foo bar)"`` or a sequence
        of path components. ``annotations`` applies to the anchor value and is
        only accepted with components; text carries its own (``A::(foo)``).

        The callback receives ``(cursor, context)`` positioned on the matched
        value and returns a step-out count between zero and the cursor's
        relative depth. It must leave the cursor on the matched value at the
        same depth.
        """
        if search_path is None:
            raise ConfigurationError("search_path cannot be None")
        if callback is None or not callable(callback):
            raise ConfigurationError("callback must be callable")

        if isinstance(search_path, str):
            if annotations is not None:
                raise ConfigurationError(
                    "annotations cannot be combined with search path text; "
                    "prefix the text instead, e.g. A::(foo)"
                )
            parsed = parse_search_path(search_path)
            self._search_paths.append(
                SearchPath(parsed.components, callback, parsed.annotations)
            )
            return self

        if isinstance(annotations, str):
            raise ConfigurationError("annotations must be a list of strings, not a string")
        try:
            anchor = Annotations.of(annotations)
        except InvalidPathSpecification as exc:
            raise ConfigurationError(str(exc)) from exc
        self._search_paths.append(SearchPath.of(search_path, callback, anchor))
        return self
