"""Search path matching engine."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .components import Annotations, Field, Index, PathComponent, Wildcard, matches
from .extractor import Cursor, ExtractorConfig, PathExtractor
from .parser import ParsedSearchPath, parse_search_path
from .search_path import Callback, SearchPath

__all__ = [
    "Annotations",
    "Callback",
    "Cursor",
    "ExtractorConfig",
    "Field",
    "Index",
    "ParsedSearchPath",
    "PathComponent",
    "PathExtractor",
    "SearchPath",
    "Wildcard",
    "matches",
    "parse_search_path",
]
