"""Single-pass search path extraction over tree-structured documents."""

from __future__ import annotations

__version__ = "0.1.0"

from .builder import PathExtractorBuilder
from .core import (
    Annotations,
    Cursor,
    ExtractorConfig,
    Field,
    Index,
    PathExtractor,
    SearchPath,
    Wildcard,
    parse_search_path,
)
from .errors import (
    ConfigurationError,
    DocumentLoadError,
    InvalidPathSpecification,
    PathExtractionError,
    ProtocolViolation,
)
from .tree import Annotated, Struct, TreeCursor

__all__ = [
    "Annotated",
    "Annotations",
    "ConfigurationError",
    "Cursor",
    "DocumentLoadError",
    "ExtractorConfig",
    "Field",
    "Index",
    "InvalidPathSpecification",
    "PathExtractionError",
    "PathExtractor",
    "PathExtractorBuilder",
    "ProtocolViolation",
    "SearchPath",
    "Struct",
    "TreeCursor",
    "Wildcard",
    "parse_search_path",
    "__version__",
]
