"""Document format adapters."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .json_adapter import JSONAdapter, JSONLinesAdapter
from .yaml_adapter import YAMLAdapter


@runtime_checkable
class DocumentAdapter(Protocol):
    """Format-specific document loader contract.

    Implementations turn raw text into one or more tree roots understood by
    ``TreeCursor``.
    """

    format: str
    suffixes: tuple[str, ...]

    def load(self, text: str) -> list[Any]:
        """Parse ``text`` and return the document roots it contains."""


__all__ = ["DocumentAdapter", "JSONAdapter", "JSONLinesAdapter", "YAMLAdapter"]
