"""Exception hierarchy for path extraction."""

from __future__ import annotations


class PathExtractionError(Exception):
    """Base class for every error raised by the package."""


class InvalidPathSpecification(PathExtractionError, ValueError):
    """Raised when search path text or components are malformed."""

    def __init__(self, message: str, *, text: str | None = None):
        super().__init__(message)
        self.text = text

    def __str__(self) -> str:
        message = super().__str__()
        if self.text is None:
            return message
        return f"{message}: {self.text!r}"


class ProtocolViolation(PathExtractionError, RuntimeError):
    """Raised when a callback or cursor breaks the traversal contract."""


class ConfigurationError(PathExtractionError, ValueError):
    """Raised when the extractor is assembled with missing or conflicting options."""


class DocumentLoadError(PathExtractionError, ValueError):
    """Raised when a document adapter cannot load its input."""

    def __init__(self, fmt: str, message: str):
        super().__init__(f"{fmt}: {message}")
        self.format = fmt
