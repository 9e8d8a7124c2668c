"""Extraction pipeline assembly and execution."""

from __future__ import annotations

import datetime
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, List, Sequence

import pendulum
import structlog

from . import __version__
from .adapters import DocumentAdapter, JSONAdapter, JSONLinesAdapter, YAMLAdapter
from .builder import PathExtractorBuilder
from .errors import ConfigurationError, DocumentLoadError
from .schemas import SearchPathSpec
from .tree import TreeCursor


class AdapterRegistry:
    """Registry mapping formats and file suffixes to document adapters."""

    def __init__(self, adapters: Iterable[DocumentAdapter]):
        self._adapters = {adapter.format: adapter for adapter in adapters}

    def get(self, fmt: str) -> DocumentAdapter:
        try:
            return self._adapters[fmt]
        except KeyError as exc:
            raise KeyError(f"Unsupported format: {fmt!r}") from exc

    def for_path(self, path: Path) -> DocumentAdapter:
        suffix = path.suffix.lower()
        for adapter in self._adapters.values():
            if suffix in adapter.suffixes:
                return adapter
        raise KeyError(f"No adapter for file suffix {suffix!r}")

    def formats(self) -> List[str]:
        return list(self._adapters.keys())


class DocumentLoader:
    """Load document roots through adapters."""

    def __init__(self, registry: AdapterRegistry):
        self._registry = registry

    def load(self, path: Path, fmt: str | None = None) -> tuple[str, list[Any]]:
        try:
            adapter = self._registry.get(fmt) if fmt else self._registry.for_path(path)
        except KeyError as exc:
            raise ConfigurationError(exc.args[0]) from exc
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DocumentLoadError(adapter.format, f"cannot read {path} ({exc})") from exc
        return adapter.format, adapter.load(text)


class OutputWriter:
    """Persist extraction results."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, default=_json_default),
            encoding="utf-8",
        )


@dataclass(slots=True)
class MatchRecord:
    """One callback invocation captured by the pipeline."""

    document: int
    search_path: str
    location: list[str | int]
    annotations: list[str]
    value: Any


@dataclass(slots=True)
class MatchCollector:
    """Accumulates matches for the document currently being evaluated."""

    records: list[MatchRecord] = field(default_factory=list)
    document: int = 0

    def callback_for(self, spec: SearchPathSpec) -> Callable[[TreeCursor, Any], int]:
        def _collect(cursor: TreeCursor, context: Any) -> int:
            self.records.append(
                MatchRecord(
                    document=self.document,
                    search_path=spec.path,
                    location=cursor.location(),
                    annotations=list(cursor.annotations()),
                    value=cursor.value(),
                )
            )
            return min(spec.step_out, cursor.depth())

        return _collect


class ExtractionPipeline:
    """Runs registered search paths over every document of a file."""

    def __init__(
        self,
        *,
        builder_factory: Callable[[], PathExtractorBuilder],
        registry: AdapterRegistry,
        loader: DocumentLoader | None = None,
        writer: OutputWriter | None = None,
        search_paths: Sequence[SearchPathSpec | dict] | None = None,
        default_format: str | None = None,
    ) -> None:
        self._builder_factory = builder_factory
        self._registry = registry
        self._loader = loader or DocumentLoader(registry)
        self._writer = writer or OutputWriter()
        self._search_paths = [_as_spec(spec) for spec in search_paths or []]
        self._default_format = default_format
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        documents_path: Path,
        output_path: Path | None = None,
        search_paths: Sequence[SearchPathSpec | str] = (),
        fmt: str | None = None,
    ) -> list[dict]:
        specs = self._search_paths + [_as_spec(spec) for spec in search_paths]
        if not specs:
            raise ConfigurationError("At least one search path is required")

        collector = MatchCollector()
        builder = self._builder_factory()
        for spec in specs:
            builder.with_search_path(spec.path, collector.callback_for(spec))
        extractor = builder.build()

        loaded_format, documents = self._loader.load(
            documents_path, fmt or self._default_format
        )
        for index, root in enumerate(documents):
            collector.document = index
            before = len(collector.records)
            extractor.match(TreeCursor(root))
            self._logger.info(
                "extraction.document",
                document=index,
                matches=len(collector.records) - before,
            )

        results = [asdict(record) for record in collector.records]
        metadata = {
            "documents_path": str(documents_path),
            "format": loaded_format,
            "document_count": len(documents),
            "match_count": len(results),
            "search_paths": [spec.path for spec in specs],
            "match_relative_paths": extractor.config.match_relative_paths,
            "match_case_insensitive": extractor.config.match_case_insensitive,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        self._logger.info(
            "extraction.completed",
            document_count=len(documents),
            match_count=len(results),
        )

        if output_path is not None:
            self._writer.write(output_path, {"metadata": metadata, "results": results})
        return results


def default_registry() -> AdapterRegistry:
    """Return the default adapter registry."""
    return AdapterRegistry(adapters=[JSONAdapter(), JSONLinesAdapter(), YAMLAdapter()])


def _as_spec(value: SearchPathSpec | dict | str) -> SearchPathSpec:
    if isinstance(value, SearchPathSpec):
        return value
    if isinstance(value, str):
        # Validated by the builder so malformed text surfaces as InvalidPathSpecification.
        return SearchPathSpec.model_construct(path=value)
    return SearchPathSpec.model_validate(value)


def _json_default(value):  # type: ignore[override]
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
