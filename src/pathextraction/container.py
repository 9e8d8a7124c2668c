"""Dependency injection container for the extraction pipeline."""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters import JSONAdapter, JSONLinesAdapter, YAMLAdapter
from .builder import PathExtractorBuilder
from .pipeline import AdapterRegistry, ExtractionPipeline
from .schemas import load_config

DEFAULT_SETTINGS = {
    "extractor": {"match_relative_paths": False, "match_case_insensitive": False},
    "search_paths": [],
    "document_format": None,
}


def _configured_builder(
    match_relative_paths: bool = False,
    match_case_insensitive: bool = False,
) -> PathExtractorBuilder:
    return (
        PathExtractorBuilder.standard()
        .with_match_relative_paths(match_relative_paths)
        .with_match_case_insensitive(match_case_insensitive)
    )


class ExtractionContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration(default=DEFAULT_SETTINGS)

    json_adapter = providers.Singleton(JSONAdapter)
    jsonl_adapter = providers.Singleton(JSONLinesAdapter)
    yaml_adapter = providers.Singleton(YAMLAdapter)

    adapter_registry = providers.Singleton(
        AdapterRegistry,
        adapters=providers.List(json_adapter, jsonl_adapter, yaml_adapter),
    )

    builder = providers.Factory(
        _configured_builder,
        match_relative_paths=config.extractor.match_relative_paths,
        match_case_insensitive=config.extractor.match_case_insensitive,
    )

    pipeline = providers.Factory(
        ExtractionPipeline,
        builder_factory=builder.provider,
        registry=adapter_registry,
        search_paths=config.search_paths,
        default_format=config.document_format,
    )


def create_container(*, settings: dict | None = None) -> ExtractionContainer:
    """Instantiate container with optional overrides.

    ``settings`` follows the ``AppConfig`` schema and is validated first.
    """

    container = ExtractionContainer()

    if not settings:
        return container

    app_config = load_config(settings)
    container.config.from_dict(app_config.to_settings())
    return container
