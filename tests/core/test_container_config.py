from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pathextraction.container import create_container
from pathextraction.pipeline import ExtractionPipeline


def test_create_container_defaults():
    container = create_container()

    builder = container.builder()
    extractor = builder.build()

    assert extractor.config.match_relative_paths is False
    assert extractor.config.match_case_insensitive is False
    assert container.adapter_registry().formats() == ["json", "jsonl", "yaml"]
    assert isinstance(container.pipeline(), ExtractionPipeline)


def test_create_container_with_overrides(tmp_path: Path):
    container = create_container(
        settings={
            "extractor": {"match_relative_paths": True, "match_case_insensitive": True},
            "search_paths": ["(BAR)"],
        }
    )

    extractor = container.builder().build()
    assert extractor.config.match_relative_paths is True
    assert extractor.config.match_case_insensitive is True

    documents = tmp_path / "doc.json"
    documents.write_text('{"foo": {"bar": 1}}', encoding="utf-8")
    results = container.pipeline().run(documents_path=documents)

    assert [record["value"] for record in results] == [1]


def test_builders_are_independent_per_call():
    container = create_container()

    first = container.builder().with_search_path("(a)", lambda cursor, context: 0)
    second = container.builder()

    assert first is not second
    assert second.build().search_paths == ()


def test_create_container_validates_settings():
    with pytest.raises(ValidationError):
        create_container(settings={"extractor": {"unknown": True}})
