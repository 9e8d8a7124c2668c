from __future__ import annotations

import pytest

from pathextraction import (
    Annotated,
    ConfigurationError,
    ExtractorConfig,
    Field,
    InvalidPathSpecification,
    PathExtractorBuilder,
    TreeCursor,
    Wildcard,
)


def noop(cursor, context) -> int:
    return 0


def test_standard_builder_defaults():
    extractor = PathExtractorBuilder.standard().build()

    assert extractor.config == ExtractorConfig(
        match_relative_paths=False, match_case_insensitive=False
    )
    assert extractor.search_paths == ()


def test_builder_options_are_chainable():
    extractor = (
        PathExtractorBuilder.standard()
        .with_match_relative_paths(True)
        .with_match_case_insensitive(True)
        .with_search_path("(foo)", noop)
        .build()
    )

    assert extractor.config.match_relative_paths is True
    assert extractor.config.match_case_insensitive is True
    assert [str(sp) for sp in extractor.search_paths] == ["(foo)"]


def test_register_components_with_anchor_annotations():
    seen = []
    extractor = (
        PathExtractorBuilder.standard()
        .with_search_path(
            [Field("a"), Wildcard()],
            lambda cursor, context: seen.append(cursor.value()) or 0,
            ["doc"],
        )
        .build()
    )
    extractor.match(TreeCursor(Annotated({"a": [1, 2]}, ("doc",))))
    extractor.match(TreeCursor({"a": [3]}))

    assert seen == [1, 2]


@pytest.mark.parametrize("callback", [None, "not callable"])
def test_callback_must_be_callable(callback):
    builder = PathExtractorBuilder.standard()

    with pytest.raises(ConfigurationError):
        builder.with_search_path("(foo)", callback)


def test_search_path_cannot_be_none():
    with pytest.raises(ConfigurationError):
        PathExtractorBuilder.standard().with_search_path(None, noop)


def test_text_and_annotations_conflict():
    with pytest.raises(ConfigurationError):
        PathExtractorBuilder.standard().with_search_path("(foo)", noop, ["a"])


def test_annotations_must_be_a_list_of_strings():
    builder = PathExtractorBuilder.standard()

    with pytest.raises(ConfigurationError):
        builder.with_search_path([Field("a")], noop, "a")
    with pytest.raises(ConfigurationError):
        builder.with_search_path([Field("a")], noop, [1])


def test_invalid_path_is_not_registered():
    builder = PathExtractorBuilder.standard()

    with pytest.raises(InvalidPathSpecification):
        builder.with_search_path("(foo -1)", noop)
    with pytest.raises(InvalidPathSpecification):
        builder.with_search_path(["foo"], noop)

    assert builder.build().search_paths == ()


def test_built_extractor_is_not_affected_by_later_registrations():
    builder = PathExtractorBuilder.standard().with_search_path("(a)", noop)
    extractor = builder.build()

    builder.with_search_path("(b)", noop).with_match_relative_paths(True)

    assert len(extractor.search_paths) == 1
    assert extractor.config.match_relative_paths is False
    assert len(builder.build().search_paths) == 2
