from __future__ import annotations

import pytest

from pathextraction import InvalidPathSpecification, SearchPath, parse_search_path
from pathextraction.core import Annotations, Field, Index, Wildcard


def test_parse_empty_path():
    parsed = parse_search_path("()")

    assert parsed.components == ()
    assert not parsed.annotations


def test_parse_field_index_and_wildcard():
    parsed = parse_search_path("  ( foo 0  * )  ")

    assert parsed.components == (Field("foo"), Index(0), Wildcard())


def test_parse_component_annotations():
    parsed = parse_search_path("(foo::bar a::b::*)")

    assert parsed.components == (
        Field("bar", Annotations(("foo",))),
        Wildcard(Annotations(("a", "b"))),
    )


def test_parse_anchor_annotations():
    parsed = parse_search_path("A::B::(foo)")

    assert parsed.annotations == Annotations(("A", "B"))
    assert parsed.components == (Field("foo"),)


def test_quoted_tokens_are_field_names():
    parsed = parse_search_path("('1' \"*\" 'a b' 'it\\'s')")

    assert parsed.components == (Field("1"), Field("*"), Field("a b"), Field("it's"))


def test_field_escape_annotation_yields_literal_star():
    parsed = parse_search_path("($ion_extractor_field::* x::$ion_extractor_field::*)")

    assert parsed.components == (Field("*"), Field("*", Annotations(("x",))))


def test_quoted_annotation():
    parsed = parse_search_path("('a b'::foo)")

    assert parsed.components == (Field("foo", Annotations(("a b",))),)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "foo",
        "(foo",
        "(foo))",
        "(foo) bar",
        "(-1)",
        "(a::)",
        "(foo:bar)",
        "(::foo)",
        "((foo))",
        "A::",
        "('unterminated)",
    ],
)
def test_parse_rejects_malformed_text(text: str):
    with pytest.raises(InvalidPathSpecification):
        parse_search_path(text)


def test_parse_rejects_non_string():
    with pytest.raises(InvalidPathSpecification):
        parse_search_path(None)  # type: ignore[arg-type]


def test_search_path_text_form_parses_back():
    search_path = SearchPath.of(
        [Field("a b"), Index(0), Wildcard(Annotations(("x",))), Field("*"), Field("7")],
        lambda cursor, context: 0,
        annotations=["top"],
    )

    parsed = parse_search_path(str(search_path))

    assert str(search_path) == "top::('a b' 0 x::* '*' '7')"
    assert parsed.components == search_path.components
    assert parsed.annotations == search_path.annotations
