from __future__ import annotations

import pytest

from pathextraction import Annotated, ProtocolViolation, Struct, TreeCursor
from pathextraction.core import Cursor
from pathextraction.tree import to_python


def test_cursor_starts_on_root():
    cursor = TreeCursor(Annotated({"a": 1}, ("doc",)))

    assert isinstance(cursor, Cursor)
    assert cursor.depth() == 0
    assert cursor.position() is None
    assert cursor.annotations() == ("doc",)
    assert cursor.is_container()
    assert cursor.value() == {"a": 1}
    assert cursor.next() is False


def test_cursor_walks_struct_and_sequence_children():
    cursor = TreeCursor(Struct([("a", [10, Annotated(20, ("x",))]), ("a", 3)]))

    cursor.step_in()
    assert cursor.depth() == 1
    assert cursor.next()
    assert cursor.position() == "a"
    cursor.step_in()
    assert cursor.next() and cursor.position() == 0 and cursor.value() == 10
    assert cursor.next() and cursor.position() == 1 and cursor.annotations() == ("x",)
    assert cursor.location() == ["a", 1]
    assert cursor.next() is False
    cursor.step_out()
    assert cursor.position() == "a"
    assert cursor.ordinal() == 0
    assert cursor.next() and cursor.value() == 3
    assert cursor.ordinal() == 1
    assert cursor.next() is False
    assert cursor.next() is False


def test_step_out_skips_remaining_children():
    cursor = TreeCursor({"a": [1, 2, 3], "b": 4})
    cursor.step_in()
    cursor.next()
    cursor.step_in()
    cursor.next()
    cursor.step_out()

    assert cursor.next()
    assert cursor.position() == "b"


def test_cursor_misuse_raises_protocol_violation():
    cursor = TreeCursor({"a": 1})

    with pytest.raises(ProtocolViolation):
        cursor.step_out()

    cursor.step_in()
    with pytest.raises(ProtocolViolation):
        cursor.step_in()
    with pytest.raises(ProtocolViolation):
        cursor.value()

    cursor.next()
    with pytest.raises(ProtocolViolation):
        cursor.step_in()


def test_nested_annotations_are_flattened():
    cursor = TreeCursor(Annotated(Annotated([], ("inner",)), ("outer",)))

    assert cursor.annotations() == ("outer", "inner")
    assert cursor.is_container()


def test_to_python_drops_annotations_and_keeps_last_duplicate():
    node = Struct([("a", 1), ("a", Annotated(2, ("x",))), ("b", (Annotated("s", ()),))])

    assert to_python(node) == {"a": 2, "b": ["s"]}
    assert node.get_all("a") == [1, Annotated(2, ("x",))]
