"""Tests for the value model."""

import pytest

from moustachio import (
    BoolValue,
    CallbackValue,
    IncomparableValueError,
    ListValue,
    TableValue,
    TextValue,
)


def test_structural_equality():
    assert TextValue("a") == TextValue("a")
    assert TextValue("a") != TextValue("b")
    assert BoolValue(True) != BoolValue(False)
    assert ListValue([TextValue("a")]) == ListValue([TextValue("a")])
    assert ListValue() != TableValue()


def test_table_equality_ignores_insertion_order():
    first = TableValue({"a": TextValue("1"), "b": BoolValue(True)})
    second = TableValue({"b": BoolValue(True), "a": TextValue("1")})

    assert first == second


def test_callbacks_cannot_be_compared():
    a = CallbackValue(lambda text: text)
    b = CallbackValue(lambda text: text)

    with pytest.raises(IncomparableValueError):
        a == b

    with pytest.raises(IncomparableValueError):
        a != b


def test_callbacks_inside_containers_cannot_be_compared():
    first = ListValue([CallbackValue(lambda text: text)])
    second = ListValue([CallbackValue(lambda text: text)])

    with pytest.raises(IncomparableValueError):
        first == second

    with pytest.raises(IncomparableValueError):
        TableValue({"f": first.items[0]}) == TableValue({"f": second.items[0]})


def test_shared_callback_inside_containers_cannot_be_compared():
    callback = CallbackValue(lambda text: text)

    with pytest.raises(IncomparableValueError):
        ListValue([callback]) == ListValue([callback])

    with pytest.raises(IncomparableValueError):
        TableValue({"f": callback}) == TableValue({"f": callback})

    with pytest.raises(IncomparableValueError):
        ListValue([TextValue("a"), callback]) == ListValue([TextValue("b"), callback])


def test_container_equality_checks_shape():
    assert ListValue([TextValue("a")]) != ListValue([TextValue("a"), TextValue("b")])
    assert TableValue({"a": TextValue("1")}) != TableValue({"b": TextValue("1")})
    assert ListValue() != TableValue()


def test_callbacks_are_unhashable():
    with pytest.raises(TypeError):
        hash(CallbackValue(lambda text: text))


def test_callback_keeps_state():
    calls = []

    def record(text):
        calls.append(text)
        return str(len(calls))

    callback = CallbackValue(record)

    assert callback("a") == "1"
    assert callback("b") == "2"
    assert calls == ["a", "b"]
