"""Tests for compiling and rendering whole templates."""

import io
from dataclasses import dataclass
from pathlib import Path

import msgspec
import pytest

from moustachio import (
    BoolValue,
    CallbackValue,
    Context,
    ListValue,
    TableValue,
    TextValue,
    UnsupportedValueTypeError,
    compile_iter,
    compile_str,
    render_str,
)

TEST_DATA = Path(__file__).parent / "test-data"


@dataclass
class Name:
    name: str


def render_data(template, data):
    wr = io.StringIO()
    template.render_data(wr, data)
    return wr.getvalue()


def test_render_texts():
    ctx = Name(name="world")

    assert compile_str("hello world").render_str(ctx) == "hello world"
    assert compile_str("hello {world").render_str(ctx) == "hello {world"
    assert compile_str("hello world}").render_str(ctx) == "hello world}"
    assert compile_str("hello {world}").render_str(ctx) == "hello {world}"
    assert compile_str("hello world}}").render_str(ctx) == "hello world}}"


def test_render_etags():
    assert compile_str("hello {{name}}").render_str(Name(name="world")) == "hello world"
    assert compile_str("hello {{name}}").render_str(Name(name="<b>")) == "hello &lt;b&gt;"


def test_render_utags():
    assert compile_str("hello {{{name}}}").render_str(Name(name="world")) == "hello world"
    assert compile_str("hello {{{name}}}").render_str(Name(name="<b>")) == "hello <b>"


def test_render_writes_to_sink():
    wr = io.StringIO()
    compile_str("hi {{name}}").render(wr, {"name": "there"})

    assert wr.getvalue() == "hi there"


def test_render_propagates_encoding_errors():
    template = compile_str("{{name}}")

    with pytest.raises(UnsupportedValueTypeError):
        template.render(io.StringIO(), {"name": None})


def test_render_sections():
    template = compile_str("0{{#a}}1 {{n}} 3{{/a}}5")

    assert render_data(template, TableValue()) == "05"
    assert render_data(template, TableValue({"a": BoolValue(False)})) == "05"
    assert render_data(template, TableValue({"a": ListValue()})) == "05"
    assert render_data(template, TableValue({"a": ListValue([TableValue()])})) == "01  35"

    item = TableValue({"n": TextValue("a")})
    assert render_data(template, TableValue({"a": ListValue([item])})) == "01 a 35"

    fun = CallbackValue(lambda text: "foo")
    assert render_data(template, TableValue({"a": fun})) == "0foo5"


def test_render_inverted_sections():
    template = compile_str("0{{^a}}1 3{{/a}}5")

    assert render_data(template, TableValue()) == "01 35"
    assert render_data(template, TableValue({"a": ListValue()})) == "01 35"
    assert render_data(template, TableValue({"a": ListValue([TableValue()])})) == "05"

    item = TableValue({"n": TextValue("a")})
    assert render_data(template, TableValue({"a": ListValue([item])})) == "05"


@pytest.mark.parametrize(
    "value",
    [
        None,
        BoolValue(True),
        BoolValue(False),
        ListValue(),
        ListValue([TableValue()]),
        TableValue(),
    ],
)
def test_section_and_inverted_section_are_complementary(value):
    entries = {} if value is None else {"p": value}
    data = TableValue(entries)

    shown = compile_str("{{#p}}X{{/p}}")
    hidden = compile_str("{{^p}}X{{/p}}")

    outputs = [render_data(shown, data), render_data(hidden, data)]
    assert sorted(outputs) == ["", "X"]


def test_render_partial():
    template = Context(template_path=TEST_DATA).compile_path("base")

    assert template.render_str({}) == "<h2>Names</h2>\n"
    assert template.render_str({"names": []}) == "<h2>Names</h2>\n"
    assert template.render_str({"names": [{}]}) == "<h2>Names</h2>\n  <strong></strong>\n"
    assert (
        template.render_str({"names": [{"name": "a"}]})
        == "<h2>Names</h2>\n  <strong>a</strong>\n"
    )
    assert (
        template.render_str({"names": [{"name": "a"}, {"name": "<b>"}]})
        == "<h2>Names</h2>\n  <strong>a</strong>\n  <strong>&lt;b&gt;</strong>\n"
    )


def test_standalone_section_adds_no_blank_lines():
    assert render_str("{{#a}}\n1\n{{/a}}\n", {"a": True}) == "1\n"


def test_render_is_idempotent():
    template = compile_str("{{#people}}{{name}} ({{age}})\n{{/people}}")
    data = {"people": [{"name": "Jane", "age": 41}, {"name": "Lewis", "age": 65}]}

    first = template.render_str(data)
    assert first == "Jane (41)\nLewis (65)\n"
    assert template.render_str(data) == first


def test_render_msgspec_struct():
    class Book(msgspec.Struct):
        title: str
        year: int

    template = compile_str("{{title}}, {{year}}")

    assert template.render_str(Book(title="Emma", year=1815)) == "Emma, 1815"


def test_compile_iter():
    template = compile_iter(iter("hello {{name}}"))

    assert template.render_str({"name": "world"}) == "hello world"


def test_lambda_counter_counts_every_invocation():
    calls = []

    def wrap(text):
        calls.append(text)
        return "[" + text + "]"

    template = compile_str("{{#w}}{{n}}{{/w}}|{{#w}}x{{/w}}")
    data = {"w": CallbackValue(wrap), "n": "1"}

    assert template.render_str(data) == "[1]|[x]"
    assert template.render_str(data) == "[1]|[x]"
    assert calls == ["{{n}}", "x", "{{n}}", "x"]
