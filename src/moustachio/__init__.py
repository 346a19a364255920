"""moustachio - a mustache template compiler and renderer."""

from pathlib import Path
from typing import Any, Union

from moustachio.builder import MapBuilder, VecBuilder
from moustachio.compiler.compiler import Source
from moustachio.context import Context
from moustachio.data import (
    BoolValue,
    CallbackValue,
    ListValue,
    TableValue,
    TextValue,
    Value,
)
from moustachio.encoder import Encoder, encode
from moustachio.error import (
    IncomparableValueError,
    InvalidDelimiterError,
    InvalidTextError,
    IOFailureError,
    KeyIsNotStringError,
    MissingElementsError,
    MoustachioError,
    RecursionLimitError,
    ScopeError,
    TemplateStructureError,
    UnbalancedSectionError,
    UnexpectedValueError,
    UnsupportedValueTypeError,
)
from moustachio.template import Template


def compile_iter(chars: Source) -> Template:
    """Compile a template from an iterable of characters."""
    return Context().compile(chars)


def compile_str(template: str) -> Template:
    """Compile a template from a string."""
    return Context().compile(template)


def compile_path(path: Union[str, Path]) -> Template:
    """Compile a template file, relative to the working directory."""
    return Context().compile_path(path)


def render_str(template: str, data: Any) -> str:
    """Compile and render in one step."""
    return compile_str(template).render_str(data)


__all__ = [
    "compile_iter",
    "compile_str",
    "compile_path",
    "render_str",
    "Context",
    "Template",
    "MapBuilder",
    "VecBuilder",
    "Encoder",
    "encode",
    "Value",
    "TextValue",
    "BoolValue",
    "ListValue",
    "TableValue",
    "CallbackValue",
    "MoustachioError",
    "UnsupportedValueTypeError",
    "InvalidTextError",
    "MissingElementsError",
    "KeyIsNotStringError",
    "IOFailureError",
    "IncomparableValueError",
    "TemplateStructureError",
    "UnbalancedSectionError",
    "InvalidDelimiterError",
    "ScopeError",
    "UnexpectedValueError",
    "RecursionLimitError",
]
