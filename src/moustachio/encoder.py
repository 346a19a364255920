"""Encoder - converts ordinary Python data into the template value model.

Scalars become text (numbers through `str`), booleans stay booleans,
lists and tuples become lists, and mappings, dataclasses, msgspec structs and
pydantic models become tables keyed by their (text-encoded) keys. Anything
without a natural mustache form (None, enums, sets, callables, ...) is
rejected. Callbacks cannot be produced here; wrap functions in
`CallbackValue` (or use the builders) and they pass through untouched.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Tuple, Type, TypeVar

import msgspec
from msgspec import structs
from pydantic import BaseModel

from moustachio.data import (
    BoolValue,
    CallbackValue,
    ListValue,
    TableValue,
    TextValue,
    Value,
)
from moustachio.error import (
    InvalidTextError,
    KeyIsNotStringError,
    MissingElementsError,
    UnsupportedValueTypeError,
)

VALUE_TYPES = (TextValue, BoolValue, ListValue, TableValue, CallbackValue)

_V = TypeVar("_V", ListValue, TableValue)


class Encoder:
    """Depth-first visitor that builds values on an explicit stack."""

    def __init__(self) -> None:
        self.data: List[Value] = []

    def encode(self, obj: Any) -> None:
        """Encode `obj` and push the result onto the stack."""
        if isinstance(obj, VALUE_TYPES):
            self.data.append(obj)
        elif isinstance(obj, Enum):
            raise UnsupportedValueTypeError(type(obj))
        elif isinstance(obj, bool):
            self.data.append(BoolValue(obj))
        elif isinstance(obj, str):
            self.emit_str(obj)
        elif isinstance(obj, (int, float, Decimal)):
            self.emit_str(str(obj))
        elif isinstance(obj, (bytes, bytearray)):
            try:
                self.emit_str(bytes(obj).decode("utf-8"))
            except UnicodeDecodeError as e:
                raise InvalidTextError() from e
        elif isinstance(obj, Mapping):
            self.emit_map(obj.items())
        elif isinstance(obj, (list, tuple)):
            self.emit_seq(obj)
        elif isinstance(obj, msgspec.Struct):
            self.emit_map(structs.asdict(obj).items())
        elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            fields = dataclasses.fields(obj)
            self.emit_map((f.name, getattr(obj, f.name)) for f in fields)
        elif isinstance(obj, BaseModel):
            self.emit_map(dict(obj).items())
        else:
            raise UnsupportedValueTypeError(type(obj))

    def emit_str(self, value: str) -> None:
        self.data.append(TextValue(value))

    def emit_seq(self, items: Iterable[Any]) -> None:
        self.data.append(ListValue())
        for item in items:
            self.encode(item)
            value = self._pop()
            self._top(ListValue).items.append(value)

    def emit_map(self, items: Iterable[Tuple[Any, Any]]) -> None:
        self.data.append(TableValue())
        for key, item in items:
            self.encode(key)
            encoded_key = self._pop()
            if not isinstance(encoded_key, TextValue):
                raise KeyIsNotStringError(key)

            self.encode(item)
            value = self._pop()
            self._top(TableValue).entries[encoded_key.value] = value

    def _pop(self) -> Value:
        if not self.data:
            raise MissingElementsError()
        return self.data.pop()

    def _top(self, kind: Type[_V]) -> _V:
        if not self.data or not isinstance(self.data[-1], kind):
            raise MissingElementsError()
        return self.data[-1]


def encode(obj: Any) -> Value:
    """Encode a Python value into a template `Value`.

    Raises:
        UnsupportedValueTypeError: `obj` (or something inside it) has no mustache form.
        InvalidTextError: Bytes inside `obj` are not valid UTF-8.
        KeyIsNotStringError: A mapping key does not encode to text.
    """
    encoder = Encoder()
    encoder.encode(obj)
    if len(encoder.data) != 1:
        raise MissingElementsError()
    return encoder.data.pop()
