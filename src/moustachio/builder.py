"""Fluent builders for assembling value graphs by hand.

    data = (
        MapBuilder()
        .insert_str("name", "Jane Austen")
        .insert("age", 41)
        .insert_vec("works", lambda b: b.push_str("Emma").push_str("Persuasion"))
        .insert_fn("shout", lambda text: text.upper())
        .build()
    )
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List

from moustachio.data import (
    BoolValue,
    CallbackValue,
    ListValue,
    TableValue,
    TextValue,
    Value,
)
from moustachio.encoder import encode


class MapBuilder:
    """Builds a `TableValue`."""

    def __init__(self) -> None:
        self.data: Dict[str, Value] = {}

    def insert(self, key: str, value: Any) -> "MapBuilder":
        """Encode and add any supported Python value.

        Raises:
            UnsupportedValueTypeError: `value` cannot be encoded.
        """
        self.data[key] = encode(value)
        return self

    def insert_str(self, key: str, value: str) -> "MapBuilder":
        self.data[key] = TextValue(value)
        return self

    def insert_bool(self, key: str, value: bool) -> "MapBuilder":
        self.data[key] = BoolValue(value)
        return self

    def insert_vec(
        self, key: str, f: Callable[["VecBuilder"], "VecBuilder"]
    ) -> "MapBuilder":
        """Add a list built by `f` from a fresh `VecBuilder`."""
        self.data[key] = f(VecBuilder()).build()
        return self

    def insert_map(
        self, key: str, f: Callable[["MapBuilder"], "MapBuilder"]
    ) -> "MapBuilder":
        """Add a table built by `f` from a fresh `MapBuilder`."""
        self.data[key] = f(MapBuilder()).build()
        return self

    def insert_fn(self, key: str, f: Callable[[str], str]) -> "MapBuilder":
        """Add a lambda. `f` may keep state across calls."""
        self.data[key] = CallbackValue(f)
        return self

    def build(self) -> TableValue:
        return TableValue(dict(self.data))


class VecBuilder:
    """Builds a `ListValue`."""

    def __init__(self) -> None:
        self.data: List[Value] = []

    def push(self, value: Any) -> "VecBuilder":
        """Encode and append any supported Python value.

        Raises:
            UnsupportedValueTypeError: `value` cannot be encoded.
        """
        self.data.append(encode(value))
        return self

    def push_str(self, value: str) -> "VecBuilder":
        self.data.append(TextValue(value))
        return self

    def push_bool(self, value: bool) -> "VecBuilder":
        self.data.append(BoolValue(value))
        return self

    def push_vec(self, f: Callable[["VecBuilder"], "VecBuilder"]) -> "VecBuilder":
        self.data.append(f(VecBuilder()).build())
        return self

    def push_map(self, f: Callable[["MapBuilder"], "MapBuilder"]) -> "VecBuilder":
        self.data.append(f(MapBuilder()).build())
        return self

    def push_fn(self, f: Callable[[str], str]) -> "VecBuilder":
        self.data.append(CallbackValue(f))
        return self

    def build(self) -> ListValue:
        return ListValue(list(self.data))
