"""Runtime value model - the data a template is rendered against."""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Union

from moustachio.error import IncomparableValueError


@dataclass
class TextValue:
    """A string, written verbatim (or escaped) by variable tags."""

    value: str


@dataclass
class BoolValue:
    """A boolean, used to toggle sections."""

    value: bool


@dataclass
class ListValue:
    """An ordered sequence; sections iterate over it."""

    items: List["Value"] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ListValue):
            return NotImplemented
        # No short-circuit: a callback anywhere in either list must raise.
        same = [a == b for a, b in zip(self.items, other.items)]
        return len(self.items) == len(other.items) and all(same)


@dataclass
class TableValue:
    """A keyed mapping; sections push it as a new name lookup scope."""

    entries: Dict[str, "Value"] = field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TableValue):
            return NotImplemented
        shared = self.entries.keys() & other.entries.keys()
        same = [self.entries[key] == other.entries[key] for key in shared]
        return self.entries.keys() == other.entries.keys() and all(same)


class CallbackValue:
    """A lambda: receives raw template text and returns template text.

    The wrapped function may keep state between calls (for instance a call
    counter). Callbacks cannot be compared: any equality check raises
    `IncomparableValueError`, including one reached through a containing
    list or table.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, func: Callable[[str], str]):
        self.func = func

    def __call__(self, text: str) -> str:
        return self.func(text)

    def __eq__(self, other: object) -> bool:
        raise IncomparableValueError()

    def __ne__(self, other: object) -> bool:
        raise IncomparableValueError()

    def __repr__(self) -> str:
        return "CallbackValue(...)"


Value = Union[TextValue, BoolValue, ListValue, TableValue, CallbackValue]
