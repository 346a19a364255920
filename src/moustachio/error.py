"""Moustachio Exceptions

Custom exceptions raised while encoding data, compiling and rendering
templates.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


class MoustachioError(Exception):
    """Base exception for all moustachio errors."""

    pass


class UnsupportedValueTypeError(MoustachioError, TypeError):
    """Raised when the encoder meets a value it cannot represent."""

    def __init__(self, value_type: type):
        self.value_type = value_type
        super().__init__(f"unsupported type: {value_type.__name__}")


class InvalidTextError(MoustachioError):
    """Raised when bytes cannot be decoded as UTF-8 text."""

    def __init__(self, source: str = "value"):
        self.source = source
        super().__init__(f"invalid string: {source} is not valid UTF-8")


class MissingElementsError(MoustachioError):
    """Raised when the encoder stack holds no value where one is expected."""

    def __init__(self) -> None:
        super().__init__("no elements in value")


class KeyIsNotStringError(MoustachioError):
    """Raised when a mapping key does not encode to text."""

    def __init__(self, key: object):
        self.key = key
        super().__init__(f"key is not a string: {key!r}")


class IOFailureError(MoustachioError):
    """Raised when a template or partial file cannot be read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"cannot read {path}: {reason}")


class IncomparableValueError(MoustachioError, TypeError):
    """Raised when a callback value takes part in an equality comparison."""

    def __init__(self) -> None:
        super().__init__("cannot compare closures")


class TemplateStructureError(MoustachioError):
    """Base for structural errors in a template or its data graph."""

    pass


class UnbalancedSectionError(TemplateStructureError):
    """Raised when section open and close tags do not pair up."""

    def __init__(self, expected: Optional[Sequence[str]], found: Optional[Sequence[str]]):
        self.expected = expected
        self.found = found
        if found is None:
            msg = f"unclosed section: {_dotted(expected)}"
        elif expected is None:
            msg = f"unopened section: {_dotted(found)}"
        else:
            msg = f"unbalanced section: expected {_dotted(expected)}, found {_dotted(found)}"
        super().__init__(msg)


class InvalidDelimiterError(TemplateStructureError):
    """Raised when a set-delimiter tag is malformed."""

    def __init__(self, body: str):
        self.body = body
        super().__init__(f"invalid delimiter tag: {body!r}")


class ScopeError(TemplateStructureError):
    """Raised when a name lookup scans a context frame that is not a table."""

    def __init__(self, path: Sequence[str]):
        self.path = tuple(path)
        super().__init__(f"expected a table in context while resolving {_dotted(path)}")


class UnexpectedValueError(TemplateStructureError):
    """Raised when a section resolves to a value it cannot iterate or test."""

    def __init__(self, path: Sequence[str], value: object):
        self.path = tuple(path)
        self.value = value
        super().__init__(f"unexpected value for section {_dotted(path)}: {value!r}")


class RecursionLimitError(TemplateStructureError):
    """Raised when nesting exceeds the configured maximum depth."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"nesting exceeds maximum depth of {max_depth}")


def _dotted(path: Optional[Sequence[str]]) -> str:
    if not path:
        return "."
    return ".".join(path)
