from dataclasses import dataclass
from typing import Tuple, Union

Path = Tuple[str, ...]

DEFAULT_OTAG = "{{"
DEFAULT_CTAG = "}}"


@dataclass(frozen=True)
class Text:
    """A literal chunk of template text."""

    value: str


@dataclass(frozen=True)
class Variable:
    """An interpolation tag. `escape` is False for `{{{x}}}` and `{{&x}}`."""

    path: Path
    escape: bool = True


@dataclass(frozen=True)
class Section:
    """A `{{#x}}` or `{{^x}}` block.

    `src` is the untouched template text between the open and close tags and
    `otag`/`ctag` are the delimiters in force at the open tag; lambdas bound
    to the section receive `src` and their output is parsed with those
    delimiters.
    """

    path: Path
    inverted: bool
    children: Tuple["Token", ...]
    otag: str = DEFAULT_OTAG
    ctag: str = DEFAULT_CTAG
    src: str = ""


@dataclass(frozen=True)
class Partial:
    """A `{{>name}}` tag with the indentation of its standalone line."""

    name: str
    indent: str = ""


Token = Union[Text, Variable, Section, Partial]
