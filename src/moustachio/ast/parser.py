"""Parser - turns mustache template text into a token tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from moustachio.ast.spec import (
    DEFAULT_CTAG,
    DEFAULT_OTAG,
    Partial,
    Path,
    Section,
    Text,
    Token,
    Variable,
)
from moustachio.error import (
    InvalidDelimiterError,
    RecursionLimitError,
    UnbalancedSectionError,
)

log = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100

# Sigils whose tags may stand alone on a line and get trimmed.
STANDALONE_SIGILS = frozenset("#^/!>=")
UNESCAPED_SIGILS = frozenset("{&")
_PLAIN_SIGILS = frozenset("&#^/!>")
_INLINE_WHITESPACE = " \t"


@dataclass
class ParseResult:
    """Token tree plus the partial names it references, in first-seen order."""

    tokens: Tuple[Token, ...]
    partials: List[str] = field(default_factory=list)


@dataclass
class _Frame:
    """An open section waiting for its close tag."""

    path: Path
    inverted: bool
    otag: str
    ctag: str
    src_start: int
    tokens: List[Token] = field(default_factory=list)


def parse_path(body: str) -> Path:
    """Split a tag body into a dotted path. A lone `.` is the current scope."""
    body = body.strip()
    if body == ".":
        return ()
    return tuple(body.split("."))


class Parser:
    """Tokenizes a template and resolves section nesting.

    Comments and delimiter changes are consumed here and never reach the
    token tree. Standalone section, partial, comment and delimiter tags take
    their whole line (indentation and newline included) with them.
    """

    def __init__(
        self,
        source: str,
        otag: str = DEFAULT_OTAG,
        ctag: str = DEFAULT_CTAG,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        """Initialize the parser.

        Args:
            source: Template text.
            otag: Opening delimiter in force at the start of `source`.
            ctag: Closing delimiter in force at the start of `source`.
            max_depth: Deepest section nesting accepted.
        """
        self.source = source
        self.otag = otag
        self.ctag = ctag
        self.max_depth = max_depth

    def parse(self) -> ParseResult:
        """Parse the whole source.

        Returns:
            ParseResult with the top-level tokens and referenced partial names.

        Raises:
            UnbalancedSectionError: A close tag does not match the innermost
                open section, has no open section, or a section is left open.
            InvalidDelimiterError: A set-delimiter tag is malformed.
            RecursionLimitError: Sections nest deeper than `max_depth`.
        """
        src = self.source
        otag, ctag = self.otag, self.ctag
        root: List[Token] = []
        stack: List[_Frame] = []
        partials: List[str] = []
        pos = 0

        while True:
            start = src.find(otag, pos)
            if start == -1:
                self._add_text(stack, root, src[pos:])
                break

            tag = self._read_tag(src, start, otag, ctag)
            if tag is None:
                log.debug("Unterminated tag at offset %d kept as text", start)
                self._add_text(stack, root, src[pos:])
                break
            sigil, body, end = tag

            bounds = None
            if sigil in STANDALONE_SIGILS:
                bounds = self._standalone_bounds(src, start, end)

            if bounds is None:
                line_start, next_pos = start, end
            else:
                line_start, next_pos = bounds

            self._add_text(stack, root, src[pos:line_start])
            pos = next_pos

            if sigil == "!":
                continue

            if sigil == "=":
                otag, ctag = self._parse_delimiters(body)
                continue

            if sigil in ("#", "^"):
                if len(stack) >= self.max_depth:
                    raise RecursionLimitError(self.max_depth)
                stack.append(
                    _Frame(
                        path=parse_path(body),
                        inverted=sigil == "^",
                        otag=otag,
                        ctag=ctag,
                        src_start=end,
                    )
                )
                continue

            if sigil == "/":
                path = parse_path(body)
                if not stack:
                    raise UnbalancedSectionError(None, path)
                frame = stack.pop()
                if frame.path != path:
                    raise UnbalancedSectionError(frame.path, path)
                section = Section(
                    path=frame.path,
                    inverted=frame.inverted,
                    children=tuple(frame.tokens),
                    otag=frame.otag,
                    ctag=frame.ctag,
                    src=src[frame.src_start:start],
                )
                self._current(stack, root).append(section)
                continue

            if sigil == ">":
                name = body.strip()
                if name not in partials:
                    partials.append(name)
                indent = src[line_start:start] if bounds is not None else ""
                self._current(stack, root).append(Partial(name=name, indent=indent))
                continue

            escape = sigil not in UNESCAPED_SIGILS
            self._current(stack, root).append(
                Variable(path=parse_path(body), escape=escape)
            )

        if stack:
            raise UnbalancedSectionError(stack[-1].path, None)

        log.debug(
            "Parsed %d top-level tokens, %d partial references",
            len(root),
            len(partials),
        )
        return ParseResult(tokens=tuple(root), partials=partials)

    @staticmethod
    def _current(stack: List[_Frame], root: List[Token]) -> List[Token]:
        return stack[-1].tokens if stack else root

    @staticmethod
    def _add_text(stack: List[_Frame], root: List[Token], value: str) -> None:
        if value:
            Parser._current(stack, root).append(Text(value))

    @staticmethod
    def _read_tag(
        src: str, start: int, otag: str, ctag: str
    ) -> Optional[Tuple[str, str, int]]:
        """Read the tag opening at `start`.

        Returns:
            (sigil, body, end offset) or None when the tag is never closed.
            `sigil` is "" for a plain escaped variable.
        """
        inner = start + len(otag)
        sigil = src[inner : inner + 1]

        if sigil == "{":
            closer = "}" + ctag
            inner += 1
        elif sigil == "=":
            closer = "=" + ctag
            inner += 1
        elif sigil in _PLAIN_SIGILS:
            closer = ctag
            inner += 1
        else:
            sigil = ""
            closer = ctag

        close = src.find(closer, inner)
        if close == -1:
            return None
        return sigil, src[inner:close], close + len(closer)

    @staticmethod
    def _standalone_bounds(src: str, start: int, end: int) -> Optional[Tuple[int, int]]:
        """Check whether the tag spanning [start, end) is alone on its line.

        Returns:
            (line start, offset after the line ending) when standalone, else None.
        """
        line_start = start
        while line_start > 0 and src[line_start - 1] in _INLINE_WHITESPACE:
            line_start -= 1
        if line_start > 0 and src[line_start - 1] != "\n":
            return None

        size = len(src)
        line_end = end
        while line_end < size and src[line_end] in _INLINE_WHITESPACE:
            line_end += 1

        if line_end == size:
            return line_start, size
        if src.startswith("\r\n", line_end):
            return line_start, line_end + 2
        if src[line_end] == "\n":
            return line_start, line_end + 1
        return None

    @staticmethod
    def _parse_delimiters(body: str) -> Tuple[str, str]:
        parts = body.split()
        if len(parts) != 2 or any("=" in part for part in parts):
            raise InvalidDelimiterError(body)
        return parts[0], parts[1]
