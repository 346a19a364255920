"""Renderer - walks compiled tokens against a value graph and writes text."""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, List, Optional, Sequence, TextIO

from moustachio.ast.parser import Parser
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
from moustachio.data import (
    BoolValue,
    CallbackValue,
    ListValue,
    TableValue,
    TextValue,
    Value,
)
from moustachio.error import RecursionLimitError, ScopeError, UnexpectedValueError

if TYPE_CHECKING:
    from moustachio.template import Template

log = logging.getLogger(__name__)

HTML_ESCAPES = str.maketrans(
    {
        "<": "&lt;",
        ">": "&gt;",
        "&": "&amp;",
        '"': "&quot;",
        "'": "&#39;",
    }
)


def escape_html(text: str) -> str:
    return text.translate(HTML_ESCAPES)


class Renderer:
    """Renders one template against one value graph.

    State lives only for a single render call: the current partial
    indentation, whether output sits at the start of a line, and the
    nesting depth. The scope stack is passed down explicitly and is only
    ever pushed and popped.
    """

    def __init__(self, template: "Template"):
        self.template = template
        self.max_depth = template.ctx.max_depth
        self.indent = ""
        self.line_start = True
        self.depth = 0

    def render(self, wr: TextIO, value: Value) -> None:
        """Render the template's tokens with `value` as the root scope.

        Args:
            wr: Any object with a `write(str)` method.
            value: Root of the value graph.
        """
        stack: List[Value] = [value]
        self._render(wr, stack, self.template.tokens)

    def _render(self, wr: TextIO, stack: List[Value], tokens: Sequence[Token]) -> None:
        for token in tokens:
            self._render_token(wr, stack, token)

    def _render_nested(
        self, wr: TextIO, stack: List[Value], tokens: Sequence[Token]
    ) -> None:
        if self.depth >= self.max_depth:
            raise RecursionLimitError(self.max_depth)
        self.depth += 1
        try:
            self._render(wr, stack, tokens)
        finally:
            self.depth -= 1

    def _render_token(self, wr: TextIO, stack: List[Value], token: Token) -> None:
        if isinstance(token, Text):
            self._render_text(wr, token.value)
        elif isinstance(token, Variable):
            if token.escape:
                self._render_etag(wr, stack, token.path)
            else:
                self._render_utag(wr, stack, token.path)
        elif isinstance(token, Section):
            if token.inverted:
                self._render_inverted_section(wr, stack, token)
            else:
                self._render_section(wr, stack, token)
        elif isinstance(token, Partial):
            self._render_partial(wr, stack, token)
        else:
            raise TypeError(f"unexpected token {token!r}")

    def _write(self, wr: TextIO, text: str) -> None:
        if text:
            wr.write(text)
            self.line_start = text.endswith("\n")

    def _render_text(self, wr: TextIO, value: str) -> None:
        if not self.indent:
            self._write(wr, value)
            return

        # Indent every line that starts fresh, but leave blank lines bare.
        pos = 0
        size = len(value)
        while pos < size:
            newline = value.find("\n", pos)
            end = size if newline == -1 else newline + 1
            line = value[pos:end]
            if self.line_start and line[0] != "\n":
                self._write(wr, self.indent)
            self._write(wr, line)
            pos = end

    def _render_etag(self, wr: TextIO, stack: List[Value], path: Path) -> None:
        buffer = io.StringIO()
        self._render_utag(buffer, stack, path)
        self._write(wr, escape_html(buffer.getvalue()))

    def _render_utag(self, wr: TextIO, stack: List[Value], path: Path) -> None:
        value = self._find(path, stack)

        if isinstance(value, TextValue):
            if value.value and self.line_start:
                self._write(wr, self.indent)
            self._write(wr, value.value)
        elif isinstance(value, CallbackValue):
            # Variable lambdas always use the default delimiters.
            tokens = self._expand(value, "", DEFAULT_OTAG, DEFAULT_CTAG)
            self._render_nested(wr, stack, tokens)

    def _render_section(self, wr: TextIO, stack: List[Value], section: Section) -> None:
        value = self._find(section.path, stack)

        if value is None:
            return
        if isinstance(value, BoolValue):
            if value.value:
                self._render_nested(wr, stack, section.children)
        elif isinstance(value, ListValue):
            for item in value.items:
                stack.append(item)
                self._render_nested(wr, stack, section.children)
                stack.pop()
        elif isinstance(value, TableValue):
            stack.append(value)
            self._render_nested(wr, stack, section.children)
            stack.pop()
        elif isinstance(value, CallbackValue):
            tokens = self._expand(value, section.src, section.otag, section.ctag)
            self._render_nested(wr, stack, tokens)
        else:
            raise UnexpectedValueError(section.path, value)

    def _render_inverted_section(
        self, wr: TextIO, stack: List[Value], section: Section
    ) -> None:
        value = self._find(section.path, stack)

        if value is None:
            falsy = True
        elif isinstance(value, BoolValue):
            falsy = not value.value
        elif isinstance(value, ListValue):
            falsy = not value.items
        else:
            falsy = False

        if falsy:
            self._render_nested(wr, stack, section.children)

    def _render_partial(self, wr: TextIO, stack: List[Value], partial: Partial) -> None:
        tokens = self.template.partials.get(partial.name)
        if tokens is None:
            return

        previous = self.indent
        self.indent = previous + partial.indent
        try:
            self._render_nested(wr, stack, tokens)
        finally:
            self.indent = previous

    def _expand(
        self, callback: CallbackValue, text: str, otag: str, ctag: str
    ) -> Sequence[Token]:
        """Call a lambda and parse what it returns as template text."""
        output = str(callback(text))
        log.debug("Lambda returned %d characters", len(output))
        return Parser(output, otag, ctag, self.max_depth).parse().tokens

    def _find(self, path: Path, stack: List[Value]) -> Optional[Value]:
        """Resolve `path` against the scope stack.

        The innermost table holding the first segment anchors the lookup;
        the remaining segments are walked from there only, with no fallback
        to outer scopes.

        Raises:
            ScopeError: A scope searched for the first segment is not a table.
        """
        if not path:
            return stack[-1] if stack else None

        head, rest = path[0], path[1:]
        value: Optional[Value] = None
        for frame in reversed(stack):
            if not isinstance(frame, TableValue):
                raise ScopeError(path)
            if head in frame.entries:
                value = frame.entries[head]
                break

        for part in rest:
            if not isinstance(value, TableValue):
                return None
            value = value.entries.get(part)

        return value
