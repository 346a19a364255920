"""Compiler - parses a template and every partial it can reach."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, Deque, Dict, Iterable, Optional, Set, Tuple, Union

from moustachio.ast.parser import Parser
from moustachio.ast.spec import DEFAULT_CTAG, DEFAULT_OTAG, Token
from moustachio.compiler.resolver import PartialResolver

if TYPE_CHECKING:
    from moustachio.context import Context

log = logging.getLogger(__name__)

Tokens = Tuple[Token, ...]
Partials = Dict[str, Tokens]
Source = Union[str, Iterable[str]]


def as_text(source: Source) -> str:
    """Accept either a string or any iterable of characters."""
    if isinstance(source, str):
        return source
    return "".join(source)


class Compiler:
    """Compiles template text into tokens plus a partial name -> tokens map."""

    def __init__(self, ctx: "Context"):
        """Initialize compiler with the compilation context.

        Args:
            ctx: Context giving the template directory, extension and depth limit.
        """
        self.ctx = ctx
        self.resolver = PartialResolver(ctx)

    def compile(
        self,
        source: Source,
        partials: Optional[Partials] = None,
        otag: str = DEFAULT_OTAG,
        ctag: str = DEFAULT_CTAG,
    ) -> Tuple[Tokens, Partials]:
        """Compile `source` and resolve the partials it references.

        Partials are discovered breadth-first: each name not yet known is
        loaded once, parsed with the default delimiters, and its own
        references queued. Names already present in `partials` are never
        reloaded, so self-referencing partials terminate.

        Args:
            source: Template text or an iterable of characters.
            partials: Already compiled partials to inherit.
            otag: Opening delimiter in force at the start of `source`.
            ctag: Closing delimiter in force at the start of `source`.

        Returns:
            (tokens, partials) where partials maps every resolvable name to
            its tokens. Names without a file are left out.
        """
        known: Partials = dict(partials or {})
        result = Parser(as_text(source), otag, ctag, self.ctx.max_depth).parse()

        queue: Deque[str] = deque(result.partials)
        visited: Set[str] = set(known)

        while queue:
            name = queue.popleft()
            if name in visited:
                continue
            visited.add(name)

            text = self.resolver.load(name)
            if text is None:
                continue

            parsed = Parser(text, max_depth=self.ctx.max_depth).parse()
            known[name] = parsed.tokens

            for dep in parsed.partials:
                if dep not in visited:
                    queue.append(dep)

        log.debug(
            "Compiled template: %d tokens, %d partials", len(result.tokens), len(known)
        )
        return result.tokens, known
