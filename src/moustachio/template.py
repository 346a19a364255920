"""Template - a compiled, reusable mustache template."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, TextIO, Tuple

from moustachio.ast.spec import Token
from moustachio.compiler.renderer import Renderer
from moustachio.data import Value
from moustachio.encoder import encode

if TYPE_CHECKING:
    from moustachio.context import Context


@dataclass(frozen=True)
class Template:
    """Compiled tokens plus every partial they reference.

    A template never changes after compilation and can be rendered any
    number of times, against different data.
    """

    ctx: "Context"
    tokens: Tuple[Token, ...]
    partials: Dict[str, Tuple[Token, ...]] = field(default_factory=dict)

    def render(self, wr: TextIO, data: Any) -> None:
        """Encode `data` into a value graph and render it to `wr`.

        Raises:
            UnsupportedValueTypeError: `data` holds something that cannot be encoded.
        """
        self.render_data(wr, encode(data))

    def render_data(self, wr: TextIO, data: Value) -> None:
        """Render an already built value graph to `wr`."""
        Renderer(self).render(wr, data)

    def render_str(self, data: Any) -> str:
        """Render to a string."""
        wr = io.StringIO()
        self.render(wr, data)
        return wr.getvalue()
