"""Moustachio compiler - resolves partials and renders token trees."""

from moustachio.compiler.compiler import Compiler
from moustachio.compiler.renderer import Renderer, escape_html
from moustachio.compiler.resolver import PartialResolver

__all__ = ["Compiler", "Renderer", "PartialResolver", "escape_html"]
