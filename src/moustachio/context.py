"""Compilation context - shared settings for compiling and rendering templates."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from moustachio.ast.spec import DEFAULT_CTAG, DEFAULT_OTAG
from moustachio.compiler.compiler import Compiler, Partials, Source
from moustachio.compiler.resolver import read_text
from moustachio.template import Template

log = logging.getLogger(__name__)

# Deepest nesting the renderer reaches within the interpreter stack limit.
MAX_DEPTH_CEILING = 200


class Context(BaseModel):
    """Where templates live and how deep they may nest.

    Immutable once built, so a single context can be shared by every
    template compiled from it.
    """

    template_path: Path = Path(".")
    template_extension: str = "mustache"
    max_depth: int = Field(default=100, gt=0, le=MAX_DEPTH_CEILING)

    model_config = {"frozen": True}

    @field_validator("template_extension")
    @classmethod
    def strip_leading_dot(cls, value: str) -> str:
        return value.lstrip(".")

    def compile(self, source: Source) -> Template:
        """Compile template text (or an iterable of characters)."""
        return self.compile_with(source)

    def compile_with(
        self,
        source: Source,
        partials: Optional[Partials] = None,
        otag: str = DEFAULT_OTAG,
        ctag: str = DEFAULT_CTAG,
    ) -> Template:
        """Compile with inherited partials and a starting delimiter pair.

        Args:
            source: Template text or an iterable of characters.
            partials: Compiled partials to reuse instead of loading from disk.
            otag: Opening delimiter in force at the start of `source`.
            ctag: Closing delimiter in force at the start of `source`.
        """
        tokens, resolved = Compiler(self).compile(source, partials, otag, ctag)
        return Template(ctx=self, tokens=tokens, partials=resolved)

    def compile_path(self, path: Union[str, Path]) -> Template:
        """Compile the template file `<template_path>/<path>.<extension>`.

        Raises:
            IOFailureError: The file does not exist or cannot be read.
            InvalidTextError: The file is not valid UTF-8.
        """
        full = (self.template_path / path).with_suffix(f".{self.template_extension}")
        log.debug("Compiling template file %s", full)
        return self.compile(read_text(full))
