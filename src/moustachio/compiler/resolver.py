"""Resolver - locates partial templates on disk and loads their text."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from moustachio.error import InvalidTextError, IOFailureError

if TYPE_CHECKING:
    from moustachio.context import Context

log = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Read a template file as UTF-8.

    Raises:
        IOFailureError: The file could not be opened or read.
        InvalidTextError: The file is not valid UTF-8.
    """
    try:
        content = path.read_bytes()
    except OSError as e:
        raise IOFailureError(path, e.strerror or str(e)) from e

    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidTextError(str(path)) from e


class PartialResolver:
    """Maps partial names to `<template_path>/<name>.<extension>`."""

    def __init__(self, ctx: "Context"):
        self.ctx = ctx

    def path_for(self, name: str) -> Path:
        return self.ctx.template_path / f"{name}.{self.ctx.template_extension}"

    def load(self, name: str) -> Optional[str]:
        """Load the source of partial `name`.

        Returns:
            The partial's text, or None when no such file exists.

        Raises:
            IOFailureError: The file exists but could not be read.
            InvalidTextError: The file is not valid UTF-8.
        """
        path = self.path_for(name)
        if not path.is_file():
            log.debug("Partial %r not found at %s", name, path)
            return None

        log.debug("Loading partial %r from %s", name, path)
        return read_text(path)
