"""Mustache token tree and parser."""

from moustachio.ast.parser import Parser, ParseResult, parse_path
from moustachio.ast.spec import Partial, Path, Section, Text, Token, Variable

__all__ = [
    "Parser",
    "ParseResult",
    "parse_path",
    "Partial",
    "Path",
    "Section",
    "Text",
    "Token",
    "Variable",
]
