"""Parsing module for the path language."""

from typed_access.parsing.path_lexer import PathLexer, parse_path, strip_root

__all__ = [
    "PathLexer",
    "parse_path",
    "strip_root",
]
