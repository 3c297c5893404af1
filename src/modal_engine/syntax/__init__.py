"""Syntax-tree queries the editing engine depends on."""

from .indentation import (
    IndentationOracle,
    JsonIndentationOracle,
    NullIndentationOracle,
    SyntaxTreeIndentationOracle,
)

__all__ = [
    "IndentationOracle",
    "NullIndentationOracle",
    "SyntaxTreeIndentationOracle",
    "JsonIndentationOracle",
]
