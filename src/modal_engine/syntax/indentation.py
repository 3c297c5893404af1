"""Indentation oracle bridge between buffers and a syntax tree.

A buffer only asks one question when it opens a line below the cursor: how
many nesting constructs enclose this byte offset. The parser handle is
owned by whoever composes the editor and is passed in explicitly.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, Optional, Protocol

from modal_engine.runtime import telemetry

JSON_NESTING_KINDS: FrozenSet[str] = frozenset({"object", "array"})


class IndentationOracle(Protocol):
    def ancestor_depth_at(self, byte_offset: int) -> int:
        """Count nesting constructs enclosing ``byte_offset``."""
        ...


class NullIndentationOracle:
    """Oracle for fields without structured syntax; never indents."""

    def ancestor_depth_at(self, byte_offset: int) -> int:
        del byte_offset
        return 0


class SyntaxTreeIndentationOracle:
    """Walks a tree-sitter style tree from the node at an offset to the root.

    Any object exposing ``root_node.descendant_for_byte_range(start, end)``
    with nodes carrying ``type`` and ``parent`` works, so the walk can be
    exercised without a compiled grammar.
    """

    def __init__(
        self, tree: Optional[Any], nesting_kinds: Iterable[str] = JSON_NESTING_KINDS
    ) -> None:
        self.tree = tree
        self.nesting_kinds = frozenset(nesting_kinds)

    def ancestor_depth_at(self, byte_offset: int) -> int:
        if self.tree is None:
            return 0
        offset = max(byte_offset, 0)
        node = self.tree.root_node.descendant_for_byte_range(offset, offset)
        depth = 0
        while node is not None:
            if node.type in self.nesting_kinds:
                depth += 1
            node = node.parent
        return depth


class JsonIndentationOracle(SyntaxTreeIndentationOracle):
    """Keeps a tree-sitter JSON parse of a buffer's text.

    Requires the ``syntax`` extra (``tree-sitter`` and ``tree-sitter-json``).
    Call :meth:`refresh` after every edit; the field editor wires it to the
    ``buffer.changed`` event.
    """

    def __init__(self, parser: Any) -> None:
        super().__init__(None, JSON_NESTING_KINDS)
        self.parser = parser

    @classmethod
    def from_text(cls, text: str) -> "JsonIndentationOracle":
        import tree_sitter
        import tree_sitter_json

        parser = tree_sitter.Parser(tree_sitter.Language(tree_sitter_json.language()))
        oracle = cls(parser)
        oracle.refresh(text)
        return oracle

    def refresh(self, text: str) -> None:
        with telemetry.span(
            "syntax::parse", component="syntax", metadata={"length": len(text)}
        ):
            self.tree = self.parser.parse(text.encode("utf-8"))


__all__ = [
    "IndentationOracle",
    "NullIndentationOracle",
    "SyntaxTreeIndentationOracle",
    "JsonIndentationOracle",
    "JSON_NESTING_KINDS",
]
