"""Collect ``val`` definitions from a source file.

The table is flat and file scoped: a ``val`` nested inside an ``object``
or block is visible under its simple name to the whole file, and a later
definition of the same name replaces an earlier one.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .span import Span
from .syntax import SyntaxNode, unquote

SymbolTable = dict[str, "Symbol"]


class Symbol(BaseModel):
    """Right-hand side of a ``val``: its unquoted text and where it sits."""

    model_config = ConfigDict(frozen=True)

    value: str
    span: Span


def _parse_val(node: SyntaxNode) -> tuple[str, Symbol] | None:
    pattern = node.field("pattern")
    value = node.field("value")
    if pattern is None or value is None or pattern.kind != "identifier":
        return None
    return pattern.text(), Symbol(value=unquote(value.text()), span=value.span)


def _collect(node: SyntaxNode, table: SymbolTable) -> None:
    if node.kind == "val_definition":
        parsed = _parse_val(node)
        if parsed is not None:
            name, symbol = parsed
            table[name] = symbol
            return
    for child in node.children():
        _collect(child, table)


def build_symbol_table(root: SyntaxNode) -> SymbolTable:
    """Map every ``val`` name in the tree to its right-hand side.

    Only the definition's value text is captured; it is not evaluated, so
    ``val v = "1" + "2"`` maps ``v`` to ``1" + "2``.
    """
    table: SymbolTable = {}
    _collect(root, table)
    return table
