"""Structural parsing of sbt / Scala sources.

Extraction only needs a handful of things from a syntax tree: a node's
kind, its named children, a child by field name, and the byte span and
text it covers. ``SyntaxNode`` captures that capability; ``TreeSitterNode``
provides it on top of the tree-sitter Scala grammar.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

import tree_sitter_scala as tsscala
from tree_sitter import Language, Node, Parser

from .span import Span

SCALA_LANGUAGE = Language(tsscala.language())


class SyntaxNode(Protocol):
    @property
    def kind(self) -> str: ...

    @property
    def span(self) -> Span: ...

    def children(self) -> list[SyntaxNode]: ...

    def field(self, name: str) -> SyntaxNode | None: ...

    def text(self) -> str: ...


class TreeSitterNode:
    """``SyntaxNode`` backed by a tree-sitter node and the bytes it was parsed from."""

    __slots__ = ("_node", "_source")

    def __init__(self, node: Node, source: bytes) -> None:
        self._node = node
        self._source = source

    @property
    def kind(self) -> str:
        return self._node.type

    @property
    def span(self) -> Span:
        return Span(start=self._node.start_byte, end=self._node.end_byte)

    def children(self) -> list[SyntaxNode]:
        return [TreeSitterNode(child, self._source) for child in self._node.named_children]

    def field(self, name: str) -> SyntaxNode | None:
        child = self._node.child_by_field_name(name)
        if child is None:
            return None
        return TreeSitterNode(child, self._source)

    def text(self) -> str:
        return self._source[self._node.start_byte : self._node.end_byte].decode(
            "utf-8", errors="replace"
        )

    def __repr__(self) -> str:
        return f"TreeSitterNode({self.kind} {self.span.start}-{self.span.end})"


def parse_scala(source: str) -> SyntaxNode:
    """Parse Scala source text and return the root node."""
    data = source.encode("utf-8")
    tree = Parser(SCALA_LANGUAGE).parse(data)
    return TreeSitterNode(tree.root_node, data)


def walk(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield ``node`` and all its named descendants, depth-first, in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


def unquote(text: str) -> str:
    """Strip surrounding double quotes from a string literal's source text."""
    return text.strip('"')
