"""Dependency extraction from sbt syntax trees.

Recognised declaration shapes (infix operators associate to the left):

    "dev.zio" %% "zio" % "2.0.0"
    libraryDependencies += "dev.zio" %% "zio" % zioVersion
    "dev.zio" %% "zio-test" % Versions.zio % Test

The operators between group, artifact and version must be made of ``%``
only. The version may be a string literal, a ``val`` name, or a member
access whose last segment names a ``val``; references that cannot be
resolved in the file's symbol table drop the declaration.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .models import DependencyRecord
from .span import Location, Span
from .symbols import SymbolTable, build_symbol_table
from .syntax import SyntaxNode, parse_scala, unquote, walk
from .versions import SemVer, parse_version

logger = logging.getLogger(__name__)

SEPARATOR_CHAR = "%"
LANGUAGE_VERSION_KEY = "scalaVersion"
LANGUAGE_ORGANIZATION = "org.scala-lang"
SCALA3_LIBRARY = "scala3-library_3"
SCALA2_LIBRARY = "scala-library"


def _is_separator(operator: SyntaxNode | None) -> bool:
    if operator is None:
        return False
    text = operator.text()
    return bool(text) and all(ch == SEPARATOR_CHAR for ch in text)


def _kind(node: SyntaxNode | None) -> str | None:
    return node.kind if node is not None else None


def resolve_version(node: SyntaxNode, symbols: SymbolTable) -> tuple[str, Span] | None:
    """Resolve a version operand to its text and the span to rewrite.

    Literals resolve to themselves. Identifiers and member accesses resolve
    through the symbol table, so the span points at the ``val`` definition's
    right-hand side rather than at the reference.
    """
    if node.kind == "string":
        return unquote(node.text()), node.span
    if node.kind == "identifier":
        name = node.text()
    elif node.kind == "field_expression":
        last = node.field("field")
        if last is None:
            return None
        name = last.text()
    else:
        return None

    symbol = symbols.get(name)
    if symbol is None:
        return None
    return symbol.value, symbol.span


def _match_declaration(
    node: SyntaxNode,
) -> tuple[SyntaxNode, SyntaxNode, SyntaxNode] | None:
    """Return (group, artifact, version) nodes if ``node`` is a coordinate."""
    if node.kind != "infix_expression" or not _is_separator(node.field("operator")):
        return None
    inner = node.field("left")
    version = node.field("right")
    if inner is None or version is None or inner.kind != "infix_expression":
        return None
    if not _is_separator(inner.field("operator")):
        return None
    artifact = inner.field("right")
    head = inner.field("left")
    if _kind(artifact) != "string" or head is None:
        return None

    if head.kind == "string":
        return head, artifact, version
    # `ident <op> "group"`: the group closes a nested infix expression
    if head.kind == "infix_expression":
        group = head.field("right")
        if _kind(head.field("left")) == "identifier" and _kind(group) == "string":
            return group, artifact, version
    return None


def extract_dependencies(
    root: SyntaxNode, symbols: SymbolTable, file_path: Path
) -> list[DependencyRecord]:
    """Find every dependency declaration in a tree, in source order."""
    records: list[DependencyRecord] = []
    for node in walk(root):
        match = _match_declaration(node)
        if match is None:
            continue
        group, artifact, version_node = match
        resolved = resolve_version(version_node, symbols)
        if resolved is None:
            logger.debug(
                "%s: dropping %s %% %s, cannot resolve version %r",
                file_path,
                unquote(group.text()),
                unquote(artifact.text()),
                version_node.text(),
            )
            continue
        value, span = resolved
        records.append(
            DependencyRecord(
                organization=unquote(group.text()),
                artifact=unquote(artifact.text()),
                version=parse_version(value),
                location=Location(file_path=file_path, span=span),
            )
        )
    return records


def _setting_key(node: SyntaxNode | None) -> str | None:
    """Name of the setting on the left of ``:=``.

    Handles ``key``, ``ThisBuild / key``, ``key in ThisBuild`` and
    ``Compile.key``.
    """
    if node is None:
        return None
    if node.kind == "identifier":
        return node.text()
    if node.kind == "field_expression":
        field = node.field("field")
        return field.text() if field is not None else None
    if node.kind == "infix_expression":
        operator = node.field("operator")
        op = operator.text() if operator is not None else ""
        if op == "/":
            return _setting_key(node.field("right"))
        if op == "in":
            return _setting_key(node.field("left"))
    return None


def find_language_version(
    root: SyntaxNode, symbols: SymbolTable
) -> tuple[str, Span] | None:
    """Resolve the first ``scalaVersion := ...`` setting in the tree."""
    for node in walk(root):
        if node.kind != "infix_expression":
            continue
        operator = node.field("operator")
        if operator is None or operator.text() != ":=":
            continue
        if _setting_key(node.field("left")) != LANGUAGE_VERSION_KEY:
            continue
        value = node.field("right")
        return resolve_version(value, symbols) if value is not None else None
    return None


def language_version_dependency(
    root: SyntaxNode, symbols: SymbolTable, file_path: Path
) -> DependencyRecord | None:
    """Turn the project's Scala version into a standard-library dependency.

    Scala 3 projects depend on ``scala3-library_3``, everything else on
    ``scala-library``.
    """
    resolved = find_language_version(root, symbols)
    if resolved is None:
        return None
    value, span = resolved
    version = parse_version(value)
    is_scala3 = isinstance(version, SemVer) and version.major == 3
    return DependencyRecord(
        organization=LANGUAGE_ORGANIZATION,
        artifact=SCALA3_LIBRARY if is_scala3 else SCALA2_LIBRARY,
        version=version,
        location=Location(file_path=file_path, span=span),
    )


def extract_file(
    file_path: Path, source: str, *, include_language_version: bool = False
) -> list[DependencyRecord]:
    """Parse one file and return its dependency records.

    Args:
        file_path: Path recorded in each record's location.
        source: The file's contents.
        include_language_version: Also emit the Scala library record
            derived from ``scalaVersion`` (root build file only).
    """
    root = parse_scala(source)
    symbols = build_symbol_table(root)
    records = extract_dependencies(root, symbols, file_path)
    if include_language_version:
        language = language_version_dependency(root, symbols, file_path)
        if language is not None:
            records.append(language)
    return records
