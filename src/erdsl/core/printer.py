"""
Canonical DSL printer.

Writes a parsed diagram or a resolved graph back out as erdsl source. Entity
blocks come first in declaration order, then the edges. Parsing the output
again yields an equal SchemaGraph.
"""

import re
from collections.abc import Iterable

from . import ir
from .lexer import KEYWORDS, QUOTE

INDENT = "  "

_BARE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def format_name(name: str) -> str:
    """Quote a name with backticks when it cannot be written bare."""
    if _BARE_NAME.fullmatch(name) and name not in KEYWORDS:
        return name
    return f"{QUOTE}{name}{QUOTE}"


def format_field(name: str, type_: str, modifiers: Iterable[ir.FieldModifier]) -> str:
    parts = [format_name(name), type_]
    parts.extend(m.value for m in modifiers)
    return " ".join(parts)


def format_edge(left: str, left_field: str, cardinality: ir.Cardinality, right: str, right_field: str) -> str:
    return (
        f"{format_name(left)}.{format_name(left_field)} "
        f"{cardinality.symbol} "
        f"{format_name(right)}.{format_name(right_field)}"
    )


def _format_document(
    name: str | None,
    entities: list[tuple[str, list[str]]],
    edges: list[str],
) -> str:
    header = f"erd {format_name(name)} {{" if name is not None else "erd {"
    lines = [header]

    for index, (entity_name, field_lines) in enumerate(entities):
        if index:
            lines.append("")
        lines.append(f"{INDENT}{format_name(entity_name)} {{")
        lines.extend(f"{INDENT * 2}{line}" for line in field_lines)
        lines.append(f"{INDENT}}}")

    if edges:
        if entities:
            lines.append("")
        lines.extend(f"{INDENT}{edge}" for edge in edges)

    lines.append("}")
    return "\n".join(lines) + "\n"


def format_diagram(diagram: ir.DiagramSpec) -> str:
    """Format a parsed diagram, including any duplicates it still holds."""
    entities = [
        (entity.name, [format_field(f.name, f.type, f.modifiers) for f in entity.fields])
        for entity in diagram.entities
    ]
    edges = [
        format_edge(
            edge.left.entity, edge.left.field, edge.cardinality, edge.right.entity, edge.right.field
        )
        for edge in diagram.edges
    ]
    return _format_document(diagram.name, entities, edges)


def format_graph(graph: ir.SchemaGraph) -> str:
    """Format a resolved graph."""
    entities = [
        (
            entity.name,
            [format_field(f.name, f.type, f.modifiers) for f in entity.fields.values()],
        )
        for entity in graph.entities.values()
    ]
    edges = [
        format_edge(
            edge.left.entity.name,
            edge.left.field.name,
            edge.cardinality,
            edge.right.entity.name,
            edge.right.field.name,
        )
        for edge in graph.edges
    ]
    return _format_document(graph.name, entities, edges)
