"""
Symbol table and edge resolution for erdsl.

Resolution runs in two passes over a parsed diagram: every entity and field is
registered first, then every edge endpoint is looked up. Edges may therefore
reference entities declared later in the document.
"""

import logging
from dataclasses import dataclass, field

from . import ir
from .diagnostics import DiagnosticCode, DiagnosticLog

logger = logging.getLogger(__name__)


@dataclass
class SymbolTable:
    """
    Registry of entities and their fields by name.

    Duplicates keep the first definition; later ones are reported and dropped.
    """

    diagnostics: DiagnosticLog
    entities: dict[str, ir.EntitySpec] = field(default_factory=dict)
    fields: dict[str, dict[str, ir.FieldSpec]] = field(default_factory=dict)

    def add_entity(self, entity: ir.EntitySpec) -> bool:
        """Register an entity and its fields. Returns False for a duplicate."""
        existing = self.entities.get(entity.name)
        if existing is not None:
            line, column = _position(entity.location)
            self.diagnostics.error(
                DiagnosticCode.DUPLICATE_ENTITY,
                f"Duplicate entity '{entity.name}'; the definition at "
                f"{existing.location or 'an earlier line'} is kept",
                line,
                column,
                hint="Merge the two blocks or rename one of them",
            )
            return False

        self.entities[entity.name] = entity
        self.fields[entity.name] = {}
        for spec in entity.fields:
            self.add_field(entity.name, spec)
        return True

    def add_field(self, entity_name: str, spec: ir.FieldSpec) -> bool:
        """Register a field on an entity. Returns False for a duplicate."""
        registry = self.fields[entity_name]
        existing = registry.get(spec.name)
        if existing is not None:
            line, column = _position(spec.location)
            self.diagnostics.error(
                DiagnosticCode.DUPLICATE_FIELD,
                f"Duplicate field '{spec.name}' in entity '{entity_name}'; the definition at "
                f"{existing.location or 'an earlier line'} is kept",
                line,
                column,
            )
            return False
        registry[spec.name] = spec
        return True

    def lookup(self, endpoint: ir.EndpointRef) -> ir.FieldSpec | None:
        """Return the field an endpoint names, or None if it does not exist."""
        registry = self.fields.get(endpoint.entity)
        if registry is None:
            return None
        return registry.get(endpoint.field)

    def describe_missing(self, endpoint: ir.EndpointRef) -> str:
        if endpoint.entity not in self.entities:
            return f"'{endpoint.path}' (no entity '{endpoint.entity}')"
        return f"'{endpoint.path}' (entity '{endpoint.entity}' has no field '{endpoint.field}')"


def build_symbol_table(diagram: ir.DiagramSpec, diagnostics: DiagnosticLog) -> SymbolTable:
    """First pass: register every entity and field."""
    symbols = SymbolTable(diagnostics=diagnostics)
    for entity in diagram.entities:
        symbols.add_entity(entity)
    return symbols


def build_schema_graph(
    diagram: ir.DiagramSpec, diagnostics: DiagnosticLog | None = None
) -> ir.SchemaGraph:
    """
    Resolve a parsed diagram into a SchemaGraph.

    Performs:
    1. Entity registration (DuplicateEntity keeps the first)
    2. Field registration per entity (DuplicateField keeps the first)
    3. Edge resolution (an edge with any unresolved endpoint is omitted and
       reported once as UnresolvedEndpoint)

    Args:
        diagram: Parsed diagram
        diagnostics: Log to record semantic errors in

    Returns:
        Immutable SchemaGraph holding only valid entities and edges
    """
    if diagnostics is None:
        diagnostics = DiagnosticLog()

    symbols = build_symbol_table(diagram, diagnostics)

    entities: dict[str, ir.GraphEntity] = {}
    for name, entity in symbols.entities.items():
        graph_fields = tuple(
            ir.GraphField(
                entity=name,
                name=spec.name,
                type=spec.type,
                modifiers=tuple(spec.modifiers),
            )
            for spec in symbols.fields[name].values()
        )
        entities[name] = ir.GraphEntity(name=name, field_list=graph_fields)

    edges: list[ir.GraphEdge] = []
    for edge in diagram.edges:
        resolved = resolve_edge(edge, symbols, entities)
        if resolved is not None:
            edges.append(resolved)

    logger.debug(
        "Resolved diagram %s: %d entities, %d of %d edges",
        diagram.name,
        len(entities),
        len(edges),
        len(diagram.edges),
    )
    return ir.SchemaGraph(
        name=diagram.name, entity_list=tuple(entities.values()), edges=tuple(edges)
    )


def resolve_edge(
    edge: ir.EdgeSpec,
    symbols: SymbolTable,
    entities: dict[str, ir.GraphEntity],
) -> ir.GraphEdge | None:
    """Second pass for one edge. Reports and returns None if it cannot resolve."""
    missing = [
        symbols.describe_missing(endpoint)
        for endpoint in (edge.left, edge.right)
        if symbols.lookup(endpoint) is None
    ]
    if missing:
        line, column = _position(edge.location)
        noun = "endpoint" if len(missing) == 1 else "endpoints"
        symbols.diagnostics.error(
            DiagnosticCode.UNRESOLVED_ENDPOINT,
            f"Unresolved edge {noun} {', '.join(missing)} in "
            f"'{edge.left.path} {edge.cardinality.symbol} {edge.right.path}'",
            line,
            column,
        )
        return None

    return ir.GraphEdge(
        left=_endpoint(edge.left, entities),
        right=_endpoint(edge.right, entities),
    )


def _endpoint(ref: ir.EndpointRef, entities: dict[str, ir.GraphEntity]) -> ir.GraphEndpoint:
    entity = entities[ref.entity]
    return ir.GraphEndpoint(
        entity=entity,
        field=entity.fields[ref.field],
        multiplicity=ref.multiplicity,
    )


def _position(location: ir.SourceLocation | None) -> tuple[int, int]:
    if location is None:
        return 0, 0
    return location.line, location.column
