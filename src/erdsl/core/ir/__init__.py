"""
erdsl Intermediate Representation (IR) types.

All types are re-exported from this package.
"""

from .cardinality import (
    CARDINALITY_PATTERN,
    CARDINALITY_START_CHARS,
    CONNECTOR,
    LEFT_MARKERS,
    RIGHT_MARKERS,
    Cardinality,
    Multiplicity,
)
from .diagram import DiagramSpec, EdgeSpec, EndpointRef, EntitySpec
from .fields import FieldModifier, FieldSpec
from .graph import GraphEdge, GraphEndpoint, GraphEntity, GraphField, SchemaGraph
from .location import SourceLocation

__all__ = [
    # Cardinality
    "CARDINALITY_PATTERN",
    "CARDINALITY_START_CHARS",
    "CONNECTOR",
    "LEFT_MARKERS",
    "RIGHT_MARKERS",
    "Cardinality",
    "Multiplicity",
    # Parsed diagram
    "DiagramSpec",
    "EdgeSpec",
    "EndpointRef",
    "EntitySpec",
    "FieldModifier",
    "FieldSpec",
    "SourceLocation",
    # Resolved graph
    "GraphEdge",
    "GraphEndpoint",
    "GraphEntity",
    "GraphField",
    "SchemaGraph",
]
