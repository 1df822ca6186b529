"""
Parsed diagram types for the erdsl IR.

These mirror the source document: duplicates are kept and edge endpoints are
plain names. The resolver turns a ``DiagramSpec`` into a ``SchemaGraph``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .cardinality import Cardinality, Multiplicity
from .fields import FieldSpec
from .location import SourceLocation


class EntitySpec(BaseModel):
    """
    An entity block.

    Attributes:
        name: Entity name
        fields: Fields in declaration order (may contain duplicates)
        location: Position of the entity name
    """

    name: str
    fields: list[FieldSpec] = Field(default_factory=list)
    location: SourceLocation | None = None

    model_config = ConfigDict(frozen=True)

    def get_field(self, name: str) -> FieldSpec | None:
        """Return the first field with the given name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None


class EndpointRef(BaseModel):
    """
    One side of an edge, by name.

    Attributes:
        entity: Referenced entity name
        field: Referenced field name
        multiplicity: Crow's-foot marker written on this endpoint's side
        location: Position of the entity name
    """

    entity: str
    field: str
    multiplicity: Multiplicity
    location: SourceLocation | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def path(self) -> str:
        return f"{self.entity}.{self.field}"


class EdgeSpec(BaseModel):
    """
    A relationship line between two endpoints.

    Attributes:
        left: Endpoint written before the cardinality symbol
        right: Endpoint written after it
        location: Position of the left endpoint
    """

    left: EndpointRef
    right: EndpointRef
    location: SourceLocation | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def cardinality(self) -> Cardinality:
        return Cardinality(left=self.left.multiplicity, right=self.right.multiplicity)


class DiagramSpec(BaseModel):
    """
    Root of a parsed document: one ``erd <name> { ... }`` block.

    Attributes:
        name: Diagram name, or None when omitted
        entities: Entity blocks in declaration order
        edges: Edges in declaration order
        location: Position of the ``erd`` keyword
    """

    name: str | None = None
    entities: list[EntitySpec] = Field(default_factory=list)
    edges: list[EdgeSpec] = Field(default_factory=list)
    location: SourceLocation | None = None

    model_config = ConfigDict(frozen=True)
