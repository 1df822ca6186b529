"""
Resolved schema graph.

The graph is the only artifact handed to renderers and exporters. Entities and
fields are indexed by name in declaration order, and each edge endpoint holds
the resolved entity and field objects themselves. Graph nodes carry no source
positions, so equivalent documents produce equal graphs.

Every container in the graph is a tuple or a read-only mapping view, so a
graph cannot change after the resolver returns it.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

from .cardinality import Cardinality, Multiplicity
from .fields import FieldModifier


class GraphField(BaseModel):
    """A field owned by exactly one entity."""

    entity: str
    name: str
    type: str
    modifiers: tuple[FieldModifier, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def is_primary_key(self) -> bool:
        return FieldModifier.PK in self.modifiers

    @property
    def is_foreign_key(self) -> bool:
        return FieldModifier.FK in self.modifiers


class GraphEntity(BaseModel):
    """
    An entity with its fields.

    Attributes:
        name: Entity name
        field_list: Fields in declaration order, names unique
    """

    name: str
    field_list: tuple[GraphField, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def fields(self) -> Mapping[str, GraphField]:
        """Read-only index of fields by name, in declaration order."""
        return MappingProxyType({f.name: f for f in self.field_list})

    @property
    def primary_key(self) -> list[GraphField]:
        return [f for f in self.field_list if f.is_primary_key]


class GraphEndpoint(BaseModel):
    """A resolved edge endpoint."""

    entity: GraphEntity
    field: GraphField
    multiplicity: Multiplicity

    model_config = ConfigDict(frozen=True)

    @property
    def path(self) -> str:
        return f"{self.entity.name}.{self.field.name}"


class GraphEdge(BaseModel):
    """A resolved relationship between two fields."""

    left: GraphEndpoint
    right: GraphEndpoint

    model_config = ConfigDict(frozen=True)

    @property
    def cardinality(self) -> Cardinality:
        return Cardinality(left=self.left.multiplicity, right=self.right.multiplicity)

    @property
    def is_self_reference(self) -> bool:
        return self.left.entity.name == self.right.entity.name


class SchemaGraph(BaseModel):
    """
    Fully resolved diagram.

    Attributes:
        name: Diagram name
        entity_list: Entities in declaration order, names unique
        edges: Resolved edges in declaration order
    """

    name: str | None = None
    entity_list: tuple[GraphEntity, ...] = ()
    edges: tuple[GraphEdge, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def entities(self) -> Mapping[str, GraphEntity]:
        """Read-only index of entities by name, in declaration order."""
        return MappingProxyType({e.name: e for e in self.entity_list})

    def entity(self, name: str) -> GraphEntity | None:
        return self.entities.get(name)

    def field(self, entity: str, name: str) -> GraphField | None:
        owner = self.entities.get(entity)
        if owner is None:
            return None
        return owner.fields.get(name)

    def edges_for(self, entity: str) -> list[GraphEdge]:
        """Edges with at least one endpoint on the given entity."""
        return [
            e for e in self.edges if e.left.entity.name == entity or e.right.entity.name == entity
        ]

    @property
    def field_count(self) -> int:
        return sum(len(e.field_list) for e in self.entity_list)
