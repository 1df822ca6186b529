"""
Field definitions for the erdsl IR.

Field types are opaque strings; only the key modifiers are a closed set.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .location import SourceLocation


class FieldModifier(str, Enum):
    """Key markers that can follow a field's type."""

    PK = "PK"
    FK = "FK"


class FieldSpec(BaseModel):
    """
    A field as declared inside an entity block.

    Attributes:
        name: Canonical field name (backticks removed)
        type: Declared type token, e.g. ``int`` or ``timestamp``
        modifiers: Key modifiers in declaration order, without repeats
        location: Position of the field name
    """

    name: str
    type: str
    modifiers: list[FieldModifier] = Field(default_factory=list)
    location: SourceLocation | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_primary_key(self) -> bool:
        return FieldModifier.PK in self.modifiers

    @property
    def is_foreign_key(self) -> bool:
        return FieldModifier.FK in self.modifiers
