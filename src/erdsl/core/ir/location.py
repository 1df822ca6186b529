"""Source location tracking for IR nodes.

Records the line and column where a DSL construct was declared, enabling
position-tagged diagnostics.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SourceLocation(BaseModel):
    """Source position where a DSL construct was declared.

    Attributes:
        line: 1-indexed line number
        column: 1-indexed column number
    """

    line: int
    column: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"
