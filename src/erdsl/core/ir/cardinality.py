"""
Crow's-foot cardinality notation.

A cardinality symbol is a left marker, the ``--`` connector and a right
marker, e.g. ``o--o`` or ``||--o{``. Each marker denotes the multiplicity of
the endpoint written on its side. Supporting another spelling means adding it
to ``LEFT_MARKERS`` / ``RIGHT_MARKERS``; the lexer pattern is derived from them.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict


class Multiplicity(str, Enum):
    """Minimum/maximum multiplicity of one side of a relationship."""

    ZERO_OR_ONE = "zero_or_one"
    EXACTLY_ONE = "exactly_one"
    ZERO_OR_MANY = "zero_or_many"
    ONE_OR_MANY = "one_or_many"


CONNECTOR = "--"

# First spelling per multiplicity is the canonical one used when printing.
LEFT_MARKERS: dict[str, Multiplicity] = {
    "o": Multiplicity.ZERO_OR_ONE,
    "|o": Multiplicity.ZERO_OR_ONE,
    "||": Multiplicity.EXACTLY_ONE,
    "|": Multiplicity.EXACTLY_ONE,
    "}o": Multiplicity.ZERO_OR_MANY,
    "}|": Multiplicity.ONE_OR_MANY,
}

RIGHT_MARKERS: dict[str, Multiplicity] = {
    "o": Multiplicity.ZERO_OR_ONE,
    "o|": Multiplicity.ZERO_OR_ONE,
    "||": Multiplicity.EXACTLY_ONE,
    "|": Multiplicity.EXACTLY_ONE,
    "o{": Multiplicity.ZERO_OR_MANY,
    "|{": Multiplicity.ONE_OR_MANY,
}


def _canonical(markers: dict[str, Multiplicity]) -> dict[Multiplicity, str]:
    canonical: dict[Multiplicity, str] = {}
    for spelling, multiplicity in markers.items():
        canonical.setdefault(multiplicity, spelling)
    return canonical


_LEFT_CANONICAL = _canonical(LEFT_MARKERS)
_RIGHT_CANONICAL = _canonical(RIGHT_MARKERS)


def _alternation(spellings: list[str]) -> str:
    # Longest first so "||" wins over "|"
    ordered = sorted(spellings, key=len, reverse=True)
    return "|".join(re.escape(s) for s in ordered)


CARDINALITY_PATTERN = re.compile(
    f"(?P<left>{_alternation(list(LEFT_MARKERS))})"
    f"{re.escape(CONNECTOR)}"
    f"(?P<right>{_alternation(list(RIGHT_MARKERS))})"
)

# Characters a cardinality symbol can start with
CARDINALITY_START_CHARS = frozenset(s[0] for s in LEFT_MARKERS)


class Cardinality(BaseModel):
    """
    Both sides of a relationship.

    Examples:
        - o--o: Cardinality(left=ZERO_OR_ONE, right=ZERO_OR_ONE)
        - ||--o{: Cardinality(left=EXACTLY_ONE, right=ZERO_OR_MANY)
    """

    left: Multiplicity
    right: Multiplicity

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, symbol: str) -> Cardinality:
        """
        Parse a crow's-foot symbol.

        Raises:
            ValueError: If the symbol is not a recognized spelling
        """
        match = CARDINALITY_PATTERN.fullmatch(symbol)
        if not match:
            raise ValueError(f"Unknown cardinality symbol: {symbol!r}")
        return cls(left=LEFT_MARKERS[match["left"]], right=RIGHT_MARKERS[match["right"]])

    @property
    def symbol(self) -> str:
        """Canonical spelling of this cardinality."""
        return f"{_LEFT_CANONICAL[self.left]}{CONNECTOR}{_RIGHT_CANONICAL[self.right]}"

    def __str__(self) -> str:
        return self.symbol
