"""
Edge parsing for the erdsl DSL.

An edge line is a chain of endpoints joined by crow's-foot symbols:
``posts.created_by o--o users.id``. A chain of three or more endpoints yields
one edge per consecutive pair.
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import Token, TokenType


class EdgeParserMixin:
    """
    Mixin providing edge parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    # Type stubs for methods provided by BaseParser
    if TYPE_CHECKING:
        expect: Any
        expect_name: Any
        advance: Any
        match: Any
        current_token: Any
        error: Any

    def parse_edges(self) -> list[ir.EdgeSpec]:
        """Parse ``Endpoint (Cardinality Endpoint)+`` into edges."""
        first = self.current_token()
        entity, field = self._parse_path()

        # Pending endpoint names; their multiplicity comes from the next symbol
        names: list[tuple[str, str, Token]] = [(entity, field, first)]
        symbols: list[ir.Cardinality] = []

        while True:
            symbol_token = self.current_token()
            if symbol_token.type != TokenType.CARDINALITY or symbol_token.line != first.line:
                if not symbols:
                    raise self.error(
                        f"Expected cardinality symbol such as 'o--o', got {symbol_token.describe()}",
                        symbol_token,
                    )
                break
            self.advance()
            symbols.append(ir.Cardinality.parse(symbol_token.value))

            endpoint_token = self.current_token()
            if endpoint_token.line != first.line:
                raise self.error(
                    f"Expected endpoint after '{symbol_token.value}', got end of line",
                    symbol_token,
                    hint="An edge must be written on a single line",
                )
            entity, field = self._parse_path()
            names.append((entity, field, endpoint_token))

        edges: list[ir.EdgeSpec] = []
        for index, cardinality in enumerate(symbols):
            left_entity, left_field, left_token = names[index]
            right_entity, right_field, right_token = names[index + 1]
            left = ir.EndpointRef(
                entity=left_entity,
                field=left_field,
                multiplicity=cardinality.left,
                location=_location(left_token),
            )
            right = ir.EndpointRef(
                entity=right_entity,
                field=right_field,
                multiplicity=cardinality.right,
                location=_location(right_token),
            )
            edges.append(ir.EdgeSpec(left=left, right=right, location=_location(left_token)))

        # Another declaration may follow on the same line
        trailing = self.current_token()
        if trailing.line == first.line and not (
            trailing.is_name
            or trailing.type in (TokenType.SEMICOLON, TokenType.RBRACE, TokenType.EOF)
        ):
            raise self.error(f"Unexpected {trailing.describe()} after edge", trailing)

        return edges

    def _parse_path(self) -> tuple[str, str]:
        """Parse ``entity.field``; both names and the dot share one line."""
        entity = self.expect_name("entity name in edge endpoint")
        self._require_same_line(entity, f"'.' after '{entity.value}' in edge endpoint")
        dot = self.expect(TokenType.DOT, f"'.' after '{entity.value}' in edge endpoint")
        self._require_same_line(dot, f"field name after '{entity.value}.'")
        field = self.expect_name(f"field name after '{entity.value}.'")
        return entity.value, field.value

    def _require_same_line(self, previous: Token, what: str) -> None:
        if self.current_token().line != previous.line:
            raise self.error(f"Expected {what}, got end of line", previous)


def _location(token: Token) -> ir.SourceLocation:
    return ir.SourceLocation(line=token.line, column=token.column)
