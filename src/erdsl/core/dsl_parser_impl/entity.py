"""
Entity parsing for the erdsl DSL.

Handles entity blocks and the field declarations inside them.
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..diagnostics import DiagnosticCode
from ..errors import ParseError
from ..lexer import Token, TokenType


class EntityParserMixin:
    """
    Mixin providing entity and field parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    # Type stubs for methods provided by BaseParser
    if TYPE_CHECKING:
        expect: Any
        expect_name: Any
        advance: Any
        match: Any
        current_token: Any
        peek_token: Any
        error: Any
        retag: Any
        skip_separators: Any
        synchronize: Any
        statement_has_cardinality: Any
        diagnostics: Any

    def _opens_entity(self) -> bool:
        """True if the current tokens read ``name {``."""
        return bool(self.current_token().is_name and self.peek_token().type == TokenType.LBRACE)

    def parse_entity(self) -> ir.EntitySpec:
        """
        Parse an entity block: ``name { field* }``.

        Malformed fields are reported and skipped. An entity that is never
        closed is reported as ``MissingBlockTerminator`` and ends where the
        next entity block, an edge line or the end of input begins.
        """
        name_token = self.expect_name("entity name")
        self.expect(TokenType.LBRACE)

        fields: list[ir.FieldSpec] = []

        while True:
            self.skip_separators()

            if self.match(TokenType.RBRACE):
                self.advance()
                break

            if (
                self.match(TokenType.EOF)
                or self._opens_entity()
                or self.statement_has_cardinality()
            ):
                self.diagnostics.error(
                    DiagnosticCode.MISSING_BLOCK_TERMINATOR,
                    f"Entity '{name_token.value}' is missing its closing '}}'",
                    name_token.line,
                    name_token.column,
                    hint=self._terminator_hint(),
                )
                break

            start = self.current_token()
            try:
                fields.append(self.parse_field())
            except ParseError as exc:
                self.diagnostics.add_parse_error(exc)
                self.synchronize(start.line)

        return ir.EntitySpec(
            name=name_token.value,
            fields=fields,
            location=ir.SourceLocation(line=name_token.line, column=name_token.column),
        )

    def _terminator_hint(self) -> str:
        token = self.current_token()
        if token.type == TokenType.CARDINALITY and token.value.startswith("}"):
            return (
                f"'{token.value}' is read as a cardinality symbol; "
                "put a space between '}' and the symbol to close the entity"
            )
        return f"Add '}}' before {token.describe()} at line {token.line}"

    def parse_field(self) -> ir.FieldSpec:
        """
        Parse a field declaration: ``name type [PK|FK]*``.

        The type and modifiers must be on the same line as the name; ``PK`` and
        ``FK`` are only modifiers in that position. Another field may follow on
        the same line.
        """
        name_token = self.expect_name("field name")

        type_token = self.current_token()
        if type_token.type != TokenType.IDENTIFIER or type_token.line != name_token.line:
            raise self.error(
                f"Expected type for field '{name_token.value}', got {type_token.describe()}",
                type_token if type_token.line == name_token.line else name_token,
            )
        self.advance()
        type_token = self.retag(type_token, TokenType.TYPE)

        modifiers: list[ir.FieldModifier] = []
        while self._at_modifier(type_token):
            token = self.retag(self.advance(), TokenType.MODIFIER)
            modifier = ir.FieldModifier(token.value)
            if modifier in modifiers:
                self.diagnostics.warning(
                    DiagnosticCode.DUPLICATE_MODIFIER,
                    f"Modifier {modifier.value} repeated on field '{name_token.value}'",
                    token.line,
                    token.column,
                )
                continue
            modifiers.append(modifier)

        return ir.FieldSpec(
            name=name_token.value,
            type=type_token.value,
            modifiers=modifiers,
            location=ir.SourceLocation(line=name_token.line, column=name_token.column),
        )

    def _at_modifier(self, type_token: Token) -> bool:
        token = self.current_token()
        return (
            token.type == TokenType.IDENTIFIER
            and token.line == type_token.line
            and token.value in {m.value for m in ir.FieldModifier}
        )
