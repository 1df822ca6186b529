"""
erdsl DSL Parser Package.

The parser is built using mixins to separate parsing logic by construct type.

The main exports are:
- Parser: The complete parser class
- parse_dsl: Convenience function to tokenize and parse DSL text

Usage:
    from erdsl.core.dsl_parser_impl import parse_dsl

    diagram = parse_dsl(text, diagnostics=log)
"""

import logging
from pathlib import Path

from .. import ir
from ..diagnostics import DiagnosticCode, DiagnosticLog
from ..errors import ParseError
from ..lexer import Token, TokenType, tokenize
from ..options import CompilerOptions
from .base import BaseParser
from .edge import EdgeParserMixin
from .entity import EntityParserMixin

logger = logging.getLogger(__name__)


class Parser(
    BaseParser,
    EntityParserMixin,
    EdgeParserMixin,
):
    """
    Complete erdsl DSL parser.

    Never raises for malformed input: every syntax error is recorded in the
    diagnostic log and parsing resumes at the next declaration boundary.
    """

    def parse(self) -> ir.DiagramSpec:
        """
        Parse the whole document.

        Grammar:
            Diagram := 'erd' Name? '{' (EntityDecl | EdgeDecl | ';')* '}'
        """
        if not self._seek_diagram():
            return ir.DiagramSpec()

        erd_token = self.advance()
        name = self._parse_diagram_name(erd_token)

        if self.match(TokenType.LBRACE):
            self.advance()
        else:
            # Parse the body anyway so later declarations are still checked
            token = self.current_token()
            self.diagnostics.add_parse_error(
                self.error(f"Expected '{{' to open diagram, got {token.describe()}")
            )

        entities: list[ir.EntitySpec] = []
        edges: list[ir.EdgeSpec] = []

        while True:
            self.skip_separators()

            if self.match(TokenType.RBRACE):
                self.advance()
                self._check_trailing_content()
                break

            if self.match(TokenType.EOF):
                self.diagnostics.error(
                    DiagnosticCode.MISSING_BLOCK_TERMINATOR,
                    "Diagram block is missing its closing '}'",
                    erd_token.line,
                    erd_token.column,
                    hint="Add '}' at the end of the document",
                )
                break

            start = self.current_token()
            try:
                if self.statement_has_cardinality():
                    edges.extend(self.parse_edges())
                elif self._opens_entity():
                    if edges and self.options.strict_sections:
                        self.diagnostics.warning(
                            DiagnosticCode.SECTION_ORDER,
                            f"Entity '{start.value}' is declared after the first edge",
                            start.line,
                            start.column,
                            hint="Declare all entities before the edges",
                        )
                    entities.append(self.parse_entity())
                else:
                    raise self.error(
                        f"Expected entity declaration or edge, got {start.describe()}",
                        start,
                        hint=self._declaration_hint(start),
                    )
            except ParseError as exc:
                self.diagnostics.add_parse_error(exc)
                self.synchronize(start.line)

        return ir.DiagramSpec(
            name=name,
            entities=entities,
            edges=edges,
            location=_location(erd_token),
        )

    def _seek_diagram(self) -> bool:
        """Move to the 'erd' keyword, reporting anything before it once."""
        if self.match(TokenType.ERD):
            return True

        token = self.current_token()
        self.diagnostics.add_parse_error(
            self.error(f"Expected 'erd' to start the diagram, got {token.describe()}", token)
        )
        while not self.match(TokenType.ERD, TokenType.EOF):
            self.advance()
        return self.match(TokenType.ERD)

    def _parse_diagram_name(self, erd_token: Token) -> str | None:
        if self.current_token().is_name:
            return self.advance().value

        if self.options.require_diagram_name:
            token = self.current_token()
            self.diagnostics.add_parse_error(
                self.error(
                    f"Expected diagram name after 'erd', got {token.describe()}",
                    token,
                    hint="Name the diagram, e.g. 'erd blog {'",
                )
            )
        return None

    def _declaration_hint(self, token: Token) -> str | None:
        if token.is_name and self.peek_token().type == TokenType.DOT:
            return "Edges need a cardinality symbol between endpoints, e.g. 'a.id o--o b.a_id'"
        if token.is_name:
            return f"Open an entity block with '{token.value} {{'"
        return None

    def _check_trailing_content(self) -> None:
        """Anything after the diagram block is an error, reported once."""
        if self.match(TokenType.EOF):
            return
        token = self.current_token()
        self.diagnostics.add_parse_error(
            self.error(
                f"Unexpected {token.describe()} after the diagram block",
                token,
                hint="A document holds exactly one 'erd' block",
            )
        )
        while not self.match(TokenType.EOF):
            self.advance()


def _location(token: Token) -> ir.SourceLocation:
    return ir.SourceLocation(line=token.line, column=token.column)


def parse_dsl(
    text: str,
    file: Path | None = None,
    diagnostics: DiagnosticLog | None = None,
    options: CompilerOptions | None = None,
) -> ir.DiagramSpec:
    """
    Parse complete DSL text.

    Args:
        text: DSL source text
        file: Source file path, used only in diagnostics
        diagnostics: Log to record lexical and syntax errors in
        options: Compiler options

    Returns:
        Best-effort DiagramSpec
    """
    if diagnostics is None:
        diagnostics = DiagnosticLog(file)

    # Tokenize
    tokens = tokenize(text, file, diagnostics)

    # Parse
    parser = Parser(tokens, file, diagnostics, options)
    diagram = parser.parse()

    logger.debug(
        "Parsed diagram %s: %d entities, %d edges",
        diagram.name,
        len(diagram.entities),
        len(diagram.edges),
    )
    return diagram


__all__ = [
    "Parser",
    "parse_dsl",
    "BaseParser",
    "EntityParserMixin",
    "EdgeParserMixin",
]
