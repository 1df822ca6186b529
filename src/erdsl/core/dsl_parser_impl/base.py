"""
Base parser class for the erdsl DSL.

Provides token navigation, matching, error creation and the resynchronization
used to recover from malformed declarations.
"""

from dataclasses import replace
from pathlib import Path

from ..diagnostics import DiagnosticCode, DiagnosticLog
from ..errors import ParseError, make_parse_error
from ..lexer import QUOTE, Token, TokenType
from ..options import CompilerOptions


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    This class provides the foundation for recursive descent parsing,
    including token navigation, matching, and error generation.
    """

    def __init__(
        self,
        tokens: list[Token],
        file: Path | None = None,
        diagnostics: DiagnosticLog | None = None,
        options: CompilerOptions | None = None,
    ):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer, ending with EOF
            file: Source file path (for error reporting)
            diagnostics: Log to record parse errors in
            options: Compiler options
        """
        self.tokens = tokens
        self.file = file
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog(file)
        self.options = options or CompilerOptions()
        self.pos = 0

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def error(
        self,
        message: str,
        token: Token | None = None,
        code: DiagnosticCode = DiagnosticCode.UNEXPECTED_TOKEN,
        hint: str | None = None,
    ) -> ParseError:
        """Create a ParseError located at ``token`` (default: current token)."""
        token = token or self.current_token()
        return make_parse_error(
            message, self.file, token.line, token.column, code=code.value, hint=hint
        )

    def expect(self, token_type: TokenType, what: str | None = None) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            ParseError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            expected = what or f"'{token_type.value}'"
            raise self.error(f"Expected {expected}, got {token.describe()}")
        return self.advance()

    def expect_name(self, what: str) -> Token:
        """
        Expect a bare or backtick-quoted name.

        Both spellings yield the same token value, so `uuid` and uuid name the
        same thing once consumed.

        Raises:
            ParseError: If the current token cannot be a name
        """
        token = self.current_token()
        if token.is_name:
            return self.advance()

        hint = None
        if token.type == TokenType.ERD:
            hint = f"'{token.value}' is a keyword; quote it to use it as a name: {QUOTE}{token.value}{QUOTE}"
        raise self.error(f"Expected {what}, got {token.describe()}", token, hint=hint)

    def retag(self, token: Token, token_type: TokenType) -> Token:
        """Return ``token`` reclassified by position (e.g. as TYPE or MODIFIER)."""
        retagged = replace(token, type=token_type)
        self.tokens[self.pos - 1] = retagged
        return retagged

    def skip_separators(self) -> None:
        """Skip optional ';' separators."""
        while self.match(TokenType.SEMICOLON):
            self.advance()

    def at_line_start(self) -> bool:
        """True if the current token is the first token on its line."""
        if self.pos == 0:
            return True
        return self.current_token().line > self.tokens[self.pos - 1].line

    def statement_tokens(self) -> list[Token]:
        """
        Tokens of the statement starting at the current token.

        A statement ends at a line break, ';', a brace, or EOF.
        """
        result: list[Token] = []
        offset = 0
        line = self.current_token().line
        while True:
            token = self.peek_token(offset)
            if token.type in (
                TokenType.EOF,
                TokenType.SEMICOLON,
                TokenType.LBRACE,
                TokenType.RBRACE,
            ):
                break
            if token.line != line:
                break
            result.append(token)
            offset += 1
        return result

    def statement_has_cardinality(self) -> bool:
        """True if the current statement contains a cardinality symbol (an edge)."""
        return any(t.type == TokenType.CARDINALITY for t in self.statement_tokens())

    def synchronize(self, line: int) -> None:
        """
        Skip forward to the next declaration boundary after an error on ``line``.

        Stops before a token that starts a later line, after a ';', or before
        the '}' closing the current block. Nested blocks opened while skipping
        are skipped as a whole.
        """
        depth = 0
        while not self.match(TokenType.EOF):
            token = self.current_token()
            if depth == 0:
                if token.type == TokenType.RBRACE:
                    return
                if token.type == TokenType.SEMICOLON:
                    self.advance()
                    return
                if token.line > line and self.at_line_start():
                    return
            if token.type == TokenType.LBRACE:
                depth += 1
            elif token.type == TokenType.RBRACE:
                depth -= 1
                if depth == 0:
                    # Resume after the skipped block
                    line = token.line
            self.advance()
