"""
Lexer/Tokenizer for the erdsl DSL.

Converts raw DSL text into a stream of tokens with source location tracking.
Whitespace and newlines separate tokens but are not emitted; the parser uses
token line numbers where line structure matters.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .diagnostics import DiagnosticCode, DiagnosticLog
from .ir import CARDINALITY_PATTERN, CARDINALITY_START_CHARS

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types in the erdsl DSL."""

    # Names
    IDENTIFIER = "IDENTIFIER"
    QUOTED_IDENTIFIER = "QUOTED_IDENTIFIER"

    # Assigned by the parser when an identifier is consumed in that position
    TYPE = "TYPE"
    MODIFIER = "MODIFIER"

    # Keywords
    ERD = "erd"

    # Punctuation
    LBRACE = "{"
    RBRACE = "}"
    DOT = "."
    SEMICOLON = ";"
    CARDINALITY = "CARDINALITY"

    # Special
    EOF = "EOF"


KEYWORDS = {
    "erd",
}

QUOTE = "`"


@dataclass(frozen=True)
class Token:
    """
    A single token in the DSL.

    Attributes:
        type: Type of token
        value: String value of the token (backticks removed for quoted names)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    @property
    def is_name(self) -> bool:
        """True for tokens that can name an entity or field."""
        return self.type in (TokenType.IDENTIFIER, TokenType.QUOTED_IDENTIFIER)

    def describe(self) -> str:
        """Short description used in diagnostics."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.QUOTED_IDENTIFIER:
            return f"{QUOTE}{self.value}{QUOTE}"
        return f"'{self.value}'"

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for the erdsl DSL.

    Lexical errors are recorded in the diagnostic log and lexing continues, so
    ``tokenize`` always returns a token list ending in EOF.
    """

    def __init__(self, text: str, file: Path | None = None, diagnostics: DiagnosticLog | None = None):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file path (for error reporting)
            diagnostics: Log to record lexical errors in
        """
        self.text = text
        self.file = file
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog(file)
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self) -> None:
        """Skip whitespace characters, including newlines."""
        while (ch := self.current_char()) is not None and ch.isspace():
            self.advance()

    def skip_comment(self) -> None:
        """Skip comment (from // to end of line)."""
        while self.current_char() not in (None, "\n"):
            self.advance()

    def read_identifier(self) -> str:
        """Read a bare identifier or keyword."""
        chars = []
        current = self.current_char()
        while current and (current.isascii() and (current.isalnum() or current == "_")):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def read_quoted_identifier(self) -> str:
        """
        Read a backtick-quoted identifier.

        An unterminated quote is reported at the opening backtick and the rest
        of the line becomes the identifier; the newline is left for the main
        loop so lexing resumes on the next line.
        """
        start_line = self.line
        start_col = self.column
        self.advance()  # skip opening quote

        chars = []
        while (current := self.current_char()) not in (None, QUOTE, "\n"):
            chars.append(current)
            self.advance()

        if self.current_char() == QUOTE:
            self.advance()  # skip closing quote
        else:
            self.diagnostics.error(
                DiagnosticCode.UNTERMINATED_QUOTE,
                "Unterminated quoted identifier",
                start_line,
                start_col,
                hint=f"Close the name with a matching {QUOTE}",
            )
        return "".join(chars).rstrip("\r")

    def read_cardinality(self) -> str | None:
        """Read a crow's-foot symbol at the current position, if there is one."""
        match = CARDINALITY_PATTERN.match(self.text, self.pos)
        if not match:
            return None
        for _ in range(match.end() - match.start()):
            self.advance()
        return match.group(0)

    def _emit(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        self.tokens.append(Token(token_type, value, line, column))

    def _after_dot(self) -> bool:
        """True if the current character directly follows a '.'."""
        return self.pos > 0 and self.text[self.pos - 1] == "."

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF
        """
        while True:
            self.skip_whitespace()

            ch = self.current_char()
            if ch is None:
                break

            # Save position for token
            token_line = self.line
            token_col = self.column

            # Comments
            if ch == "/" and self.peek_char() == "/":
                self.skip_comment()
                continue

            # Cardinality symbols; a name directly after a dot is never one
            if ch in CARDINALITY_START_CHARS and not self._after_dot():
                symbol = self.read_cardinality()
                if symbol is not None:
                    self._emit(TokenType.CARDINALITY, symbol, token_line, token_col)
                    continue

            if ch == QUOTE:
                value = self.read_quoted_identifier()
                self._emit(TokenType.QUOTED_IDENTIFIER, value, token_line, token_col)

            # Identifiers and keywords
            elif ch.isascii() and (ch.isalpha() or ch == "_"):
                value = self.read_identifier()
                token_type = TokenType(value) if value in KEYWORDS else TokenType.IDENTIFIER
                self._emit(token_type, value, token_line, token_col)

            elif ch == "{":
                self.advance()
                self._emit(TokenType.LBRACE, ch, token_line, token_col)

            elif ch == "}":
                self.advance()
                self._emit(TokenType.RBRACE, ch, token_line, token_col)

            elif ch == ".":
                self.advance()
                self._emit(TokenType.DOT, ch, token_line, token_col)

            elif ch == ";":
                self.advance()
                self._emit(TokenType.SEMICOLON, ch, token_line, token_col)

            else:
                self.diagnostics.error(
                    DiagnosticCode.UNEXPECTED_CHARACTER,
                    f"Unexpected character: {ch!r}",
                    token_line,
                    token_col,
                )
                self.advance()

        self._emit(TokenType.EOF, "", self.line, self.column)
        logger.debug("Tokenized %d tokens from %s", len(self.tokens), self.file or "<input>")
        return self.tokens


def tokenize(
    text: str, file: Path | None = None, diagnostics: DiagnosticLog | None = None
) -> list[Token]:
    """
    Convenience function to tokenize DSL text.

    Args:
        text: Source text
        file: Source file path
        diagnostics: Log to record lexical errors in

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file, diagnostics)
    return lexer.tokenize()
