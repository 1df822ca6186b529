"""
Diagnostics collected while lexing, parsing and resolving a diagram.

Every phase of one compilation appends to the same ``DiagnosticLog``; nothing
is raised to the caller. Whether a diagnostic is fatal is the caller's call.
"""

from __future__ import annotations

from collections import Counter
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .errors import ErrorContext, ParseError, extract_snippet


class Severity(str, Enum):
    """Severity of a diagnostic."""

    ERROR = "error"
    WARNING = "warning"


class DiagnosticCode(str, Enum):
    """Stable diagnostic codes."""

    # Lexical
    UNTERMINATED_QUOTE = "UnterminatedQuote"
    UNEXPECTED_CHARACTER = "UnexpectedCharacter"
    # Syntactic
    UNEXPECTED_TOKEN = "UnexpectedToken"
    MISSING_BLOCK_TERMINATOR = "MissingBlockTerminator"
    SECTION_ORDER = "SectionOrder"
    DUPLICATE_MODIFIER = "DuplicateModifier"
    # Semantic
    DUPLICATE_ENTITY = "DuplicateEntity"
    DUPLICATE_FIELD = "DuplicateField"
    UNRESOLVED_ENDPOINT = "UnresolvedEndpoint"


class Diagnostic(BaseModel):
    """
    A single position-tagged problem report.

    Attributes:
        severity: error or warning
        code: Stable diagnostic code
        message: Human-readable description
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        file: Source file, if the text came from one
        hint: Optional suggestion for fixing the problem
    """

    severity: Severity
    code: DiagnosticCode
    message: str
    line: int
    column: int
    file: str | None = None
    hint: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def format(self, source: str | None = None) -> str:
        """
        Format as ``file:line:column: severity[code]: message``.

        When the source text is given, the offending lines are appended with a
        marker under the reported column.
        """
        context = ErrorContext(
            file=Path(self.file) if self.file else None,
            line=self.line,
            column=self.column,
            snippet=extract_snippet(source, self.line) if source else None,
        )
        location, _, snippet = context.format().partition("\n")
        text = f"{location}: {self.severity.value}[{self.code.value}]: {self.message}"
        if self.hint:
            text += f"\n  hint: {self.hint}"
        if snippet:
            text += f"\n{snippet}"
        return text

    def __str__(self) -> str:
        return self.format()


class DiagnosticLog:
    """
    Ordered collector of diagnostics for one compilation.

    Diagnostics are kept in the order they were reported, which is phase
    order (lexer, parser, resolver) and source order within a phase.
    """

    def __init__(self, file: Path | str | None = None):
        self.file = str(file) if file is not None else None
        self._items: list[Diagnostic] = []

    def add(
        self,
        severity: Severity,
        code: DiagnosticCode,
        message: str,
        line: int,
        column: int,
        hint: str | None = None,
    ) -> Diagnostic:
        """Record a diagnostic and return it."""
        diagnostic = Diagnostic(
            severity=severity,
            code=code,
            message=message,
            line=line,
            column=column,
            file=self.file,
            hint=hint,
        )
        self._items.append(diagnostic)
        return diagnostic

    def error(
        self, code: DiagnosticCode, message: str, line: int, column: int, hint: str | None = None
    ) -> Diagnostic:
        return self.add(Severity.ERROR, code, message, line, column, hint)

    def warning(
        self, code: DiagnosticCode, message: str, line: int, column: int, hint: str | None = None
    ) -> Diagnostic:
        return self.add(Severity.WARNING, code, message, line, column, hint)

    def add_parse_error(self, exc: ParseError) -> Diagnostic:
        """Record a ParseError raised inside the parser."""
        line = exc.context.line if exc.context else 0
        column = exc.context.column if exc.context else 0
        return self.error(DiagnosticCode(exc.code), exc.message, line, column, exc.hint)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._items)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self._items)

    def by_code(self, code: DiagnosticCode) -> list[Diagnostic]:
        return [d for d in self._items if d.code == code]

    def counts(self) -> Counter[DiagnosticCode]:
        """Number of diagnostics per code."""
        return Counter(d.code for d in self._items)

    def format(self, source: str | None = None) -> str:
        """Format every diagnostic, separated by blank lines."""
        return "\n\n".join(d.format(source) for d in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)
