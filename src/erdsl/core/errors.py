"""
Error types for erdsl parsing and resolution.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class ErdslError(Exception):
    """Base exception for all erdsl errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(ErdslError):
    """
    Raised inside the parser when a declaration cannot be parsed.

    The parser catches it at the nearest declaration boundary, records it as a
    diagnostic and resynchronizes, so it never escapes ``parse_dsl``.

    Attributes:
        code: Diagnostic code the error is recorded under
        hint: Optional suggestion shown with the diagnostic
    """

    def __init__(
        self,
        message: str,
        context: Optional["ErrorContext"] = None,
        code: str = "UnexpectedToken",
        hint: str | None = None,
    ):
        self.code = code
        self.hint = hint
        super().__init__(message, context)


class DiagramError(ErdslError):
    """
    Raised by ``CompileResult.raise_for_errors`` when a caller decides that
    error diagnostics are fatal.

    Attributes:
        diagnostics: The error diagnostics that triggered the exception
    """

    def __init__(self, message: str, diagnostics: list | None = None):
        self.diagnostics = diagnostics or []
        super().__init__(message)


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source document, if it came from one
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source lines around the error
    """

    file: Path | None
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "blog.erd:10:5"
        """
        location = f"{self.file or '<input>'}:{self.line}:{self.column}"

        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet starts up to 2 lines before the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def extract_snippet(source: str, line: int, context: int = 2) -> str:
    """Return the source lines from ``line - context`` to ``line + context``."""
    lines = source.splitlines()
    start = max(1, line - context)
    end = min(len(lines), line + context)
    return "\n".join(lines[start - 1 : end])


def make_parse_error(
    message: str,
    file: Path | None,
    line: int,
    column: int,
    code: str = "UnexpectedToken",
    hint: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        file: Source file path, or None for in-memory text
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        code: Diagnostic code to record the error under
        hint: Optional suggestion

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(file=file, line=line, column=column)
    return ParseError(message, context, code=code, hint=hint)
