"""Core erdsl functionality: IR, lexer, parser, resolver, diagnostics, printer."""

from . import ir
from .diagnostics import Diagnostic, DiagnosticCode, DiagnosticLog, Severity
from .dsl_parser_impl import parse_dsl
from .errors import DiagramError, ErdslError, ErrorContext, ParseError
from .lexer import Token, TokenType, tokenize
from .options import CompilerOptions, load_options
from .pipeline import CompileResult, compile_erd
from .printer import format_diagram, format_graph
from .resolver import SymbolTable, build_schema_graph

__all__ = [
    "ir",
    "ErdslError",
    "ParseError",
    "DiagramError",
    "ErrorContext",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticLog",
    "Severity",
    "Token",
    "TokenType",
    "tokenize",
    "parse_dsl",
    "SymbolTable",
    "build_schema_graph",
    "CompilerOptions",
    "load_options",
    "CompileResult",
    "compile_erd",
    "format_diagram",
    "format_graph",
]
