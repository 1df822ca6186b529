"""
erdsl - parser and resolver for textual entity-relationship diagrams.

Turns ``erd name { ... }`` documents into a validated, immutable SchemaGraph
plus position-tagged diagnostics.
"""

from ._version import get_version
from .core import ir
from .core.diagnostics import Diagnostic, DiagnosticCode, Severity
from .core.errors import DiagramError, ErdslError, ParseError
from .core.options import CompilerOptions, load_options
from .core.pipeline import CompileResult, compile_erd
from .core.printer import format_diagram, format_graph

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "compile_erd",
    "CompileResult",
    "CompilerOptions",
    "load_options",
    "Diagnostic",
    "DiagnosticCode",
    "Severity",
    "ErdslError",
    "ParseError",
    "DiagramError",
    "format_diagram",
    "format_graph",
]
