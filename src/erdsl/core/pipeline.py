"""
Compilation pipeline: text -> tokens -> DiagramSpec -> SchemaGraph.

``compile_erd`` always returns a result. Every problem found along the way is
in ``CompileResult.diagnostics``; deciding which ones are fatal is left to the
caller.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from . import ir
from .diagnostics import Diagnostic, DiagnosticLog
from .dsl_parser_impl import parse_dsl
from .errors import DiagramError
from .options import CompilerOptions
from .resolver import build_schema_graph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompileResult:
    """
    Output of one compilation.

    Attributes:
        graph: Best-effort resolved graph
        diagram: Parsed diagram, duplicates and unresolved edges included
        diagnostics: Ordered diagnostics from every phase
    """

    graph: ir.SchemaGraph
    diagram: ir.DiagramSpec
    diagnostics: tuple[Diagnostic, ...]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_error]

    @property
    def ok(self) -> bool:
        """True when no error diagnostics were reported."""
        return not self.errors

    def raise_for_errors(self) -> None:
        """
        Raise if any error diagnostic was reported.

        Raises:
            DiagramError: Listing every error diagnostic
        """
        errors = self.errors
        if errors:
            summary = "\n".join(f"  - {d}" for d in errors)
            raise DiagramError(f"Diagram has {len(errors)} error(s):\n{summary}", errors)


def compile_erd(
    text: str,
    *,
    file: Path | None = None,
    options: CompilerOptions | None = None,
) -> CompileResult:
    """
    Parse and resolve one erdsl document.

    Args:
        text: DSL source text
        file: Source file path, used only in diagnostics
        options: Compiler options

    Returns:
        CompileResult with the graph, the parsed diagram and all diagnostics
    """
    diagnostics = DiagnosticLog(file)

    diagram = parse_dsl(text, file, diagnostics, options)
    graph = build_schema_graph(diagram, diagnostics)

    logger.debug(
        "Compiled %s: %d entities, %d edges, %d error(s), %d warning(s)",
        file or "<input>",
        len(graph.entities),
        len(graph.edges),
        len(diagnostics.errors),
        len(diagnostics.warnings),
    )
    return CompileResult(graph=graph, diagram=diagram, diagnostics=tuple(diagnostics))
