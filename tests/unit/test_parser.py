"""Tests for the erdsl recursive-descent parser."""

from erdsl.core import ir
from erdsl.core.diagnostics import DiagnosticCode, DiagnosticLog
from erdsl.core.dsl_parser_impl import Parser, parse_dsl
from erdsl.core.lexer import TokenType, tokenize
from erdsl.core.options import CompilerOptions


def _parse(source: str, options: CompilerOptions | None = None) -> tuple[ir.DiagramSpec, DiagnosticLog]:
    log = DiagnosticLog()
    diagram = parse_dsl(source, diagnostics=log, options=options)
    return diagram, log


def _codes(log: DiagnosticLog) -> list[DiagnosticCode]:
    return [d.code for d in log]


class TestDiagram:
    def test_empty_diagram(self):
        diagram, log = _parse("erd empty {}")
        assert diagram.name == "empty"
        assert diagram.entities == []
        assert diagram.edges == []
        assert len(log) == 0

    def test_diagram_location_is_erd_keyword(self):
        diagram, _ = _parse("\n  erd blog {}")
        assert diagram.location == ir.SourceLocation(line=2, column=3)

    def test_missing_name_is_reported_by_default(self):
        diagram, log = _parse("erd { users { id int } }")
        assert diagram.name is None
        assert _codes(log) == [DiagnosticCode.UNEXPECTED_TOKEN]
        assert [e.name for e in diagram.entities] == ["users"]

    def test_missing_name_allowed_by_option(self):
        diagram, log = _parse(
            "erd { users { id int } }", CompilerOptions(require_diagram_name=False)
        )
        assert diagram.name is None
        assert len(log) == 0

    def test_quoted_diagram_name(self):
        diagram, _ = _parse("erd `my diagram` {}")
        assert diagram.name == "my diagram"

    def test_content_before_erd(self):
        diagram, log = _parse("users\nerd blog { users { id int } }")
        assert _codes(log) == [DiagnosticCode.UNEXPECTED_TOKEN]
        assert log.diagnostics[0].line == 1
        assert [e.name for e in diagram.entities] == ["users"]

    def test_no_erd_block_at_all(self):
        diagram, log = _parse("users { id int }")
        assert diagram == ir.DiagramSpec()
        assert _codes(log) == [DiagnosticCode.UNEXPECTED_TOKEN]

    def test_content_after_diagram_reported_once(self):
        diagram, log = _parse("erd blog { users { id int } }\nposts { id int }\nmore")
        assert _codes(log) == [DiagnosticCode.UNEXPECTED_TOKEN]
        assert log.diagnostics[0].line == 2
        assert [e.name for e in diagram.entities] == ["users"]

    def test_missing_diagram_brace_at_eof(self):
        diagram, log = _parse("erd blog {\n  users { id int }\n")
        assert _codes(log) == [DiagnosticCode.MISSING_BLOCK_TERMINATOR]
        assert (log.diagnostics[0].line, log.diagnostics[0].column) == (1, 1)
        assert [e.name for e in diagram.entities] == ["users"]

    def test_missing_opening_brace_still_parses_body(self):
        diagram, log = _parse("erd blog\n  users { id int }\n}")
        assert _codes(log) == [DiagnosticCode.UNEXPECTED_TOKEN]
        assert [e.name for e in diagram.entities] == ["users"]


class TestEntities:
    def test_fields_in_declaration_order(self, blog_dsl: str):
        diagram, log = _parse(blog_dsl)
        assert len(log) == 0
        users, posts = diagram.entities
        assert [f.name for f in users.fields] == ["id", "uuid", "email"]
        assert [f.name for f in posts.fields] == ["id", "title", "created_by"]

    def test_field_type_and_modifier(self, blog_dsl: str):
        diagram, _ = _parse(blog_dsl)
        posts = diagram.entities[1]
        created_by = posts.get_field("created_by")
        assert created_by is not None
        assert created_by.type == "int"
        assert created_by.modifiers == [ir.FieldModifier.FK]
        assert created_by.is_foreign_key
        assert not created_by.is_primary_key

    def test_field_without_modifier(self):
        diagram, _ = _parse("erd d { users { email text } }")
        field = diagram.entities[0].fields[0]
        assert field.modifiers == []

    def test_type_is_opaque(self):
        diagram, log = _parse("erd d { t { a money; b geography_point } }")
        assert len(log) == 0
        assert [f.type for f in diagram.entities[0].fields] == ["money", "geography_point"]

    def test_several_fields_on_one_line(self):
        diagram, log = _parse("erd d { posts { id int PK created_by int FK } }")
        assert len(log) == 0
        fields = diagram.entities[0].fields
        assert [(f.name, f.type, f.modifiers) for f in fields] == [
            ("id", "int", [ir.FieldModifier.PK]),
            ("created_by", "int", [ir.FieldModifier.FK]),
        ]

    def test_both_modifiers(self):
        diagram, _ = _parse("erd d { t { id int PK FK } }")
        assert diagram.entities[0].fields[0].modifiers == [
            ir.FieldModifier.PK,
            ir.FieldModifier.FK,
        ]

    def test_repeated_modifier_warns_and_keeps_one(self):
        diagram, log = _parse("erd d { t { id int PK PK } }")
        assert _codes(log) == [DiagnosticCode.DUPLICATE_MODIFIER]
        assert log.diagnostics[0].severity.value == "warning"
        assert diagram.entities[0].fields[0].modifiers == [ir.FieldModifier.PK]

    def test_field_named_pk_on_its_own_line(self):
        diagram, log = _parse("erd d {\n  t {\n    id int\n    PK text\n  }\n}")
        assert len(log) == 0
        assert [f.name for f in diagram.entities[0].fields] == ["id", "PK"]

    def test_quoted_field_names(self):
        diagram, log = _parse("erd d { t { `uuid` uuid; `text` text; `erd` int } }")
        assert len(log) == 0
        assert [f.name for f in diagram.entities[0].fields] == ["uuid", "text", "erd"]

    def test_type_named_like_field(self):
        diagram, _ = _parse("erd d { t { uuid uuid } }")
        field = diagram.entities[0].fields[0]
        assert (field.name, field.type) == ("uuid", "uuid")

    def test_field_location(self):
        diagram, _ = _parse("erd d {\n  t {\n    id int\n  }\n}")
        assert diagram.entities[0].fields[0].location == ir.SourceLocation(line=3, column=5)

    def test_duplicates_are_kept_in_ast(self):
        diagram, log = _parse("erd d { t { id int PK\n id int } t { x int } }")
        assert len(log) == 0
        assert [e.name for e in diagram.entities] == ["t", "t"]
        assert len(diagram.entities[0].fields) == 2

    def test_parser_retags_type_and_modifier_tokens(self):
        tokens = tokenize("erd d { t { id int PK } }")
        Parser(tokens).parse()
        assert [t.type for t in tokens[5:8]] == [
            TokenType.IDENTIFIER,
            TokenType.TYPE,
            TokenType.MODIFIER,
        ]


class TestEdges:
    def test_simple_edge(self, blog_dsl: str):
        diagram, _ = _parse(blog_dsl)
        [edge] = diagram.edges
        assert edge.left.path == "posts.created_by"
        assert edge.right.path == "users.id"
        assert edge.cardinality == ir.Cardinality(
            left=ir.Multiplicity.ZERO_OR_ONE, right=ir.Multiplicity.ZERO_OR_ONE
        )

    def test_crows_foot_multiplicities(self):
        diagram, _ = _parse("erd d { a.id ||--o{ b.a_id }")
        edge = diagram.edges[0]
        assert edge.left.multiplicity == ir.Multiplicity.EXACTLY_ONE
        assert edge.right.multiplicity == ir.Multiplicity.ZERO_OR_MANY

    def test_edge_may_precede_entities(self):
        diagram, log = _parse("erd d {\n  a.id o--o b.id\n  a { id int }\n  b { id int }\n}")
        assert len(log) == 0
        assert len(diagram.edges) == 1
        assert [e.name for e in diagram.entities] == ["a", "b"]

    def test_quoted_endpoint_field(self):
        diagram, _ = _parse("erd d { a.`uuid` o--o b.uuid }")
        edge = diagram.edges[0]
        assert edge.left.field == edge.right.field == "uuid"

    def test_chained_edges(self):
        diagram, log = _parse("erd d { a.x o--o b.y ||--o{ c.z }")
        assert len(log) == 0
        assert [(e.left.path, e.right.path) for e in diagram.edges] == [
            ("a.x", "b.y"),
            ("b.y", "c.z"),
        ]
        assert diagram.edges[1].cardinality.symbol == "||--o{"

    def test_two_edges_on_one_line(self):
        diagram, log = _parse("erd d { a.x o--o b.y c.z o--o d.w }")
        assert len(log) == 0
        assert len(diagram.edges) == 2

    def test_parallel_edges_are_preserved(self):
        diagram, _ = _parse("erd d {\n  a.x o--o b.y\n  a.x o--o b.y\n}")
        assert len(diagram.edges) == 2

    def test_edge_location_is_left_endpoint(self):
        diagram, _ = _parse("erd d {\n    a.x o--o b.y\n}")
        assert diagram.edges[0].location == ir.SourceLocation(line=2, column=5)
        assert diagram.edges[0].right.location == ir.SourceLocation(line=2, column=14)

    def test_strict_sections_warns_on_entity_after_edge(self):
        source = "erd d {\n  a.x o--o b.y\n  a { x int }\n}"
        diagram, log = _parse(source, CompilerOptions(strict_sections=True))
        assert _codes(log) == [DiagnosticCode.SECTION_ORDER]
        assert log.diagnostics[0].line == 3
        assert len(diagram.entities) == 1

    def test_interleaving_allowed_by_default(self):
        _, log = _parse("erd d {\n  a.x o--o b.y\n  a { x int }\n}")
        assert len(log) == 0


class TestRecovery:
    def test_field_missing_type_does_not_hide_later_errors(self):
        source = "erd d {\n  t {\n    id\n    name text\n    age\n  }\n}"
        diagram, log = _parse(source)
        assert _codes(log) == [DiagnosticCode.UNEXPECTED_TOKEN] * 2
        assert [d.line for d in log] == [3, 5]
        assert [f.name for f in diagram.entities[0].fields] == ["name"]

    def test_edge_without_cardinality(self):
        source = "erd d {\n  a.x -- b.y\n  b { y int }\n}"
        diagram, log = _parse(source)
        assert _codes(log) == [
            DiagnosticCode.UNEXPECTED_CHARACTER,
            DiagnosticCode.UNEXPECTED_CHARACTER,
            DiagnosticCode.UNEXPECTED_TOKEN,
        ]
        assert log.diagnostics[-1].hint is not None
        assert diagram.edges == []
        assert [e.name for e in diagram.entities] == ["b"]

    def test_endpoint_missing_field(self):
        diagram, log = _parse("erd d {\n  a. o--o b.y\n  c { z int }\n}")
        assert _codes(log) == [DiagnosticCode.UNEXPECTED_TOKEN]
        assert diagram.edges == []
        assert [e.name for e in diagram.entities] == ["c"]

    def test_unclosed_entity_before_next_entity(self):
        source = "erd d {\n  users {\n    id int PK\n  posts {\n    id int PK\n  }\n}"
        diagram, log = _parse(source)
        assert _codes(log) == [DiagnosticCode.MISSING_BLOCK_TERMINATOR]
        assert (log.diagnostics[0].line, log.diagnostics[0].column) == (2, 3)
        assert [e.name for e in diagram.entities] == ["users", "posts"]
        assert [f.name for f in diagram.entities[0].fields] == ["id"]

    def test_unclosed_entity_at_eof(self):
        _, log = _parse("erd d {\n  users {\n    id int PK\n")
        assert _codes(log) == [
            DiagnosticCode.MISSING_BLOCK_TERMINATOR,
            DiagnosticCode.MISSING_BLOCK_TERMINATOR,
        ]

    def test_malformed_block_is_skipped_whole(self):
        source = "erd d {\n  bad thing { x int }\n  good { y int }\n}"
        diagram, log = _parse(source)
        assert _codes(log) == [DiagnosticCode.UNEXPECTED_TOKEN]
        assert [e.name for e in diagram.entities] == ["good"]

    def test_bare_keyword_as_name_has_quoting_hint(self):
        _, log = _parse("erd d { t { erd int } }")
        [diagnostic] = log.diagnostics
        assert diagnostic.code == DiagnosticCode.UNEXPECTED_TOKEN
        assert "`erd`" in (diagnostic.hint or "")

    def test_unterminated_quote_in_field(self):
        source = "erd d {\n  t {\n    `uuid uuid\n    id int\n  }\n}"
        diagram, log = _parse(source)
        assert _codes(log) == [DiagnosticCode.UNTERMINATED_QUOTE, DiagnosticCode.UNEXPECTED_TOKEN]
        assert [f.name for f in diagram.entities[0].fields] == ["id"]

    def test_semicolon_ends_skipped_declaration(self):
        diagram, log = _parse("erd d { t { id; name text } }")
        assert _codes(log) == [DiagnosticCode.UNEXPECTED_TOKEN]
        assert [f.name for f in diagram.entities[0].fields] == ["name"]

    def test_truncated_edge_does_not_swallow_next_entity(self):
        source = "erd d {\n  a { id int }\n  a.id o--o\n  users { id int }\n  a.id o--o users.id\n}"
        diagram, log = _parse(source)
        [diagnostic] = log.diagnostics
        assert diagnostic.code == DiagnosticCode.UNEXPECTED_TOKEN
        assert (diagnostic.line, diagnostic.column) == (3, 8)
        assert "after 'o--o'" in diagnostic.message
        assert [e.name for e in diagram.entities] == ["a", "users"]
        [edge] = diagram.edges
        assert edge.right.path == "users.id"

    def test_edge_split_across_lines(self):
        diagram, log = _parse("erd d {\n  a { id int }\n  a.id o--o\n  a.id\n}")
        assert _codes(log) == [DiagnosticCode.UNEXPECTED_TOKEN] * 2
        assert [d.line for d in log] == [3, 4]
        assert diagram.edges == []

    def test_endpoint_path_split_across_lines(self):
        diagram, log = _parse("erd d {\n  a { id int }\n  a.id o--o a\n  .id\n}")
        assert log.diagnostics[0].line == 3
        assert "end of line" in log.diagnostics[0].message
        assert diagram.edges == []

    def test_unclosed_entity_before_edge_line(self):
        source = "erd d {\n  users {\n    id int\n  a.x o--o users.id\n}"
        diagram, log = _parse(source)
        assert _codes(log) == [DiagnosticCode.MISSING_BLOCK_TERMINATOR]
        assert (log.diagnostics[0].line, log.diagnostics[0].column) == (2, 3)
        assert [f.name for f in diagram.entities[0].fields] == ["id"]
        [edge] = diagram.edges
        assert edge.left.path == "a.x"

    def test_closing_brace_glued_to_symbol(self):
        diagram, log = _parse("erd d { a { id int }o--o b.y }")
        assert _codes(log) == [
            DiagnosticCode.MISSING_BLOCK_TERMINATOR,
            DiagnosticCode.UNEXPECTED_TOKEN,
        ]
        assert "'}o--o' is read as a cardinality symbol" in (log.diagnostics[0].hint or "")
        assert [e.name for e in diagram.entities] == ["a"]
        assert diagram.edges == []
