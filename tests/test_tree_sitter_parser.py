"""Tests for the tree-sitter adapter, scope extraction and definition lookup."""

import asyncio

import pytest

from completion_context.domain.entities import ExternalSnippet, Position, RangeInFile
from completion_context.domain.exceptions import UnsupportedLanguageError
from completion_context.infrastructure.definition_index import (
    DocumentDefinitionLookup,
    callee_name_at,
)
from completion_context.infrastructure.tree_sitter_parser import TreeSitterParser
from completion_context.services.multiline import (
    find_enclosing_call,
    should_complete_multiline,
)
from completion_context.services.scope import SyntaxScopeExtractor


@pytest.fixture
def parser():
    return TreeSitterParser()


def _path(parser, filepath, prefix, suffix):
    tree = asyncio.run(parser.parse(filepath, prefix + suffix))
    return parser.tree_path_at(tree, len(prefix.encode("utf-8")))


# ── Parsing / tree paths ──────────────────────────────────────────────────


class TestTreeSitterParser:
    def test_unsupported_extension(self, parser):
        with pytest.raises(UnsupportedLanguageError):
            asyncio.run(parser.parse("notes.txt", "hello"))

    def test_supports(self, parser):
        assert parser.supports("a.py")
        assert parser.supports("a.TSX")
        assert not parser.supports("a.rb")

    def test_path_runs_root_to_leaf(self, parser):
        path = _path(parser, "a.js", "function f() {", "}")
        assert path[0].type == "program"
        assert "function_declaration" in [n.type for n in path]
        assert "statement_block" in [n.type for n in path]

    def test_empty_js_body_is_multiline(self, parser):
        prefix, suffix = "function f() {", "}"
        path = _path(parser, "a.js", prefix, suffix)
        assert should_complete_multiline(path, prefix.count("\n")) is True

    def test_empty_ts_body_on_next_line_is_multiline(self, parser):
        prefix, suffix = "function f(): void {\n", "}\n"
        path = _path(parser, "a.ts", prefix, suffix)
        assert should_complete_multiline(path, prefix.count("\n")) is True

    def test_populated_js_body_is_single_line(self, parser):
        prefix, suffix = "function f() {", "\n  a();\n  b();\n}"
        path = _path(parser, "a.js", prefix, suffix)
        assert should_complete_multiline(path, 0) is False

    def test_populated_python_body_with_dict_literal(self, parser):
        prefix, suffix = "def f():\n    ", "d = {}\n    e = 2\n    return d\n"
        path = _path(parser, "m.py", prefix, suffix)
        assert "block" in [n.type for n in path]
        assert should_complete_multiline(path, prefix.count("\n")) is False

    def test_python_top_level(self, parser):
        path = _path(parser, "a.py", "x = 1\n", "")
        assert len(path) == 1
        assert should_complete_multiline(path, 1) is True

    def test_call_expression_position(self, parser):
        path = _path(parser, "a.js", "const y = foo(1, ", "2);\n")
        call = find_enclosing_call(path)
        assert call is not None
        assert call.type == "call_expression"
        assert (call.start_row, call.start_column) == (0, 10)
        assert call.text == "foo(1, 2)"


# ── Scope extraction ──────────────────────────────────────────────────────


def _edited(filepath, contents):
    return RangeInFile(filepath, Position(0, 0), Position(contents.count("\n"), 0), contents)


class TestSyntaxScopeExtractor:
    def test_function_scope(self, parser):
        scopes = SyntaxScopeExtractor(parser)
        node = asyncio.run(scopes.scope_around(_edited("a.py", "def f():\n    return 1\n")))
        assert node is not None
        assert node.type == "function_definition"

    def test_blank_range_has_no_scope(self, parser):
        scopes = SyntaxScopeExtractor(parser)
        assert asyncio.run(scopes.scope_around(_edited("a.py", "  \n "))) is None

    def test_unparseable_language_has_no_scope(self, parser):
        scopes = SyntaxScopeExtractor(parser)
        assert asyncio.run(scopes.scope_around(_edited("a.rb", "def f; end"))) is None


# ── Definition lookup ─────────────────────────────────────────────────────


class TestCalleeNameAt:
    def test_dotted_callee(self):
        assert callee_name_at("  client.fetch(x)", 0, 2) == "fetch"

    def test_plain_callee(self):
        assert callee_name_at("a\nfoo(1)", 1, 0) == "foo"

    def test_out_of_range(self):
        assert callee_name_at("foo()", 3, 0) is None

    def test_not_an_identifier(self):
        assert callee_name_at("(1 + 2)", 0, 0) is None

    def test_column_counts_utf8_bytes(self):
        assert callee_name_at('s = "éé"; target(1)', 0, 12) == "target"


class TestDocumentDefinitionLookup:
    def test_definition_in_other_document(self, parser):
        documents = {
            "main.ts": "const y = add(1, 2);\n",
            "math.ts": "export function add(a: number, b: number) {\n  return a + b;\n}\n",
        }
        lookup = DocumentDefinitionLookup(parser, documents)
        result = asyncio.run(lookup("main.ts", 0, 10))
        assert result == ExternalSnippet(
            "math.ts", "function add(a: number, b: number) {\n  return a + b;\n}"
        )

    def test_current_document_searched_first(self, parser):
        documents = {
            "other.py": "def helper(x):\n    return 0\n",
            "main.py": "def helper(x):\n    return x\n\nhelper(1)\n",
        }
        lookup = DocumentDefinitionLookup(parser, documents)
        result = asyncio.run(lookup("main.py", 3, 0))
        assert result == ExternalSnippet("main.py", "def helper(x):\n    return x")

    def test_method_call_resolves_method(self, parser):
        documents = {
            "main.js": "api.load(1);\n",
            "api.js": "class Api {\n  load(id) {\n    return id;\n  }\n}\n",
        }
        result = asyncio.run(DocumentDefinitionLookup(parser, documents)("main.js", 0, 0))
        assert result == ExternalSnippet("api.js", "load(id) {\n    return id;\n  }")

    def test_arrow_function_binding(self, parser):
        documents = {"main.js": "const add = (a, b) => a + b;\nadd(1, 2);\n"}
        result = asyncio.run(DocumentDefinitionLookup(parser, documents)("main.js", 1, 0))
        assert result == ExternalSnippet("main.js", "add = (a, b) => a + b")

    def test_unknown_name(self, parser):
        documents = {"main.js": "missing(1);\n", "notes.md": "# missing"}
        assert asyncio.run(DocumentDefinitionLookup(parser, documents)("main.js", 0, 0)) is None

    def test_unknown_document(self, parser):
        assert asyncio.run(DocumentDefinitionLookup(parser, {})("main.js", 0, 0)) is None

    def test_call_after_non_ascii_text(self, parser):
        prefix = 'const s = "éé"; target('
        suffix = "1);\nfunction target(x) {\n  return x;\n}\n"
        call = find_enclosing_call(_path(parser, "m.js", prefix, suffix))
        assert (call.start_row, call.start_column) == (0, 18)

        lookup = DocumentDefinitionLookup(parser, {"m.js": prefix + suffix})
        result = asyncio.run(lookup("m.js", call.start_row, call.start_column))
        assert result == ExternalSnippet("m.js", "function target(x) {\n  return x;\n}")
