"""In-memory definition lookup over the documents sent with a request.

Implements the ``DefinitionLookup`` port without a language server: the
callee name at the call position is matched against function, method and
class definitions found by tree-sitter in the supplied documents.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Mapping

import tree_sitter

from completion_context.domain.entities import ExternalSnippet
from completion_context.domain.exceptions import ParseFailedError
from completion_context.infrastructure.tree_sitter_parser import TreeSitterParser

logger = logging.getLogger(__name__)

_DEFINITION_TYPES = frozenset(
    {
        "function_definition",  # Python
        "class_definition",
        "function_declaration",  # JS / TS
        "generator_function_declaration",
        "class_declaration",
        "method_definition",
    }
)

_FUNCTION_VALUE_TYPES = frozenset({"arrow_function", "function_expression", "function"})

# Dotted callee such as ``client.fetch`` starting at the call's position.
_CALLEE_RE = re.compile(r"[A-Za-z_$][\w$]*(?:\s*\.\s*[A-Za-z_$][\w$]*)*")


def callee_name_at(text: str, line: int, column: int) -> str | None:
    """Return the last segment of the dotted name starting at (*line*, *column*).

    *column* is a UTF-8 byte offset into the line, as tree-sitter reports it.
    """
    lines = text.split("\n")
    if not 0 <= line < len(lines):
        return None
    tail = lines[line].encode("utf-8")[column:].decode("utf-8", errors="ignore")
    match = _CALLEE_RE.match(tail)
    if not match:
        return None
    return match.group(0).split(".")[-1].strip()


def _iter_nodes(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _node_text(node: tree_sitter.Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _find_definition(tree: tree_sitter.Tree, name: str) -> str | None:
    for node in _iter_nodes(tree.root_node):
        if node.type in _DEFINITION_TYPES:
            if _node_text(node.child_by_field_name("name")) == name:
                return _node_text(node)
        elif node.type == "variable_declarator":
            value = node.child_by_field_name("value")
            if (
                value is not None
                and value.type in _FUNCTION_VALUE_TYPES
                and _node_text(node.child_by_field_name("name")) == name
            ):
                return _node_text(node)
    return None


class DocumentDefinitionLookup:
    """Concrete ``DefinitionLookup`` over a fixed set of ``{path: contents}``."""

    def __init__(self, parser: TreeSitterParser, documents: Mapping[str, str]) -> None:
        self._parser = parser
        self._documents = dict(documents)

    async def __call__(
        self, filepath: str, line: int, character: int
    ) -> ExternalSnippet | None:
        source = self._documents.get(filepath)
        if source is None:
            return None

        name = callee_name_at(source, line, character)
        if not name:
            return None

        for path in self._search_order(filepath):
            if not self._parser.supports(path):
                continue
            try:
                tree = await self._parser.parse(path, self._documents[path])
            except ParseFailedError:
                logger.debug("Skipping %s during definition lookup", path, exc_info=True)
                continue
            definition = _find_definition(tree, name)
            if definition is not None:
                logger.debug("Resolved definition of %s in %s", name, path)
                return ExternalSnippet(filepath=path, contents=definition)
        return None

    def _search_order(self, filepath: str) -> list[str]:
        """Current file first, then the rest in insertion order."""
        return [filepath] + [p for p in self._documents if p != filepath]
