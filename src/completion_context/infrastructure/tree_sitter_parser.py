"""tree-sitter adapter — implements the SyntaxParser port."""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping

import tree_sitter
import tree_sitter_javascript
import tree_sitter_python
import tree_sitter_typescript

from completion_context.domain.entities import SyntaxNode
from completion_context.domain.exceptions import SyntaxParseError, UnsupportedLanguageError

logger = logging.getLogger(__name__)

# Create the Language objects once (each wraps a PyCapsule)
_PYTHON_LANGUAGE = tree_sitter.Language(tree_sitter_python.language())
_JS_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())
_TS_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_typescript())
_TSX_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_tsx())

GRAMMARS: Mapping[str, tree_sitter.Language] = {
    "py": _PYTHON_LANGUAGE,
    "pyi": _PYTHON_LANGUAGE,
    "js": _JS_LANGUAGE,
    "jsx": _JS_LANGUAGE,
    "mjs": _JS_LANGUAGE,
    "cjs": _JS_LANGUAGE,
    "ts": _TS_LANGUAGE,
    "mts": _TS_LANGUAGE,
    "tsx": _TSX_LANGUAGE,
}


def to_syntax_node(node: tree_sitter.Node) -> SyntaxNode:
    """Snapshot a tree-sitter node into the parser-neutral domain type."""
    raw = node.text or b""
    return SyntaxNode(
        type=node.type,
        start_row=node.start_point[0],
        start_column=node.start_point[1],
        end_row=node.end_point[0],
        text=raw.decode("utf-8", errors="replace"),
    )


class TreeSitterParser:
    """Concrete ``SyntaxParser`` backed by tree-sitter grammars."""

    def __init__(self, grammars: Mapping[str, tree_sitter.Language] = GRAMMARS) -> None:
        self._grammars = grammars

    def supports(self, filepath: str) -> bool:
        return self._extension(filepath) in self._grammars

    async def parse(self, filepath: str, text: str) -> tree_sitter.Tree:
        """Parse *text* off the event loop; raise if the language is unknown."""
        ext = self._extension(filepath)
        language = self._grammars.get(ext)
        if language is None:
            raise UnsupportedLanguageError(f"No grammar registered for '{filepath}'.")
        return await asyncio.to_thread(self._parse_sync, language, text, filepath)

    @staticmethod
    def _parse_sync(language: tree_sitter.Language, text: str, filepath: str) -> tree_sitter.Tree:
        parser = tree_sitter.Parser(language)
        tree = parser.parse(text.encode("utf-8"))
        if tree is None or tree.root_node is None:
            raise SyntaxParseError(f"tree-sitter produced no tree for '{filepath}'.")
        if tree.root_node.has_error:
            logger.debug("tree-sitter reported parse errors in %s", filepath)
        return tree

    def tree_path_at(self, tree: tree_sitter.Tree, offset: int) -> list[SyntaxNode]:
        """Descend from the root into the first child spanning *offset* (inclusive)."""
        node = tree.root_node
        path = [to_syntax_node(node)]
        while node.child_count > 0:
            for child in node.children:
                if child.start_byte <= offset <= child.end_byte:
                    node = child
                    path.append(to_syntax_node(child))
                    break
            else:
                break
        return path

    @staticmethod
    def _extension(filepath: str) -> str:
        dot = filepath.rfind(".")
        return filepath[dot + 1 :].lower() if dot != -1 else ""
