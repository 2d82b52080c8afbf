"""Single-line vs. multi-line completion decision from the syntax path."""

from __future__ import annotations

from typing import Sequence

from completion_context.domain.entities import SyntaxNode

# Function / statement body constructs across the supported grammars.
BLOCK_TYPES: frozenset[str] = frozenset({"body", "statement_block", "block"})

# Blocks delimited by ``{`` / ``}``; Python's ``block`` is indentation-only.
BRACED_BLOCK_TYPES: frozenset[str] = frozenset({"body", "statement_block"})

CALL_EXPRESSION_TYPES: frozenset[str] = frozenset({"call_expression", "call"})


def _innermost(
    tree_path: Sequence[SyntaxNode], node_types: frozenset[str], cursor_line: int | None = None
) -> SyntaxNode | None:
    for node in reversed(tree_path):
        if node.type not in node_types:
            continue
        if cursor_line is None or abs(node.start_row - cursor_line) <= 1:
            return node
    return None


def _block_body(block: SyntaxNode) -> str:
    """Strip the outer braces of a block and trim surrounding whitespace."""
    text = block.text
    if block.type not in BRACED_BLOCK_TYPES:
        return text.strip()
    open_brace = text.find("{")
    if open_brace != -1:
        text = text[open_brace + 1 :]
    close_brace = text.rfind("}")
    if close_brace != -1:
        text = text[:close_brace]
    return text.strip()


def find_enclosing_call(tree_path: Sequence[SyntaxNode]) -> SyntaxNode | None:
    """Return the innermost call expression on the path, if any."""
    return _innermost(tree_path, CALL_EXPRESSION_TYPES)


def should_complete_multiline(tree_path: Sequence[SyntaxNode], cursor_line: int) -> bool:
    """Decide whether the completion at *cursor_line* should span several lines.

    *tree_path* must be the non-empty ancestor path produced by a successful
    parse. Top-level positions are always multiline; otherwise the nearest
    block that opens on or next to the cursor line decides: an empty or
    one-line body gets a multiline completion, a populated one does not.
    """
    if len(tree_path) == 1:
        return True

    block = _innermost(tree_path, BLOCK_TYPES, cursor_line)
    if block is None:
        return False
    return len(_block_body(block).split("\n")) == 1
