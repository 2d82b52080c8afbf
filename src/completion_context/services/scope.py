"""Enclosing-scope lookup for recently edited ranges."""

from __future__ import annotations

import logging

from completion_context.domain.entities import RangeInFile, SyntaxNode
from completion_context.domain.exceptions import ParseFailedError
from completion_context.domain.ports.syntax_parser import SyntaxParser

logger = logging.getLogger(__name__)


class SyntaxScopeExtractor:
    """Default ``ScopeExtractor`` backed by a :class:`SyntaxParser`.

    Parses the range's own contents and returns the innermost node that
    still spans every line of it. Ranges that are blank or cannot be parsed
    have no scope.
    """

    def __init__(self, parser: SyntaxParser) -> None:
        self._parser = parser

    async def scope_around(self, edited: RangeInFile) -> SyntaxNode | None:
        text = edited.contents.strip()
        if not text:
            return None

        try:
            tree = await self._parser.parse(edited.filepath, text)
        except ParseFailedError:
            logger.debug("No scope for edited range in %s", edited.filepath, exc_info=True)
            return None

        last_row = text.count("\n")
        path = self._parser.tree_path_at(tree, 0)
        for node in reversed(path):
            if node.start_row == 0 and node.end_row >= last_row:
                return node
        return None
