"""Port: syntax parser — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol

from completion_context.domain.entities import SyntaxNode


class SyntaxParser(Protocol):
    """Abstract contract for turning source text into syntax trees."""

    async def parse(self, filepath: str, text: str) -> Any:
        """Parse *text* as the language of *filepath*.

        Raises :class:`~completion_context.domain.exceptions.ParseFailedError`
        when no tree can be produced.
        """
        ...

    def tree_path_at(self, tree: Any, offset: int) -> list[SyntaxNode]:
        """Return the root-to-leaf chain of nodes containing byte *offset*."""
        ...
