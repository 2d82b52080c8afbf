"""Ports for the snippet-gathering and budgeting collaborators."""

from __future__ import annotations

from typing import Protocol, Sequence

from completion_context.domain.entities import ExternalSnippet, RangeInFile, SyntaxNode


class ScopeExtractor(Protocol):
    """Finds the syntactic scope enclosing a recently edited range."""

    async def scope_around(self, edited: RangeInFile) -> SyntaxNode | None:
        """Return the enclosing scope, or ``None`` when there is none."""
        ...


class SnippetRanker(Protocol):
    """Orders candidate snippets by relevance to the text around the cursor."""

    def rank(
        self, snippets: Sequence[ExternalSnippet], reference_text: str
    ) -> list[ExternalSnippet]:
        ...


class WindowMatcher(Protocol):
    """Finds windows in other documents that resemble the cursor window."""

    async def match(
        self,
        documents: Sequence[ExternalSnippet],
        window_text: str,
        top_k: int,
        window_size: int,
    ) -> list[ExternalSnippet]:
        """Return at most *top_k* snippets."""
        ...


class TokenCounter(Protocol):
    """Model-specific tokenizer."""

    def count(self, text: str) -> int:
        ...


class DefinitionLookup(Protocol):
    """Resolves the definition of the symbol at a position.

    *character* is the UTF-8 byte column of a ``SyntaxNode``.
    """

    async def __call__(
        self, filepath: str, line: int, character: int
    ) -> ExternalSnippet | None:
        ...
