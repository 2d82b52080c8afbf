"""Snippet relevance ranking — symbol-overlap similarity.

Each snippet is reduced to its set of identifier-like symbols and scored by
Jaccard similarity against the text around the cursor.
"""

from __future__ import annotations

import re
from typing import Sequence

from completion_context.domain.entities import ExternalSnippet

_SYMBOL_RE = re.compile(r"[A-Za-z0-9]+")


def symbols(text: str) -> frozenset[str]:
    """Return the set of alphanumeric runs in *text*."""
    return frozenset(_SYMBOL_RE.findall(text))


def jaccard_similarity(a: str, b: str) -> float:
    """Jaccard similarity (0-1) of the symbol sets of *a* and *b*."""
    left, right = symbols(a), symbols(b)
    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)


class SymbolOverlapRanker:
    """Default ``SnippetRanker``: most similar first, exact duplicates dropped."""

    def rank(
        self, snippets: Sequence[ExternalSnippet], reference_text: str
    ) -> list[ExternalSnippet]:
        seen: set[ExternalSnippet] = set()
        unique: list[ExternalSnippet] = []
        for snippet in snippets:
            if snippet in seen:
                continue
            seen.add(snippet)
            unique.append(snippet)

        # sort() is stable, so equal scores keep their gathering order
        unique.sort(
            key=lambda s: jaccard_similarity(s.contents, reference_text), reverse=True
        )
        return unique
