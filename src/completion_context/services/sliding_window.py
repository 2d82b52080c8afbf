"""Sliding-window matcher over recently edited documents."""

from __future__ import annotations

from typing import Iterator, Sequence

from completion_context.domain.entities import ExternalSnippet
from completion_context.services.ranking import jaccard_similarity


def iter_windows(contents: str, window_size: int) -> Iterator[str]:
    """Yield consecutive line-aligned chunks of roughly *window_size* chars.

    A single line longer than the window becomes its own chunk rather than
    being split.
    """
    window: list[str] = []
    char_count = 0
    for line in contents.split("\n"):
        if window and char_count + len(line) >= window_size:
            yield "\n".join(window)
            window = []
            char_count = 0
        window.append(line)
        char_count += len(line)
    if window:
        yield "\n".join(window)


class SlidingWindowMatcher:
    """Default ``WindowMatcher`` scoring windows by symbol overlap."""

    async def match(
        self,
        documents: Sequence[ExternalSnippet],
        window_text: str,
        top_k: int,
        window_size: int,
    ) -> list[ExternalSnippet]:
        scored: list[tuple[float, int, ExternalSnippet]] = []
        for document in documents:
            for window in iter_windows(document.contents, window_size):
                score = jaccard_similarity(window, window_text)
                if score <= 0.0:
                    continue
                scored.append(
                    (score, len(scored), ExternalSnippet(document.filepath, window))
                )

        scored.sort(key=lambda item: (-item[0], item[1]))
        return [snippet for _score, _order, snippet in scored[:top_k]]
