"""Token counting and line-granular pruning.

Uses ``tiktoken`` for exact token counts. Pruning only ever removes whole
lines, from the top of a prefix or the bottom of a suffix, so the text
nearest the cursor survives the longest.
"""

from __future__ import annotations

import tiktoken

from completion_context.domain.ports.collaborators import TokenCounter

# ── Constants ───────────────────────────────────────────────────────────────

DEFAULT_ENCODING = "cl100k_base"  # GPT-4 family


# ── Counting ────────────────────────────────────────────────────────────────


class TiktokenCounter:
    """Count tokens using a tiktoken encoding.

    The encoder is loaded lazily on first use and reused afterwards.
    """

    def __init__(self, encoding_name: str = DEFAULT_ENCODING) -> None:
        self._encoding_name = encoding_name
        self._encoder: tiktoken.Encoding | None = None

    def _get_encoder(self) -> tiktoken.Encoding:
        if self._encoder is None:
            self._encoder = tiktoken.get_encoding(self._encoding_name)
        return self._encoder

    def count(self, text: str) -> int:
        """Return the exact token count for *text*."""
        if not text:
            return 0
        return len(self._get_encoder().encode(text, disallowed_special=()))


# ── Pruning ─────────────────────────────────────────────────────────────────


def _prune_lines(
    text: str, max_tokens: float, counter: TokenCounter, *, from_top: bool
) -> str:
    if max_tokens <= 0:
        return ""

    total = counter.count(text)
    if total <= max_tokens:
        return text

    lines = text.split("\n")
    # Running estimate; recount exactly once it drops within budget.
    while lines and total > max_tokens:
        removed = lines.pop(0) if from_top else lines.pop()
        total -= counter.count(removed) + 1
        if total <= max_tokens:
            total = counter.count("\n".join(lines))

    return "\n".join(lines)


def prune_lines_from_top(text: str, max_tokens: float, counter: TokenCounter) -> str:
    """Drop leading lines of *text* until it fits in *max_tokens*.

    A non-positive budget yields the empty string.
    """
    return _prune_lines(text, max_tokens, counter, from_top=True)


def prune_lines_from_bottom(text: str, max_tokens: float, counter: TokenCounter) -> str:
    """Drop trailing lines of *text* until it fits in *max_tokens*.

    A non-positive budget yields the empty string.
    """
    return _prune_lines(text, max_tokens, counter, from_top=False)
