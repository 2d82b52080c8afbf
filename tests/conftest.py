"""Shared fakes and fixtures."""

from __future__ import annotations

from typing import Any, Callable, Sequence

import pytest

from completion_context.domain.entities import ExternalSnippet, RangeInFile, SyntaxNode
from completion_context.services.context_assembler import ContextAssembler


class WordCounter:
    """Whitespace tokenizer: one token per word."""

    def count(self, text: str) -> int:
        return len(text.split())


class FakeParser:
    """Returns a canned ancestor path, or raises the configured error."""

    def __init__(self, path: list[SyntaxNode] | None = None, error: Exception | None = None):
        self.path = path or [SyntaxNode("program", 0, 0, 0, "")]
        self.error = error
        self.parsed: list[tuple[str, str]] = []
        self.offsets: list[int] = []

    async def parse(self, filepath: str, text: str) -> Any:
        self.parsed.append((filepath, text))
        if self.error is not None:
            raise self.error
        return object()

    def tree_path_at(self, tree: Any, offset: int) -> list[SyntaxNode]:
        self.offsets.append(offset)
        return list(self.path)


class FakeMatcher:
    def __init__(self, matches: list[ExternalSnippet] | None = None):
        self.matches = matches or []
        self.calls: list[tuple[Sequence[ExternalSnippet], str, int, int]] = []

    async def match(self, documents, window_text, top_k, window_size):
        self.calls.append((documents, window_text, top_k, window_size))
        return list(self.matches)


class FakeScopes:
    """Scope per filepath: a node, ``None``, or an exception to raise."""

    def __init__(self, scopes: dict[str, Any] | None = None):
        self.scopes = scopes or {}

    async def scope_around(self, edited: RangeInFile) -> SyntaxNode | None:
        scope = self.scopes.get(edited.filepath)
        if isinstance(scope, Exception):
            raise scope
        return scope


class PassthroughRanker:
    def __init__(self) -> None:
        self.references: list[str] = []

    def rank(self, snippets, reference_text):
        self.references.append(reference_text)
        return list(snippets)


class RecordingLookup:
    def __init__(self, result: ExternalSnippet | None = None):
        self.result = result
        self.calls: list[tuple[str, int, int]] = []

    async def __call__(self, filepath: str, line: int, character: int):
        self.calls.append((filepath, line, character))
        return self.result


@pytest.fixture
def word_counter() -> WordCounter:
    return WordCounter()


@pytest.fixture
def recording_lookup() -> Callable[..., RecordingLookup]:
    return RecordingLookup


@pytest.fixture
def make_assembler(word_counter) -> Callable[..., tuple[ContextAssembler, dict[str, Any]]]:
    """Build an assembler from fakes; returns it with the fakes for inspection."""

    def _make(
        path: list[SyntaxNode] | None = None,
        parse_error: Exception | None = None,
        matches: list[ExternalSnippet] | None = None,
        scopes: dict[str, Any] | None = None,
        ranker: Any = None,
    ) -> tuple[ContextAssembler, dict[str, Any]]:
        fakes = {
            "parser": FakeParser(path, parse_error),
            "matcher": FakeMatcher(matches),
            "scopes": FakeScopes(scopes),
            "ranker": ranker or PassthroughRanker(),
        }
        assembler = ContextAssembler(
            parser=fakes["parser"],
            ranker=fakes["ranker"],
            matcher=fakes["matcher"],
            scope_extractor=fakes["scopes"],
            token_counter=word_counter,
        )
        return assembler, fakes

    return _make
