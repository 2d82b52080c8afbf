"""Assemble-prompt use case — the context assembly pipeline.

This is the single entry point for the business logic. It gathers candidate
snippets, ranks and formats them, decides the completion shape from the
syntax tree and fits everything into the token budget. Collaborators are
injected through the constructor; the interface layer wires concrete
adapters at runtime.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from completion_context.domain.entities import (
    AssembledPrompt,
    ExternalSnippet,
    LanguageProfile,
    Position,
    RangeInFile,
    SourceLocation,
    SyntaxNode,
)
from completion_context.domain.ports.collaborators import (
    DefinitionLookup,
    ScopeExtractor,
    SnippetRanker,
    TokenCounter,
    WindowMatcher,
)
from completion_context.domain.ports.syntax_parser import SyntaxParser
from completion_context.domain.value_objects import CompletionOptions
from completion_context.services.languages import DEFAULT_REGISTRY, LanguageRegistry
from completion_context.services.multiline import (
    find_enclosing_call,
    should_complete_multiline,
)
from completion_context.services.snippet_formatter import format_snippets
from completion_context.services.token_budget import (
    prune_lines_from_bottom,
    prune_lines_from_top,
)

logger = logging.getLogger(__name__)

MAX_WINDOW_MATCHES = 3


def cursor_location(filepath: str, prefix: str) -> SourceLocation:
    """Locate the cursor at the end of *prefix*."""
    line = prefix.count("\n")
    character = len(prefix) - (prefix.rfind("\n") + 1)
    return SourceLocation(
        filepath=filepath,
        position=Position(line=line, character=character),
        offset=len(prefix.encode("utf-8")),
    )


def window_around_cursor(prefix: str, suffix: str, options: CompletionOptions) -> str:
    """Tail of *prefix* plus head of *suffix*, sized by the sliding window."""
    prefix_chars = options.window_prefix_chars
    head = prefix[-prefix_chars:] if prefix_chars > 0 else ""
    return head + suffix[: options.window_suffix_chars]


class ContextAssembler:
    """Orchestrates the cursor → prompt pipeline.

    Parameters
    ----------
    parser:
        Produces syntax trees and ancestor paths at the cursor.
    ranker:
        Orders candidate snippets by relevance to the cursor window.
    matcher:
        Finds similar windows in recently edited documents.
    scope_extractor:
        Decides whether a recently edited range sits inside a scope.
    token_counter:
        Tokenizer used for every budget computation in a request.
    languages:
        Extension → language table used when the caller gives no profile.
    """

    def __init__(
        self,
        parser: SyntaxParser,
        ranker: SnippetRanker,
        matcher: WindowMatcher,
        scope_extractor: ScopeExtractor,
        token_counter: TokenCounter,
        languages: LanguageRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self._parser = parser
        self._ranker = ranker
        self._matcher = matcher
        self._scopes = scope_extractor
        self._tokens = token_counter
        self._languages = languages

    # ── Public entry point ──────────────────────────────────────────────

    async def construct_prompt(
        self,
        filepath: str,
        full_prefix: str,
        full_suffix: str,
        clipboard_text: str,
        language: LanguageProfile | None,
        get_definition: DefinitionLookup,
        options: CompletionOptions,
        recently_edited_ranges: Sequence[RangeInFile],
        recently_edited_documents: Sequence[ExternalSnippet],
    ) -> AssembledPrompt:
        """Build the budgeted prompt for a cursor between *full_prefix* and *full_suffix*."""
        language = language or self._languages.language_for_filepath(filepath)
        cursor = cursor_location(filepath, full_prefix)
        if clipboard_text:
            logger.debug("Clipboard text (%d chars) is not used for context", len(clipboard_text))

        # 1. Local window around the cursor
        window = window_around_cursor(full_prefix, full_suffix, options)

        # 2. Sliding-window matches + recently edited scopes, concurrently
        snippets = await self._gather_snippets(
            window, options, recently_edited_ranges, recently_edited_documents
        )

        # 3. Syntax path at the cursor (non-fatal)
        tree_path = await self._tree_path_at_cursor(cursor, full_prefix + full_suffix)

        # 4. Definition of the enclosing call + completion shape
        complete_multiline = False
        if tree_path:
            definition = await self._definition_for_call(filepath, tree_path, get_definition)
            if definition is not None:
                snippets.append(definition)
            complete_multiline = should_complete_multiline(tree_path, cursor.position.line)

        # 5-6. Rank and format
        ranked = self._ranker.rank(snippets, window)
        formatted_snippets = format_snippets(ranked, language)

        # 7. Budget
        prefix, suffix = self._fit_to_budget(
            full_prefix, full_suffix, formatted_snippets, options
        )
        logger.debug(
            "Prompt for %s: %d snippet(s), multiline=%s",
            filepath,
            len(ranked),
            complete_multiline,
        )
        return AssembledPrompt(
            prefix=prefix,
            suffix=suffix,
            use_fim=True,
            complete_multiline=complete_multiline,
        )

    # ── Snippet gathering ───────────────────────────────────────────────

    async def _gather_snippets(
        self,
        window: str,
        options: CompletionOptions,
        ranges: Sequence[RangeInFile],
        documents: Sequence[ExternalSnippet],
    ) -> list[ExternalSnippet]:
        """Fan out to the matcher and per-range scope lookups; join in input order."""
        matches, scopes = await asyncio.gather(
            self._matcher.match(
                documents, window, MAX_WINDOW_MATCHES, options.sliding_window_size
            ),
            asyncio.gather(
                *(self._scopes.scope_around(r) for r in ranges),
                return_exceptions=True,
            ),
        )

        snippets: list[ExternalSnippet] = list(matches)
        for edited, scope in zip(ranges, scopes):
            if isinstance(scope, BaseException):
                logger.debug(
                    "Scope lookup failed for %s — skipping", edited.filepath, exc_info=scope
                )
                continue
            if scope is None:
                continue
            snippets.append(ExternalSnippet(filepath=edited.filepath, contents=edited.contents))
        return snippets

    # ── Syntax ──────────────────────────────────────────────────────────

    async def _tree_path_at_cursor(
        self, cursor: SourceLocation, full_text: str
    ) -> list[SyntaxNode] | None:
        try:
            tree = await self._parser.parse(cursor.filepath, full_text)
            return self._parser.tree_path_at(tree, cursor.offset)
        except Exception:
            logger.warning(
                "Failed to parse %s — no syntax information", cursor.filepath, exc_info=True
            )
            return None

    @staticmethod
    async def _definition_for_call(
        filepath: str,
        tree_path: Sequence[SyntaxNode],
        get_definition: DefinitionLookup,
    ) -> ExternalSnippet | None:
        call = find_enclosing_call(tree_path)
        if call is None:
            return None
        return await get_definition(filepath, call.start_row, call.start_column)

    # ── Budgeting ───────────────────────────────────────────────────────

    def _fit_to_budget(
        self,
        full_prefix: str,
        full_suffix: str,
        formatted_snippets: str,
        options: CompletionOptions,
    ) -> tuple[str, str]:
        """Prune the prefix first; the suffix only gets what the prefix leaves."""
        max_prompt = options.max_prompt_tokens
        max_prefix_tokens = (
            max_prompt * options.prefix_percentage - self._tokens.count(formatted_snippets)
        )
        prefix = prune_lines_from_top(full_prefix, max_prefix_tokens, self._tokens)
        if formatted_snippets:
            prefix = f"{formatted_snippets}\n{prefix}"

        max_suffix_tokens = min(
            max_prompt - self._tokens.count(prefix),
            options.max_suffix_percentage * max_prompt,
        )
        suffix = prune_lines_from_bottom(full_suffix, max_suffix_tokens, self._tokens)
        return prefix, suffix
