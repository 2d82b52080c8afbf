"""FastAPI dependency injection wiring."""

from __future__ import annotations

from completion_context.domain.value_objects import CompletionOptions
from completion_context.infrastructure.config import get_settings
from completion_context.infrastructure.tree_sitter_parser import TreeSitterParser
from completion_context.services.context_assembler import ContextAssembler
from completion_context.services.languages import DEFAULT_REGISTRY
from completion_context.services.ranking import SymbolOverlapRanker
from completion_context.services.scope import SyntaxScopeExtractor
from completion_context.services.sliding_window import SlidingWindowMatcher
from completion_context.services.token_budget import TiktokenCounter

_parser: TreeSitterParser | None = None
_assembler: ContextAssembler | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _parser, _assembler  # noqa: PLW0603

    settings = get_settings()
    _parser = TreeSitterParser()
    _assembler = ContextAssembler(
        parser=_parser,
        ranker=SymbolOverlapRanker(),
        matcher=SlidingWindowMatcher(),
        scope_extractor=SyntaxScopeExtractor(_parser),
        token_counter=TiktokenCounter(settings.tokenizer_encoding),
        languages=DEFAULT_REGISTRY,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _parser, _assembler  # noqa: PLW0603

    _parser = None
    _assembler = None


def get_parser() -> TreeSitterParser:
    assert _parser is not None, "startup() was not called"
    return _parser


def get_assembler() -> ContextAssembler:
    """Return the shared assembler built at startup."""
    assert _assembler is not None, "startup() was not called"
    return _assembler


def get_default_options() -> CompletionOptions:
    return get_settings().default_completion_options()
