"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A zero-based line / character position inside a document."""

    line: int
    character: int


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Where the cursor sits for a single completion request."""

    filepath: str
    position: Position
    offset: int  # byte offset into the full document


@dataclass(frozen=True, slots=True)
class LanguageProfile:
    """Per-language metadata needed to render snippets as comments."""

    name: str
    comment: str


@dataclass(frozen=True, slots=True)
class ExternalSnippet:
    """A fragment of code from somewhere other than the cursor location."""

    filepath: str
    contents: str


@dataclass(frozen=True, slots=True)
class RangeInFile:
    """A recently edited range together with its text."""

    filepath: str
    start: Position
    end: Position
    contents: str


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """Parser-neutral snapshot of a single syntax-tree node.

    An ancestor path is a ``list[SyntaxNode]`` ordered from the root down to
    the innermost node containing the cursor.
    """

    type: str
    start_row: int
    start_column: int  # UTF-8 bytes
    end_row: int
    text: str


@dataclass(frozen=True, slots=True)
class AssembledPrompt:
    """The final prompt handed to the completion model."""

    prefix: str
    suffix: str
    use_fim: bool
    complete_multiline: bool
