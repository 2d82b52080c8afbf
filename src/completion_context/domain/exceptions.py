"""Domain exception hierarchy.

Inner layers raise these; the HTTP error handlers translate them.
Only :class:`ParseFailedError` is recovered from inside the assembler.
"""

from __future__ import annotations


class CompletionContextError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidCompletionOptionsError(CompletionContextError):
    """Completion options are out of range or of the wrong type."""


# ── Parsing ─────────────────────────────────────────────────────────────────


class ParseFailedError(CompletionContextError):
    """No syntax tree could be produced for a document."""


class UnsupportedLanguageError(ParseFailedError):
    """No grammar is registered for the file's extension."""


class SyntaxParseError(ParseFailedError):
    """The grammar exists but the parser did not yield a usable tree."""
