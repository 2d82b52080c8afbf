"""Render external snippets as comment blocks in the target language."""

from __future__ import annotations

import posixpath
from typing import Sequence

from completion_context.domain.entities import ExternalSnippet, LanguageProfile


def _basename(filepath: str) -> str:
    return posixpath.basename(filepath.replace("\\", "/"))


def format_external_snippet(
    filepath: str, snippet: str, language: LanguageProfile
) -> str:
    """Comment out *snippet* under a ``Path:`` header naming only the file.

    The block ends with a bare comment token so consecutive snippets stay
    visually separated.
    """
    comment = language.comment
    lines = [f"{comment} Path: {_basename(filepath)}"]
    lines.extend(f"{comment} {line}" for line in snippet.split("\n"))
    lines.append(comment)
    return "\n".join(lines)


def format_snippets(
    snippets: Sequence[ExternalSnippet], language: LanguageProfile
) -> str:
    """Format every snippet and join the blocks with a single newline."""
    return "\n".join(
        format_external_snippet(s.filepath, s.contents, language) for s in snippets
    )
