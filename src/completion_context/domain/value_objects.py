"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from completion_context.domain.exceptions import InvalidCompletionOptionsError

# Editors send camelCase keys; both spellings are accepted.
_CAMEL_CASE_KEYS: dict[str, str] = {
    "slidingWindowSize": "sliding_window_size",
    "slidingWindowPrefixPercentage": "sliding_window_prefix_percentage",
    "maxPromptTokens": "max_prompt_tokens",
    "prefixPercentage": "prefix_percentage",
    "maxSuffixPercentage": "max_suffix_percentage",
}

_PERCENTAGE_FIELDS = frozenset(
    {"sliding_window_prefix_percentage", "prefix_percentage", "max_suffix_percentage"}
)


@dataclass(frozen=True, slots=True)
class CompletionOptions:
    """Budget and window settings for one completion request.

    ``max_prompt_tokens`` is the whole prompt budget; ``prefix_percentage``
    of it goes to snippets + prefix, and the suffix is capped at
    ``max_suffix_percentage`` of it.
    """

    sliding_window_size: int = 500
    sliding_window_prefix_percentage: float = 0.75
    max_prompt_tokens: int = 1024
    prefix_percentage: float = 0.85
    max_suffix_percentage: float = 0.25

    def __post_init__(self) -> None:
        for name in ("sliding_window_size", "max_prompt_tokens"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidCompletionOptionsError(
                    f"{name} must be a positive integer, got {value!r}."
                )
        for name in _PERCENTAGE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidCompletionOptionsError(
                    f"{name} must be a number, got {value!r}."
                )
            if not 0.0 <= value <= 1.0:
                raise InvalidCompletionOptionsError(
                    f"{name} must be within [0, 1], got {value!r}."
                )

    @classmethod
    def from_mapping(
        cls, raw: Mapping[str, Any], defaults: CompletionOptions | None = None
    ) -> CompletionOptions:
        """Build options from a partial mapping, filling gaps from *defaults*."""
        base = defaults or cls()
        known = {f.name for f in fields(cls)}
        values = {name: getattr(base, name) for name in known}

        for key, value in raw.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name not in known:
                raise InvalidCompletionOptionsError(f"Unknown completion option '{key}'.")
            values[name] = value

        return cls(**values)

    @property
    def window_prefix_chars(self) -> int:
        return int(self.sliding_window_size * self.sliding_window_prefix_percentage)

    @property
    def window_suffix_chars(self) -> int:
        return int(self.sliding_window_size * (1 - self.sliding_window_prefix_percentage))
