"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from completion_context.domain.value_objects import CompletionOptions


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file).

    The ``completion_*`` fields are the server-side defaults for any
    completion option a request leaves out.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
    tokenizer_encoding: str = "cl100k_base"

    completion_sliding_window_size: int = 500
    completion_sliding_window_prefix_percentage: float = 0.75
    completion_max_prompt_tokens: int = 1024
    completion_prefix_percentage: float = 0.85
    completion_max_suffix_percentage: float = 0.25

    def default_completion_options(self) -> CompletionOptions:
        """Validated completion options built from the ``completion_*`` fields."""
        return CompletionOptions(
            sliding_window_size=self.completion_sliding_window_size,
            sliding_window_prefix_percentage=self.completion_sliding_window_prefix_percentage,
            max_prompt_tokens=self.completion_max_prompt_tokens,
            prefix_percentage=self.completion_prefix_percentage,
            max_suffix_percentage=self.completion_max_suffix_percentage,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
