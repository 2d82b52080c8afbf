"""Language profiles — resolve a file path to its comment syntax."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from completion_context.domain.entities import LanguageProfile

# ── Profiles ────────────────────────────────────────────────────────────────

TYPESCRIPT = LanguageProfile(name="TypeScript", comment="//")
JAVASCRIPT = LanguageProfile(name="JavaScript", comment="//")
PYTHON = LanguageProfile(name="Python", comment="#")
JAVA = LanguageProfile(name="Java", comment="//")
C = LanguageProfile(name="C", comment="//")
CPP = LanguageProfile(name="C++", comment="//")
CSHARP = LanguageProfile(name="C#", comment="//")
GO = LanguageProfile(name="Go", comment="//")
RUST = LanguageProfile(name="Rust", comment="//")
SCALA = LanguageProfile(name="Scala", comment="//")
KOTLIN = LanguageProfile(name="Kotlin", comment="//")
SWIFT = LanguageProfile(name="Swift", comment="//")
DART = LanguageProfile(name="Dart", comment="//")
PHP = LanguageProfile(name="PHP", comment="//")
RUBY = LanguageProfile(name="Ruby", comment="#")
HASKELL = LanguageProfile(name="Haskell", comment="--")
LUA = LanguageProfile(name="Lua", comment="--")
R = LanguageProfile(name="R", comment="#")
JULIA = LanguageProfile(name="Julia", comment="#")
SHELL = LanguageProfile(name="Shell", comment="#")

_EXTENSIONS: dict[str, LanguageProfile] = {
    "ts": TYPESCRIPT,
    "tsx": TYPESCRIPT,
    "mts": TYPESCRIPT,
    "js": JAVASCRIPT,
    "jsx": JAVASCRIPT,
    "mjs": JAVASCRIPT,
    "cjs": JAVASCRIPT,
    "py": PYTHON,
    "pyi": PYTHON,
    "java": JAVA,
    "c": C,
    "h": CPP,
    "cpp": CPP,
    "cc": CPP,
    "cxx": CPP,
    "hpp": CPP,
    "cs": CSHARP,
    "go": GO,
    "rs": RUST,
    "scala": SCALA,
    "sc": SCALA,
    "kt": KOTLIN,
    "kts": KOTLIN,
    "swift": SWIFT,
    "dart": DART,
    "php": PHP,
    "rb": RUBY,
    "hs": HASKELL,
    "lua": LUA,
    "r": R,
    "jl": JULIA,
    "sh": SHELL,
    "bash": SHELL,
}


class LanguageRegistry:
    """Read-only extension → profile table with a designated fallback.

    Built once and shared; lookups never mutate it, so concurrent requests
    can read it without locking.
    """

    def __init__(
        self, profiles: Mapping[str, LanguageProfile], default: LanguageProfile
    ) -> None:
        self._profiles: Mapping[str, LanguageProfile] = MappingProxyType(dict(profiles))
        self._default = default

    @property
    def default(self) -> LanguageProfile:
        return self._default

    @property
    def profiles(self) -> Mapping[str, LanguageProfile]:
        return self._profiles

    def language_for_filepath(self, filepath: str) -> LanguageProfile:
        """Return the profile for the text after the last ``.`` in *filepath*."""
        dot = filepath.rfind(".")
        if dot == -1:
            return self._default
        return self._profiles.get(filepath[dot + 1 :], self._default)


DEFAULT_REGISTRY = LanguageRegistry(_EXTENSIONS, default=TYPESCRIPT)


def language_for_filepath(filepath: str) -> LanguageProfile:
    """Resolve *filepath* against the default registry."""
    return DEFAULT_REGISTRY.language_for_filepath(filepath)
