"""
Type definitions for flatcompat.

Legacy (eslintrc) and flat config shapes are plain dicts, described here with
TypedDict. Objects produced by the resolver are dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TypedDict, Union

# ---------------------------------------------------------------------------
# Sentinels
# ---------------------------------------------------------------------------

ESLINT_ALL = "eslint:all"
ESLINT_RECOMMENDED = "eslint:recommended"

#: Shareable-config names that resolve to a marker instead of an object
Sentinel = Literal["eslint:all", "eslint:recommended"]

SENTINELS: tuple[str, ...] = (ESLINT_ALL, ESLINT_RECOMMENDED)

#: Resolver element kinds
ElementKind = Literal["config", "implicit-processor"]

#: A plugin definition: dict normalized to carry configs/rules/environments/processors
PluginDefinition = dict[str, Any]


# ---------------------------------------------------------------------------
# Resolver products
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolvedDependency:
    """A plugin or parser loaded into memory by the resolver."""

    id: str
    definition: Any
    file_path: str | None = None
    importer_name: str | None = None


@dataclass(frozen=True)
class IgnorePattern:
    """Top-level ``ignorePatterns`` of a config, in declaration order."""

    patterns: list[str]
    base_path: str | None = None


@dataclass(frozen=True)
class OverridePattern:
    """One ``files`` / ``excludedFiles`` pair of an override."""

    includes: list[str] | None = None
    excludes: list[str] | None = None


@dataclass(frozen=True)
class OverrideCriteria:
    """File criteria of an override; nested overrides AND their patterns together."""

    patterns: list[OverridePattern]
    base_path: str | None = None

    def and_(self, other: OverrideCriteria | None) -> OverrideCriteria:
        if other is None:
            return self
        return OverrideCriteria(patterns=[*self.patterns, *other.patterns], base_path=self.base_path)


class LegacyConfigNode(TypedDict, total=False):
    """A normalized legacy config node, as produced by the resolver."""

    settings: dict[str, Any]
    rules: dict[str, Any]
    processor: Any
    globals: dict[str, Any]
    parser: ResolvedDependency
    parserOptions: dict[str, Any]
    noInlineConfig: bool
    reportUnusedDisableDirectives: bool
    ignorePattern: IgnorePattern
    criteria: OverrideCriteria
    plugins: dict[str, ResolvedDependency]
    env: dict[str, bool]


@dataclass
class ConfigElement:
    """One entry of the resolver output."""

    kind: ElementKind
    name: str
    node: LegacyConfigNode
    file_path: str | None = None


# ---------------------------------------------------------------------------
# Flat config
# ---------------------------------------------------------------------------


class LanguageOptions(TypedDict, total=False):
    globals: dict[str, Any]
    parser: Any
    parserOptions: dict[str, Any]
    ecmaVersion: int | str
    sourceType: str


class LinterOptions(TypedDict, total=False):
    noInlineConfig: bool
    reportUnusedDisableDirectives: bool


class FlatConfigEntry(TypedDict, total=False):
    """Type definition for one flat config entry."""

    files: list[Any]
    ignores: list[str]
    settings: dict[str, Any]
    rules: dict[str, Any]
    processor: Any
    plugins: dict[str, PluginDefinition]
    languageOptions: LanguageOptions
    linterOptions: LinterOptions


#: An item of a translated flat config list
FlatConfigItem = Union[FlatConfigEntry, str]
