"""
Core translation.

The translator turns one resolved legacy config node into flat config items;
the FlatCompat facade (``flatcompat.core.compat``) drives it over resolver output.
"""

from flatcompat.core.sequence import PrecedenceSequence
from flatcompat.core.translator import Translator, translate
from flatcompat.core.types import (
    ESLINT_ALL,
    ESLINT_RECOMMENDED,
    ConfigElement,
    FlatConfigEntry,
    FlatConfigItem,
    IgnorePattern,
    LegacyConfigNode,
    OverrideCriteria,
    OverridePattern,
    ResolvedDependency,
)

__all__ = [
    "ESLINT_ALL",
    "ESLINT_RECOMMENDED",
    "ConfigElement",
    "FlatConfigEntry",
    "FlatConfigItem",
    "IgnorePattern",
    "LegacyConfigNode",
    "OverrideCriteria",
    "OverridePattern",
    "PrecedenceSequence",
    "ResolvedDependency",
    "Translator",
    "translate",
]
