"""
flatcompat - translate legacy cascading ESLint configs into flat config lists.

Legacy configs express precedence through ``extends``, ``env``, ``overrides``
and plugins; flat configs express it through list order. ``FlatCompat``
resolves a legacy config and produces the equivalent ordered list.
"""

__version__ = "0.1.0"

# Facade and core
from flatcompat.core.compat import FlatCompat
from flatcompat.core.translator import Translator, translate
from flatcompat.core.types import ESLINT_ALL, ESLINT_RECOMMENDED

# Resolution
from flatcompat.config.resolver import ConfigResolver
from flatcompat.environments import EnvironmentTable, load_builtin_environments

# Exceptions
from flatcompat.exceptions import (
    ConfigNotFoundError,
    ConfigurationError,
    EnvironmentCycleError,
    ExtendsCycleError,
    FlatCompatError,
    InvalidPatternError,
    ParserNotFoundError,
    PluginNotFoundError,
    ResolutionError,
    TranslationError,
)

# Logging utilities
from flatcompat.utils.logging import get_logger, setup_logging

__all__ = [
    # Facade
    "FlatCompat",
    "Translator",
    "translate",
    "ESLINT_ALL",
    "ESLINT_RECOMMENDED",
    # Resolution
    "ConfigResolver",
    "EnvironmentTable",
    "load_builtin_environments",
    # Logging
    "setup_logging",
    "get_logger",
    # Exceptions
    "FlatCompatError",
    "ConfigurationError",
    "InvalidPatternError",
    "ExtendsCycleError",
    "ResolutionError",
    "PluginNotFoundError",
    "ParserNotFoundError",
    "ConfigNotFoundError",
    "TranslationError",
    "EnvironmentCycleError",
]
