"""
flatcompat exception hierarchy.

All domain-specific exceptions inherit from FlatCompatError, making it easy
to catch any translation failure with a single base class while still allowing
fine-grained handling when needed.

Hierarchy::

    FlatCompatError
    ├── ConfigurationError          - malformed legacy config or settings file
    │   ├── InvalidPatternError     - absolute or ".." override pattern
    │   └── ExtendsCycleError       - circular ``extends`` chain
    ├── ResolutionError             - referenced module or file not found
    │   ├── PluginNotFoundError
    │   ├── ParserNotFoundError
    │   └── ConfigNotFoundError     - shareable config, config file, plugin config
    └── TranslationError
        └── EnvironmentCycleError   - cyclic ``env`` references
"""

from __future__ import annotations


class FlatCompatError(Exception):
    """Base exception for all flatcompat errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- Configuration -----------------------------------------------------------


class ConfigurationError(FlatCompatError):
    """Raised when a legacy config or the tool settings are malformed."""


class InvalidPatternError(ConfigurationError):
    """Raised when an override pattern is absolute or escapes its base directory."""

    def __init__(self, pattern: str, *, source: str | None = None) -> None:
        message = f"Invalid override pattern (expected relative path not containing '..'): {pattern}"
        if source:
            message += f" in {source}"
        super().__init__(message, details={"pattern": pattern, "source": source})
        self.pattern = pattern


class ExtendsCycleError(ConfigurationError):
    """Raised when a config extends itself, directly or transitively."""

    def __init__(self, chain: list[str]) -> None:
        super().__init__(f"Circular extends detected: {' -> '.join(chain)}", details={"chain": chain})
        self.chain = chain


# --- Resolution --------------------------------------------------------------


class ResolutionError(FlatCompatError):
    """Raised when a referenced plugin, parser or config cannot be loaded."""

    kind = "module"

    def __init__(self, name: str, *, importer: str | None = None, searched: str | None = None) -> None:
        message = f"Failed to load {self.kind} '{name}'"
        if importer:
            message += f" declared in '{importer}'"
        if searched:
            message += f" (relative to {searched})"
        super().__init__(message, details={"name": name, "importer": importer, "searched": searched})
        self.name = name
        self.importer = importer


class PluginNotFoundError(ResolutionError):
    """Raised when a plugin module cannot be found or imported."""

    kind = "plugin"


class ParserNotFoundError(ResolutionError):
    """Raised when a parser module cannot be found or imported."""

    kind = "parser"


class ConfigNotFoundError(ResolutionError):
    """Raised when a shareable config, config file or plugin config is missing."""

    kind = "config"


# --- Translation -------------------------------------------------------------


class TranslationError(FlatCompatError):
    """Raised when a resolved config cannot be translated."""


class EnvironmentCycleError(TranslationError):
    """Raised when environment expansion re-enters an environment it is expanding."""

    def __init__(self, cycle: list[str]) -> None:
        super().__init__(f"Environment cycle detected: {' -> '.join(cycle)}", details={"cycle": cycle})
        self.cycle = cycle
