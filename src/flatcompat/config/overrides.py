"""
Override criteria construction.

``overrides[*].files`` and ``overrides[*].excludedFiles`` become an
:class:`OverrideCriteria`. Patterns are kept as written; matching files
against them is the consumer's job.
"""

from __future__ import annotations

import posixpath
from typing import Any

from flatcompat.core.types import OverrideCriteria, OverridePattern
from flatcompat.exceptions import ConfigurationError, InvalidPatternError


def to_pattern_list(value: Any, *, key: str, source: str) -> list[str] | None:
    """Accept a single pattern or a list of patterns; None for missing or empty."""
    if value is None:
        return None
    patterns = [value] if isinstance(value, str) else value
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise ConfigurationError(
            f"'{key}' must be a string or a list of strings in {source}",
            details={"key": key, "source": source},
        )
    return list(patterns) or None


def _validate_pattern(pattern: str, source: str) -> None:
    normalized = pattern.lstrip("!")
    if posixpath.isabs(normalized) or normalized.startswith("\\"):
        raise InvalidPatternError(pattern, source=source)
    if ".." in normalized.replace("\\", "/").split("/"):
        raise InvalidPatternError(pattern, source=source)


def create_criteria(
    files: Any,
    excluded_files: Any = None,
    *,
    base_path: str | None = None,
    source: str = "<input>",
) -> OverrideCriteria | None:
    """
    Build the criteria of one override.

    Args:
        files: ``files`` value (string or list)
        excluded_files: ``excludedFiles`` value (string or list)
        base_path: Directory the patterns are relative to
        source: Config name used in error messages

    Returns:
        Criteria with a single pattern pair, or None when neither key has patterns

    Raises:
        ConfigurationError: If a value is neither a string nor a list of strings
        InvalidPatternError: If a pattern is absolute or contains ``..``
    """
    includes = to_pattern_list(files, key="files", source=source)
    excludes = to_pattern_list(excluded_files, key="excludedFiles", source=source)

    for pattern in (includes or []) + (excludes or []):
        _validate_pattern(pattern, source)

    if includes is None and excludes is None:
        return None
    return OverrideCriteria(patterns=[OverridePattern(includes=includes, excludes=excludes)], base_path=base_path)


def combine_criteria(parent: OverrideCriteria | None, child: OverrideCriteria | None) -> OverrideCriteria | None:
    """AND two criteria together; either side may be absent."""
    if parent is None:
        return child
    return parent.and_(child)
