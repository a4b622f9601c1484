"""
Environment tables.

An environment is a named legacy config fragment (``globals`` plus
``parserOptions`` defaults). The builtin table ships as YAML package data and
is loaded once per process.
"""

from __future__ import annotations

import functools
from collections.abc import Iterator, Mapping
from importlib import resources
from types import MappingProxyType
from typing import Any

import yaml

from flatcompat.core.types import LegacyConfigNode
from flatcompat.exceptions import ConfigurationError

BUILTIN_RESOURCE = "builtin.yaml"


class EnvironmentTable(Mapping[str, LegacyConfigNode]):
    """Read-only mapping of environment name to legacy config fragment."""

    def __init__(self, environments: Mapping[str, LegacyConfigNode] | None = None) -> None:
        self._environments: Mapping[str, LegacyConfigNode] = MappingProxyType(dict(environments or {}))

    def __getitem__(self, name: str) -> LegacyConfigNode:
        return self._environments[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._environments)

    def __len__(self) -> int:
        return len(self._environments)

    def __repr__(self) -> str:
        return f"EnvironmentTable({sorted(self._environments)!r})"

    def with_overrides(self, environments: Mapping[str, LegacyConfigNode]) -> EnvironmentTable:
        """Return a new table where ``environments`` replace or extend this one."""
        return EnvironmentTable({**self._environments, **environments})


def parse_environments(data: Any, source: str = "<environments>") -> dict[str, LegacyConfigNode]:
    """Validate the top-level shape of an environment document."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Environment table must be a mapping, got {type(data).__name__} in {source}")

    environments: dict[str, LegacyConfigNode] = {}
    for name, fragment in data.items():
        if not isinstance(fragment, dict):
            raise ConfigurationError(
                f"Environment '{name}' must be a mapping, got {type(fragment).__name__} in {source}",
                details={"environment": name},
            )
        environments[str(name)] = fragment  # type: ignore[assignment]
    return environments


@functools.lru_cache(maxsize=1)
def load_builtin_environments() -> EnvironmentTable:
    """Load the builtin environment table shipped with the package."""
    text = resources.files("flatcompat.environments").joinpath(BUILTIN_RESOURCE).read_text(encoding="utf-8")
    return EnvironmentTable(parse_environments(yaml.safe_load(text), source=BUILTIN_RESOURCE))
