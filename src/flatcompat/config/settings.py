"""
Tool settings.

Optional ``.flatcompat.yaml`` in the project directory. Values may reference
environment variables with ``${VAR_NAME}``.
"""

import os
import re
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from flatcompat.exceptions import ConfigurationError

SETTINGS_FILENAME = ".flatcompat.yaml"

_ENV_VAR = re.compile(r"\${([^}]+)}")


class Settings:
    """Tool settings container with dict-like access."""

    def __init__(self, data: dict[str, Any] | None = None):
        self.data = data or {}
        # Convenience properties for common settings
        self.base_directory = self.data.get("base_directory")
        self.resolve_plugins_relative_to = self.data.get("resolve_plugins_relative_to")
        self.format = self.data.get("format")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting using dot notation: ``settings.get("logging.level")``."""
        value: Any = self.data
        for k in key.split("."):
            if not isinstance(value, dict) or k not in value:
                return default
            value = value[k]
        return value

    def __getitem__(self, key: str) -> Any:
        if "." in key:
            return self.get(key)
        if key in self.data:
            value = self.data[key]
            if isinstance(value, dict):
                return Settings(value)
            return value
        raise KeyError(f"Setting '{key}' not found")

    def __contains__(self, key: str) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def validate(self) -> None:
        """Validate settings structure."""
        errors = []

        for key in ("base_directory", "resolve_plugins_relative_to", "format"):
            value = self.data.get(key)
            if value is not None and not isinstance(value, str):
                errors.append(f"Setting '{key}' must be a string, got {type(value).__name__}")

        if self.format is not None and self.format not in ("json", "yaml"):
            errors.append(f"Setting 'format' must be 'json' or 'yaml', got '{self.format}'")

        logging_section = self.data.get("logging")
        if logging_section is not None and not isinstance(logging_section, dict):
            errors.append(f"Setting 'logging' must be a dictionary, got {type(logging_section).__name__}")

        if errors:
            raise ConfigurationError("\n".join(errors), details={"errors": errors})


def load_settings(project_path: Path | None = None) -> Settings:
    """
    Load tool settings from ``.flatcompat.yaml``.

    Args:
        project_path: Project directory (default: current directory)

    Returns:
        Settings; empty when the project has no settings file

    Raises:
        ConfigurationError: If the file cannot be parsed or fails validation
    """
    if project_path is None:
        project_path = Path.cwd()

    settings_path = project_path / SETTINGS_FILENAME
    if not settings_path.is_file():
        return Settings()

    with open(settings_path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            if mark is not None:
                raise ConfigurationError(
                    f"Error parsing {SETTINGS_FILENAME} at line {mark.line + 1}, column {mark.column + 1}:\n"
                    f"  {e}\n"
                    f"  File: {settings_path}\n"
                    f"  Suggestion: Check YAML syntax, ensure proper indentation and quotes",
                    details={"file": str(settings_path)},
                ) from e
            raise ConfigurationError(f"Error parsing {SETTINGS_FILENAME}: {e}", details={"file": str(settings_path)}) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{SETTINGS_FILENAME} must be a mapping, got {type(data).__name__}",
            details={"file": str(settings_path)},
        )

    settings = Settings(substitute_env_vars(data))
    settings.validate()
    return settings


def substitute_env_vars(value: Any) -> Any:
    """Recursively substitute ``${VAR_NAME}``; unknown variables are left as written."""
    if isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    elif isinstance(value, str):
        return _ENV_VAR.sub(lambda m: os.getenv(m.group(1), m.group(0)), value)
    else:
        return value
