"""
Legacy config file loading.

Reads ``.eslintrc.yaml``, ``.eslintrc.yml`` and the bare ``.eslintrc`` with
PyYAML, ``.json`` files (tab indentation included) with the json module, and
the ``eslintConfig`` key of ``package.json``.
"""

import json
from pathlib import Path
from typing import Any

import yaml

from flatcompat.exceptions import ConfigNotFoundError, ConfigurationError

CONFIG_SUFFIXES = (".yaml", ".yml", ".json")

#: Legacy config file names, in lookup order
CONFIG_FILENAMES = (
    ".eslintrc.yaml",
    ".eslintrc.yml",
    ".eslintrc.json",
    ".eslintrc",
    "package.json",
)


def load_config_file(path: Path) -> dict[str, Any]:
    """
    Load a legacy config file.

    Args:
        path: Config file path

    Returns:
        The raw config mapping (empty for empty files)

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigurationError: If the file cannot be parsed or is not a mapping
    """
    if not path.is_file():
        raise ConfigNotFoundError(str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigurationError(
            f"Permission denied reading config file: {path}\n" f"  Error: {e}",
            details={"file": str(path)},
        ) from e

    if path.name == "package.json":
        return _load_package_json(path, text)

    if path.suffix == ".json":
        return _ensure_mapping(_parse_json(path, text), path)

    if path.suffix not in CONFIG_SUFFIXES and path.name != ".eslintrc":
        raise ConfigurationError(
            f"Unsupported config file format: {path.name}\n"
            f"  Suggestion: Use one of {', '.join(CONFIG_SUFFIXES)}",
            details={"file": str(path)},
        )

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            raise ConfigurationError(
                f"Error parsing {path.name} at line {mark.line + 1}, column {mark.column + 1}:\n"
                f"  {e}\n"
                f"  File: {path}",
                details={"file": str(path), "line": mark.line + 1, "column": mark.column + 1},
            ) from e
        raise ConfigurationError(f"Error parsing {path.name}: {e}\n  File: {path}", details={"file": str(path)}) from e

    return _ensure_mapping(data, path)


def _parse_json(path: Path, text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Error parsing {path.name} at line {e.lineno}, column {e.colno}:\n" f"  {e.msg}\n" f"  File: {path}",
            details={"file": str(path), "line": e.lineno, "column": e.colno},
        ) from e


def _load_package_json(path: Path, text: str) -> dict[str, Any]:
    package = _parse_json(path, text)

    if not isinstance(package, dict) or "eslintConfig" not in package:
        raise ConfigurationError(f"package.json has no 'eslintConfig' key: {path}", details={"file": str(path)})
    return _ensure_mapping(package["eslintConfig"], path)


def _ensure_mapping(data: Any, path: Path) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config in {path.name} must be a mapping, got {type(data).__name__}",
            details={"file": str(path)},
        )
    return data


def find_config_file(directory: Path) -> Path | None:
    """Return the first legacy config file in ``directory``, if any."""
    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if not candidate.is_file():
            continue
        if filename == "package.json":
            try:
                if "eslintConfig" not in json.loads(candidate.read_text(encoding="utf-8")):
                    continue
            except (json.JSONDecodeError, AttributeError, TypeError):
                continue
        return candidate
    return None
