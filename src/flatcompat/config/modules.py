"""
Import plugin, parser and shareable-config modules.

A module is looked up in a directory first (``<dir>/<module>.py`` or
``<dir>/<module>/__init__.py``) and then on the regular import path.
Modules loaded from files are registered under ``flatcompat._loaded`` with a
key derived from their path, never under their bare name.
"""

from __future__ import annotations

import hashlib
import importlib
import importlib.util
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from flatcompat.utils.logging import get_logger

logger = get_logger("flatcompat.modules")

#: ``sys.modules`` namespace for modules loaded from files
LOADED_NAMESPACE = "flatcompat._loaded"


@dataclass(frozen=True)
class LoadedModule:
    """A module together with the file it was loaded from."""

    module: ModuleType
    file_path: str | None


def find_module_file(module_name: str, directory: Path) -> Path | None:
    """Locate ``module_name`` under ``directory`` without importing it."""
    parts = module_name.split(".")
    base = directory.joinpath(*parts[:-1])

    module_file = base / f"{parts[-1]}.py"
    if module_file.is_file():
        return module_file

    package_init = base / parts[-1] / "__init__.py"
    if package_init.is_file():
        return package_init

    return None


def loaded_module_key(module_name: str, path: Path) -> str:
    """Private ``sys.modules`` key for a module loaded from ``path``."""
    digest = hashlib.sha256(str(path.resolve()).encode("utf-8")).hexdigest()[:12]
    return f"{LOADED_NAMESPACE}.{module_name.replace('.', '_')}_{digest}"


def _load_from_file(module_name: str, path: Path) -> ModuleType:
    # Keyed by resolved path so a local json.py never shadows the real json
    key = loaded_module_key(module_name, path)
    existing = sys.modules.get(key)
    if existing is not None:
        return existing

    search_locations = [str(path.parent)] if path.name == "__init__.py" else None
    spec = importlib.util.spec_from_file_location(key, path, submodule_search_locations=search_locations)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot create an import spec for {path}", name=module_name, path=str(path))

    module = importlib.util.module_from_spec(spec)
    # Registered before execution so package-relative imports resolve
    sys.modules[key] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(key, None)
        raise
    return module


def load_module(module_name: str, directory: Path | None = None) -> LoadedModule | None:
    """
    Import ``module_name``, preferring a file under ``directory``.

    Returns:
        The loaded module, or None if no such module exists. Errors raised
        while executing a module that does exist propagate unchanged.
    """
    if directory is not None:
        path = find_module_file(module_name, directory)
        if path is not None:
            logger.debug(f"Loading module '{module_name}' from {path}")
            return LoadedModule(_load_from_file(module_name, path), str(path))

    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        # Only a miss on the module itself counts; missing dependencies of it propagate
        if e.name is not None and (module_name == e.name or module_name.startswith(e.name + ".")):
            return None
        raise

    return LoadedModule(module, getattr(module, "__file__", None))


def load_module_from_path(path: Path) -> LoadedModule | None:
    """Import a module from an explicit ``.py`` file or package directory."""
    if path.is_dir():
        path = path / "__init__.py"
    if not path.is_file():
        return None
    module_name = path.parent.name if path.name == "__init__.py" else path.stem
    logger.debug(f"Loading module '{module_name}' from {path}")
    return LoadedModule(_load_from_file(module_name.replace("-", "_"), path), str(path))
