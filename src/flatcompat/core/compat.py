"""
FlatCompat facade.

Resolves a legacy config and translates every resolved config element, so
eslintrc-style configs can be dropped into a flat config list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from flatcompat.config.resolver import ConfigResolver
from flatcompat.core.translator import Translator
from flatcompat.core.types import ConfigElement, FlatConfigItem
from flatcompat.environments import EnvironmentTable
from flatcompat.utils.logging import get_logger


class FlatCompat:
    """
    Translate eslintrc-style configs into flat config items.

    Args:
        base_directory: Directory shareable configs, parsers and relative paths resolve from
            (default: current working directory)
        resolve_plugins_relative_to: Directory plugins resolve from (default: base_directory)
        environments: Builtin environment table (default: packaged table)
        logger: Logger shared by the resolver and translator (default: ``flatcompat`` loggers)

    Usage:
        compat = FlatCompat(base_directory=project_dir)
        flat = [
            *compat.extends("eslint:recommended", "standard"),
            *compat.env({"node": True}),
            *compat.plugins("react"),
        ]
    """

    def __init__(
        self,
        base_directory: str | Path | None = None,
        resolve_plugins_relative_to: str | Path | None = None,
        environments: EnvironmentTable | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.base_directory = Path(base_directory) if base_directory is not None else Path.cwd()
        self.resolve_plugins_relative_to = (
            Path(resolve_plugins_relative_to) if resolve_plugins_relative_to is not None else self.base_directory
        )
        self.logger = logger or get_logger("flatcompat.compat")
        self.resolver = ConfigResolver(self.base_directory, self.resolve_plugins_relative_to, logger=logger)
        self.translator = Translator(environments=environments, logger=logger)

    def config(self, eslintrc_config: Mapping[str, Any]) -> list[FlatConfigItem]:
        """
        Translate an eslintrc-style config object.

        Args:
            eslintrc_config: Legacy config mapping (``extends``, ``overrides``, ``plugins`` ...)

        Returns:
            Flat config items, lowest precedence first
        """
        return self._translate_elements(self.resolver.resolve(eslintrc_config))

    def config_file(self, file_path: str | Path) -> list[FlatConfigItem]:
        """Translate a legacy config file; relative references resolve from its directory."""
        return self._translate_elements(self.resolver.resolve_file(file_path))

    def env(self, env_config: Mapping[str, bool]) -> list[FlatConfigItem]:
        """Translate the ``env`` section of an eslintrc-style config."""
        return self.config({"env": dict(env_config)})

    def extends(self, *config_names: str) -> list[FlatConfigItem]:
        """Translate the ``extends`` section of an eslintrc-style config."""
        return self.config({"extends": list(config_names)})

    def plugins(self, *plugin_names: str) -> list[FlatConfigItem]:
        """Translate the ``plugins`` section of an eslintrc-style config."""
        return self.config({"plugins": list(plugin_names)})

    def _translate_elements(self, elements: Iterable[ConfigElement]) -> list[FlatConfigItem]:
        flat_config: list[FlatConfigItem] = []
        for element in elements:
            if element.kind != "config":
                self.logger.debug(f"Skipping {element.kind} element: {element.name}")
                continue
            flat_config.extend(self.translator.translate(element.node))
        return flat_config
