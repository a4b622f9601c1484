"""
Legacy config node to flat config translation.

A legacy node expresses precedence through cascading; a flat config list
expresses it through position. Every step below either adds to the node's own
entry or places a derived entry in front of (weaker than) or behind
(stronger than) what has been produced so far.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from flatcompat.core.sequence import PrecedenceSequence
from flatcompat.core.types import (
    ESLINT_ALL,
    ESLINT_RECOMMENDED,
    FlatConfigEntry,
    FlatConfigItem,
    LegacyConfigNode,
)
from flatcompat.environments import EnvironmentTable, load_builtin_environments
from flatcompat.exceptions import EnvironmentCycleError
from flatcompat.utils.logging import get_logger

VERBATIM_KEYS = ("settings", "rules", "processor")
LANGUAGE_OPTION_KEYS = ("globals", "parser", "parserOptions")
HOISTED_PARSER_OPTIONS = ("ecmaVersion", "sourceType")
LINTER_OPTION_KEYS = ("noInlineConfig", "reportUnusedDisableDirectives")


class Translator:
    """
    Translate resolved legacy config nodes into flat config items.

    The translator is stateless between calls: the environment table and the
    logger are fixed at construction, and every call allocates new entries.

    Args:
        environments: Builtin environment table (default: packaged table)
        logger: Logger for debug output (default: ``flatcompat.translator``)
    """

    def __init__(
        self,
        environments: EnvironmentTable | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.environments = environments if environments is not None else load_builtin_environments()
        self.logger = logger or get_logger("flatcompat.translator")

    def translate(self, node: LegacyConfigNode) -> list[FlatConfigItem]:
        """
        Translate one legacy config node.

        Returns:
            Flat config items, lowest precedence first

        Raises:
            EnvironmentCycleError: If environment expansion is cyclic
        """
        return self._translate(node, ()).to_list()

    def _translate(self, node: LegacyConfigNode, env_chain: tuple[str, ...]) -> PrecedenceSequence:
        sentinel = self._sentinel(node)
        if sentinel is not None:
            return PrecedenceSequence([sentinel])

        configs = PrecedenceSequence()
        own: FlatConfigEntry = {}

        for key in VERBATIM_KEYS:
            if key in node:
                own[key] = node[key]  # type: ignore[literal-required]

        language_options = self._language_options(node)
        if language_options:
            own["languageOptions"] = language_options  # type: ignore[typeddict-item]

        linter_options = {key: node[key] for key in LINTER_OPTION_KEYS if key in node}  # type: ignore[literal-required]
        if linter_options:
            own["linterOptions"] = linter_options  # type: ignore[typeddict-item]

        ignore_pattern = node.get("ignorePattern")
        if ignore_pattern is not None:
            configs.push_front({"ignores": list(_member(ignore_pattern, "patterns"))})

        criteria = node.get("criteria")
        if criteria is not None:
            for pattern in _member(criteria, "patterns") or ():
                includes = _member(pattern, "includes")
                excludes = _member(pattern, "excludes")
                if includes is not None:
                    own["files"] = list(includes)
                if excludes is not None:
                    if includes is not None:
                        own["ignores"] = list(excludes)
                    else:
                        # Nested on purpose: one negated group, not a flat pattern list
                        own["files"] = [[f"!{exclude}" for exclude in excludes]]

        plugin_environments = self._translate_plugins(node, own, configs)

        for env_name, enabled in (node.get("env") or {}).items():
            if not enabled:
                continue
            self.logger.debug(f"Translating environment: {env_name}")

            if env_name in self.environments:
                # Builtin environments are defaults: below everything else
                configs.push_front_all(
                    self._translate_environment(env_name, self.environments[env_name], env_chain)
                )
            elif env_name in plugin_environments:
                # Plugin environments override the plugin registration, not the node itself
                configs.push_back_all(
                    self._translate_environment(env_name, plugin_environments[env_name], env_chain)
                )
            else:
                self.logger.debug(f"Unknown environment ignored: {env_name}")

        if own:
            configs.push_back(own)

        return configs

    def _sentinel(self, node: LegacyConfigNode) -> str | None:
        settings = node.get("settings") or {}
        is_all = settings.get(ESLINT_ALL) is True
        is_recommended = settings.get(ESLINT_RECOMMENDED) is True

        if is_all and is_recommended:
            self.logger.warning(f"Both '{ESLINT_ALL}' and '{ESLINT_RECOMMENDED}' are set; using '{ESLINT_ALL}'")
        if is_all:
            return ESLINT_ALL
        if is_recommended:
            return ESLINT_RECOMMENDED
        return None

    def _language_options(self, node: LegacyConfigNode) -> dict[str, Any]:
        language_options: dict[str, Any] = {}

        for key in LANGUAGE_OPTION_KEYS:
            if key not in node:
                continue
            value = node[key]  # type: ignore[literal-required]
            if key == "parser":
                self.logger.debug(f"Using parser '{_member(value, 'id')}'")
                language_options[key] = _member(value, "definition")
            elif isinstance(value, Mapping):
                language_options[key] = dict(value)
            else:
                language_options[key] = value

        parser_options = language_options.get("parserOptions")
        if isinstance(parser_options, dict):
            for key in HOISTED_PARSER_OPTIONS:
                if key in parser_options:
                    language_options[key] = parser_options.pop(key)
            if not parser_options:
                del language_options["parserOptions"]

        return language_options

    def _translate_plugins(
        self,
        node: LegacyConfigNode,
        own: FlatConfigEntry,
        configs: PrecedenceSequence,
    ) -> dict[str, LegacyConfigNode]:
        """Register plugins on ``own``; return the plugin environments keyed ``plugin/env``."""
        plugin_environments: dict[str, LegacyConfigNode] = {}
        plugins = node.get("plugins")
        if not plugins:
            return plugin_environments

        self.logger.debug(f"Translating plugins: {', '.join(plugins)}")
        own["plugins"] = {}

        for plugin_name, plugin in plugins.items():
            definition = _member(plugin, "definition")
            own["plugins"][plugin_name] = definition

            for processor_name, processor in (_member(definition, "processors") or {}).items():
                if processor_name.startswith("."):
                    self.logger.debug(f"Assigning processor: {plugin_name}/{processor_name}")
                    configs.push_front({"files": [f"**/*{processor_name}"], "processor": processor})

            for env_name, environment in (_member(definition, "environments") or {}).items():
                plugin_environments[f"{plugin_name}/{env_name}"] = environment

        return plugin_environments

    def _translate_environment(
        self,
        env_name: str,
        environment: LegacyConfigNode,
        env_chain: tuple[str, ...],
    ) -> PrecedenceSequence:
        if env_name in env_chain:
            cycle = [*env_chain[env_chain.index(env_name) :], env_name]
            raise EnvironmentCycleError(cycle)
        return self._translate(environment, (*env_chain, env_name))


def _member(definition: Any, name: str) -> Any:
    """Read a member from a dict or from an attribute-style object."""
    if isinstance(definition, Mapping):
        return definition.get(name)
    return getattr(definition, name, None)


def translate(node: LegacyConfigNode, environments: EnvironmentTable | None = None) -> list[FlatConfigItem]:
    """Translate ``node`` with a one-off :class:`Translator`."""
    return Translator(environments=environments).translate(node)
