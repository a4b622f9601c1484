"""
Legacy config resolution.

Flattens a user-authored legacy config into an ordered list of
:class:`ConfigElement`. For each config object the order is: everything it
extends, the implicit processor elements of the plugins it loads, the config
itself, then each of its overrides.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from flatcompat.config.loader import load_config_file
from flatcompat.config.modules import LoadedModule, load_module, load_module_from_path
from flatcompat.config.naming import (
    CONFIG_PREFIX,
    PLUGIN_PREFIX,
    get_shorthand_name,
    normalize_package_name,
    to_module_name,
)
from flatcompat.config.overrides import combine_criteria, create_criteria, to_pattern_list
from flatcompat.core.types import (
    SENTINELS,
    ConfigElement,
    IgnorePattern,
    LegacyConfigNode,
    OverrideCriteria,
    PluginDefinition,
    ResolvedDependency,
)
from flatcompat.exceptions import (
    ConfigNotFoundError,
    ConfigurationError,
    ExtendsCycleError,
    ParserNotFoundError,
    PluginNotFoundError,
)
from flatcompat.utils.logging import get_logger

#: Keys copied from a legacy config into its normalized node
NODE_KEYS = (
    "env",
    "globals",
    "noInlineConfig",
    "parserOptions",
    "processor",
    "reportUnusedDisableDirectives",
    "rules",
    "settings",
)

BASE_KEYS = frozenset(NODE_KEYS) | {"extends", "overrides", "parser", "plugins"}
TOP_LEVEL_KEYS = BASE_KEYS | {"root", "ignorePatterns", "$schema"}
OVERRIDE_KEYS = BASE_KEYS | {"files", "excludedFiles"}

MAPPING_KEYS = ("env", "globals", "parserOptions", "rules", "settings")
BOOLEAN_KEYS = ("noInlineConfig", "reportUnusedDisableDirectives", "root")

PLUGIN_MEMBERS = ("meta", "configs", "rules", "environments", "processors")
SHAREABLE_CONFIG_SUFFIXES = (".yaml", ".yml", ".json")


@dataclass(frozen=True)
class _Context:
    """Where a config object came from and what applies to it."""

    name: str
    directory: Path
    file_path: Path | None = None
    criteria: OverrideCriteria | None = None
    chain: tuple[str, ...] = ()
    in_override: bool = False


def normalize_plugin(module: Any) -> PluginDefinition:
    """
    Build a plugin definition from a plugin module.

    A module may export a ``plugin`` mapping (or object), or expose
    ``configs``, ``rules``, ``environments``, ``processors`` and ``meta``
    as module attributes. Missing members default to empty dicts.
    """
    source = getattr(module, "plugin", None)
    if source is None:
        source = module
    if isinstance(source, Mapping):
        members = dict(source)
    else:
        members = {name: getattr(source, name) for name in PLUGIN_MEMBERS if hasattr(source, name)}
    return {"configs": {}, "rules": {}, "environments": {}, "processors": {}, **members}


def _is_path_reference(name: str) -> bool:
    return (
        name.startswith(("./", "../", ".\\", "..\\", "/"))
        or Path(name).is_absolute()
        or name.endswith((*SHAREABLE_CONFIG_SUFFIXES, ".py"))
    )


class ConfigResolver:
    """
    Resolve legacy configs into normalized config elements.

    Args:
        base_directory: Directory for shareable configs, parsers and relative paths
        resolve_plugins_relative_to: Directory for plugins (default: base_directory)
        logger: Logger for debug output (default: ``flatcompat.resolver``)
    """

    def __init__(
        self,
        base_directory: str | Path | None = None,
        resolve_plugins_relative_to: str | Path | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.base_directory = Path(base_directory) if base_directory is not None else Path.cwd()
        self.resolve_plugins_relative_to = (
            Path(resolve_plugins_relative_to) if resolve_plugins_relative_to is not None else self.base_directory
        )
        self.logger = logger or get_logger("flatcompat.resolver")
        self._plugins: dict[str, tuple[PluginDefinition, str | None]] = {}

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def resolve(
        self,
        config_data: Mapping[str, Any],
        *,
        name: str = "<input>",
        file_path: str | Path | None = None,
    ) -> list[ConfigElement]:
        """
        Flatten ``config_data`` into config elements.

        Args:
            config_data: Legacy config mapping
            name: Display name used in element names and errors
            file_path: File the config was read from; relative references resolve from its directory

        Returns:
            Config elements in precedence order (lowest first)
        """
        path = Path(file_path).resolve() if file_path is not None else None
        ctx = _Context(
            name=name,
            directory=path.parent if path is not None else self.base_directory,
            file_path=path,
            chain=(str(path),) if path is not None else (),
        )
        return list(self._normalize(config_data, ctx))

    def resolve_file(self, file_path: str | Path) -> list[ConfigElement]:
        """Load a legacy config file and flatten it."""
        path = Path(file_path)
        if not path.is_absolute():
            path = self.base_directory / path
        self.logger.debug(f"Loading config file: {path}")
        return self.resolve(load_config_file(path), name=path.name, file_path=path)

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------

    def _normalize(self, config_data: Any, ctx: _Context) -> Iterator[ConfigElement]:
        if not isinstance(config_data, Mapping):
            raise ConfigurationError(
                f"Config '{ctx.name}' must be a mapping, got {type(config_data).__name__}",
                details={"config": ctx.name},
            )

        allowed = OVERRIDE_KEYS if ctx.in_override else TOP_LEVEL_KEYS
        unexpected = [key for key in config_data if key not in allowed]
        if unexpected:
            where = "overrides" if ctx.in_override else "top level"
            raise ConfigurationError(
                f"Unexpected {where} property {', '.join(repr(k) for k in unexpected)} in '{ctx.name}'",
                details={"config": ctx.name, "keys": unexpected},
            )

        for key in MAPPING_KEYS:
            if key in config_data and not isinstance(config_data[key], Mapping):
                raise ConfigurationError(
                    f"'{key}' must be a mapping in '{ctx.name}', got {type(config_data[key]).__name__}",
                    details={"config": ctx.name, "key": key},
                )
        for key in BOOLEAN_KEYS:
            if key in config_data and not isinstance(config_data[key], bool):
                raise ConfigurationError(
                    f"'{key}' must be a boolean in '{ctx.name}'",
                    details={"config": ctx.name, "key": key},
                )

        for extend_name in self._extends_list(config_data.get("extends"), ctx):
            yield from self._load_extends(extend_name, ctx)

        parser = self._load_parser(config_data["parser"], ctx) if config_data.get("parser") else None
        plugins = self._load_plugins(config_data["plugins"], ctx) if config_data.get("plugins") else None

        if plugins:
            yield from self._take_file_extension_processors(plugins, ctx)

        node: LegacyConfigNode = {}
        for key in NODE_KEYS:
            if key in config_data:
                node[key] = config_data[key]  # type: ignore[literal-required]
        if parser is not None:
            node["parser"] = parser
        if plugins is not None:
            node["plugins"] = plugins
        if ctx.criteria is not None:
            node["criteria"] = ctx.criteria

        ignore_patterns = to_pattern_list(config_data.get("ignorePatterns"), key="ignorePatterns", source=ctx.name)
        if ignore_patterns:
            if ctx.criteria is not None:
                raise ConfigurationError(
                    f"'ignorePatterns' is not allowed inside overrides ('{ctx.name}')",
                    details={"config": ctx.name},
                )
            node["ignorePattern"] = IgnorePattern(patterns=ignore_patterns, base_path=str(ctx.directory))

        yield ConfigElement(
            kind="config",
            name=ctx.name,
            node=node,
            file_path=str(ctx.file_path) if ctx.file_path is not None else None,
        )

        overrides = config_data.get("overrides") or []
        if not isinstance(overrides, list):
            raise ConfigurationError(f"'overrides' must be a list in '{ctx.name}'", details={"config": ctx.name})
        for index, override in enumerate(overrides):
            yield from self._normalize_override(override, replace(ctx, name=f"{ctx.name}#overrides[{index}]"))

    def _normalize_override(self, override: Any, ctx: _Context) -> Iterator[ConfigElement]:
        if not isinstance(override, Mapping):
            raise ConfigurationError(f"Override '{ctx.name}' must be a mapping", details={"config": ctx.name})
        if "files" not in override:
            raise ConfigurationError(f"Override '{ctx.name}' requires 'files'", details={"config": ctx.name})

        criteria = create_criteria(
            override["files"],
            override.get("excludedFiles"),
            base_path=str(ctx.directory),
            source=ctx.name,
        )
        if criteria is None:
            raise ConfigurationError(f"Override '{ctx.name}' has no file patterns", details={"config": ctx.name})

        body = {key: value for key, value in override.items() if key not in ("files", "excludedFiles")}
        yield from self._normalize(
            body,
            replace(ctx, criteria=combine_criteria(ctx.criteria, criteria), in_override=True),
        )

    def _extends_list(self, value: Any, ctx: _Context) -> list[str]:
        if value is None:
            return []
        names = [value] if isinstance(value, str) else value
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise ConfigurationError(
                f"'extends' must be a string or a list of strings in '{ctx.name}'",
                details={"config": ctx.name},
            )
        return [n for n in names if n]

    # ------------------------------------------------------------------
    # extends
    # ------------------------------------------------------------------

    def _load_extends(self, extend_name: str, ctx: _Context) -> Iterator[ConfigElement]:
        self.logger.debug(f"Loading extends '{extend_name}' from '{ctx.name}'")

        if extend_name in SENTINELS:
            data: Any = {"settings": {extend_name: True}}
            yield from self._normalize(data, self._extends_context(extend_name, extend_name, ctx))
            return

        if extend_name.startswith("plugin:"):
            data, sub_ctx = self._load_plugin_config(extend_name, ctx)
        elif _is_path_reference(extend_name):
            data, sub_ctx = self._load_config_path(extend_name, ctx)
        else:
            data, sub_ctx = self._load_shareable_config(extend_name, ctx)

        yield from self._normalize(data, sub_ctx)

    def _extends_context(
        self,
        extend_name: str,
        identity: str,
        ctx: _Context,
        *,
        file_path: Path | None = None,
        directory: Path | None = None,
    ) -> _Context:
        if identity in ctx.chain:
            raise ExtendsCycleError([*ctx.chain[ctx.chain.index(identity) :], identity])
        return _Context(
            name=f"{ctx.name} » {extend_name}",
            directory=directory or ctx.directory,
            file_path=file_path,
            criteria=ctx.criteria,
            chain=(*ctx.chain, identity),
        )

    def _load_plugin_config(self, extend_name: str, ctx: _Context) -> tuple[Any, _Context]:
        # plugin:<plugin>/<config>; scoped plugins contain a slash of their own
        reference = extend_name[len("plugin:") :]
        plugin_name, slash, config_name = reference.rpartition("/")
        if not slash or not plugin_name or not config_name:
            raise ConfigurationError(
                f"Invalid plugin config reference '{extend_name}' in '{ctx.name}'",
                details={"config": ctx.name, "extends": extend_name},
            )

        plugin = self._load_plugin(plugin_name, ctx)
        configs = plugin.definition.get("configs") or {}
        if config_name not in configs:
            raise ConfigNotFoundError(extend_name, importer=ctx.name)

        directory = Path(plugin.file_path).parent if plugin.file_path else None
        identity = f"plugin:{plugin.id}/{config_name}"
        return configs[config_name], self._extends_context(extend_name, identity, ctx, directory=directory)

    def _load_config_path(self, extend_name: str, ctx: _Context) -> tuple[Any, _Context]:
        path = (ctx.directory / extend_name).resolve()
        if path.suffix == ".py":
            loaded = load_module_from_path(path)
            if loaded is None:
                raise ConfigNotFoundError(extend_name, importer=ctx.name, searched=str(ctx.directory))
            data = self._module_config(loaded, extend_name)
        else:
            if not path.is_file():
                raise ConfigNotFoundError(extend_name, importer=ctx.name, searched=str(ctx.directory))
            data = load_config_file(path)
        return data, self._extends_context(extend_name, str(path), ctx, file_path=path, directory=path.parent)

    def _load_shareable_config(self, extend_name: str, ctx: _Context) -> tuple[Any, _Context]:
        package = normalize_package_name(extend_name, CONFIG_PREFIX)

        for suffix in SHAREABLE_CONFIG_SUFFIXES:
            path = ctx.directory / f"{package}{suffix}"
            if path.is_file():
                path = path.resolve()
                self.logger.debug(f"Loaded shareable config '{package}' from {path}")
                return load_config_file(path), self._extends_context(
                    extend_name, package, ctx, file_path=path, directory=path.parent
                )

        loaded = load_module(to_module_name(package), ctx.directory)
        if loaded is None:
            raise ConfigNotFoundError(extend_name, importer=ctx.name, searched=str(ctx.directory))

        file_path = Path(loaded.file_path) if loaded.file_path else None
        directory = file_path.parent if file_path is not None else None
        return self._module_config(loaded, extend_name), self._extends_context(
            extend_name, package, ctx, file_path=file_path, directory=directory
        )

    def _module_config(self, loaded: LoadedModule, extend_name: str) -> Any:
        data = getattr(loaded.module, "config", None)
        if data is None:
            raise ConfigurationError(
                f"Shareable config module '{extend_name}' does not define 'config'",
                details={"extends": extend_name, "file": loaded.file_path},
            )
        return data

    # ------------------------------------------------------------------
    # Parser and plugins
    # ------------------------------------------------------------------

    def _load_parser(self, parser_name: Any, ctx: _Context) -> ResolvedDependency:
        if not isinstance(parser_name, str):
            raise ConfigurationError(f"'parser' must be a string in '{ctx.name}'", details={"config": ctx.name})

        if _is_path_reference(parser_name):
            loaded = load_module_from_path((ctx.directory / parser_name).resolve())
        else:
            loaded = load_module(to_module_name(parser_name), ctx.directory)
        if loaded is None:
            raise ParserNotFoundError(parser_name, importer=ctx.name, searched=str(ctx.directory))

        self.logger.debug(f"Loaded parser '{parser_name}' from {loaded.file_path}")
        return ResolvedDependency(
            id=parser_name,
            definition=loaded.module,
            file_path=loaded.file_path,
            importer_name=ctx.name,
        )

    def _load_plugins(self, plugin_names: Any, ctx: _Context) -> dict[str, ResolvedDependency]:
        if not isinstance(plugin_names, list) or not all(isinstance(n, str) for n in plugin_names):
            raise ConfigurationError(
                f"'plugins' must be a list of strings in '{ctx.name}'",
                details={"config": ctx.name},
            )

        plugins: dict[str, ResolvedDependency] = {}
        for plugin_name in plugin_names:
            plugin = self._load_plugin(plugin_name, ctx)
            plugins[plugin.id] = plugin
        return plugins

    def _load_plugin(self, plugin_name: str, ctx: _Context) -> ResolvedDependency:
        if plugin_name.startswith(".") or ("/" in plugin_name and not plugin_name.startswith("@")):
            raise ConfigurationError(
                f"Plugins array cannot include file paths: '{plugin_name}' in '{ctx.name}'",
                details={"config": ctx.name, "plugin": plugin_name},
            )

        package = normalize_package_name(plugin_name, PLUGIN_PREFIX)
        plugin_id = get_shorthand_name(package, PLUGIN_PREFIX)

        if package not in self._plugins:
            loaded = load_module(to_module_name(package), self.resolve_plugins_relative_to)
            if loaded is None:
                raise PluginNotFoundError(
                    plugin_name, importer=ctx.name, searched=str(self.resolve_plugins_relative_to)
                )
            self.logger.debug(f"Loaded plugin '{plugin_id}' ({package}) from {loaded.file_path}")
            self._plugins[package] = (normalize_plugin(loaded.module), loaded.file_path)

        definition, file_path = self._plugins[package]
        return ResolvedDependency(id=plugin_id, definition=definition, file_path=file_path, importer_name=ctx.name)

    def _take_file_extension_processors(
        self,
        plugins: dict[str, ResolvedDependency],
        ctx: _Context,
    ) -> Iterator[ConfigElement]:
        for plugin_id, plugin in plugins.items():
            for processor_id in plugin.definition.get("processors") or {}:
                if not processor_id.startswith("."):
                    continue
                yield ConfigElement(
                    kind="implicit-processor",
                    name=f'{ctx.name}#processors["{plugin_id}/{processor_id}"]',
                    node={
                        "processor": f"{plugin_id}/{processor_id}",
                        "criteria": create_criteria([f"*{processor_id}"], base_path=str(ctx.directory)),
                    },
                    file_path=str(ctx.file_path) if ctx.file_path is not None else None,
                )
