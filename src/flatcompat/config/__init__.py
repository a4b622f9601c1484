"""
Legacy config resolution and tool settings.

Loads legacy config files, imports plugins, parsers and shareable configs,
and flattens ``extends`` / ``overrides`` into config elements.
"""

from flatcompat.config.loader import find_config_file, load_config_file
from flatcompat.config.resolver import ConfigResolver, normalize_plugin
from flatcompat.config.settings import Settings, load_settings

__all__ = [
    "ConfigResolver",
    "Settings",
    "find_config_file",
    "load_config_file",
    "load_settings",
    "normalize_plugin",
]
