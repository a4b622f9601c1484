"""
Builtin and plugin-provided environments.
"""

from flatcompat.environments.table import EnvironmentTable, load_builtin_environments, parse_environments

__all__ = [
    "EnvironmentTable",
    "load_builtin_environments",
    "parse_environments",
]
