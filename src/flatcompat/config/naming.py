"""
Package naming conventions for plugins, parsers and shareable configs.

``fixture1`` with prefix ``eslint-plugin`` names the package
``eslint-plugin-fixture1``; ``@scope`` names ``@scope/eslint-plugin``. The
Python module of a package replaces dashes with underscores and the scope with
a parent package: ``@scope/eslint-plugin-foo`` -> ``scope.eslint_plugin_foo``.
"""

import re

PLUGIN_PREFIX = "eslint-plugin"
CONFIG_PREFIX = "eslint-config"


def normalize_package_name(name: str, prefix: str) -> str:
    """Expand a shorthand name into its full package name."""
    normalized = name.replace("\\", "/")

    if normalized.startswith("@"):
        scoped_shortcut = re.compile(rf"^(@[^/]+)(?:/(?:{re.escape(prefix)})?)?$")
        scoped_package = re.compile(rf"^{re.escape(prefix)}(-|$)")

        if scoped_shortcut.match(normalized):
            normalized = scoped_shortcut.sub(rf"\1/{prefix}", normalized)
        elif not scoped_package.match(normalized.split("/")[1]):
            # @scope/foo -> @scope/<prefix>-foo
            normalized = re.sub(r"^@([^/]+)/(.*)$", rf"@\1/{prefix}-\2", normalized)
    elif not normalized.startswith(f"{prefix}-"):
        normalized = f"{prefix}-{normalized}"

    return normalized


def get_shorthand_name(full_name: str, prefix: str) -> str:
    """Reverse of :func:`normalize_package_name`."""
    if full_name.startswith("@"):
        match = re.match(rf"^(@[^/]+)/{re.escape(prefix)}$", full_name)
        if match:
            return match.group(1)
        match = re.match(rf"^(@[^/]+)/{re.escape(prefix)}-(.+)$", full_name)
        if match:
            return f"{match.group(1)}/{match.group(2)}"
    elif full_name.startswith(f"{prefix}-"):
        return full_name[len(prefix) + 1 :]

    return full_name


def to_module_name(package_name: str) -> str:
    """Python module path for a package name."""
    name = package_name.lstrip("@")
    return ".".join(part.replace("-", "_").replace(".", "_") for part in name.split("/"))
