"""
Render flat config items as plain data.

Translated entries hold live objects (plugin definitions, parser modules,
processor objects). For display they are replaced by short descriptors.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any

from flatcompat.core.types import FlatConfigItem


def describe_object(value: Any) -> str:
    """Short, stable description of a non-data object."""
    if inspect.ismodule(value):
        return f"<module {value.__name__}>"
    meta = value.get("meta") if isinstance(value, Mapping) else getattr(value, "meta", None)
    if isinstance(meta, Mapping) and meta.get("name"):
        return f"<{meta['name']}>"
    name = getattr(value, "__qualname__", None) or type(value).__name__
    return f"<{name}>"


def to_plain_data(value: Any) -> Any:
    """Recursively convert to JSON/YAML-safe data."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Mapping):
        return {str(k): to_plain_data(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain_data(item) for item in value]
    return describe_object(value)


def serialize_flat_config(items: list[FlatConfigItem]) -> list[Any]:
    """
    Convert translated items into plain data.

    Plugin definitions become ``<plugin NAME>`` references, the parser and
    processors become object descriptors; everything else is kept as data.
    """
    result: list[Any] = []
    for item in items:
        if isinstance(item, str):
            result.append(item)
            continue

        entry: dict[str, Any] = {}
        for key, value in item.items():
            if key == "plugins":
                entry[key] = {name: f"<plugin {name}>" for name in value}
            elif key == "processor" and not isinstance(value, str):
                entry[key] = describe_object(value)
            elif key == "languageOptions" and "parser" in value:
                options = to_plain_data({k: v for k, v in value.items() if k != "parser"})
                options["parser"] = describe_object(value["parser"])
                entry[key] = options
            else:
                entry[key] = to_plain_data(value)
        result.append(entry)
    return result
