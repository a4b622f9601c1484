"""
Two-ended sequence of flat config items.

Position is precedence: the front holds the weakest entries, the back the
strongest. Translation pushes defaults to the front and overrides to the back.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator

from flatcompat.core.types import FlatConfigItem


class PrecedenceSequence:
    """Ordered flat config items, lowest precedence first."""

    def __init__(self, items: Iterable[FlatConfigItem] | None = None) -> None:
        self._items: deque[FlatConfigItem] = deque(items or ())

    def push_front(self, item: FlatConfigItem) -> None:
        """Add an item below everything already present."""
        self._items.appendleft(item)

    def push_front_all(self, items: Iterable[FlatConfigItem]) -> None:
        """Add items below everything already present, keeping their relative order."""
        self._items.extendleft(reversed(list(items)))

    def push_back(self, item: FlatConfigItem) -> None:
        """Add an item above everything already present."""
        self._items.append(item)

    def push_back_all(self, items: Iterable[FlatConfigItem]) -> None:
        self._items.extend(items)

    def to_list(self) -> list[FlatConfigItem]:
        return list(self._items)

    def __iter__(self) -> Iterator[FlatConfigItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"PrecedenceSequence({list(self._items)!r})"
