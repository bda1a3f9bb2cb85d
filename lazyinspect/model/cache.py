"""Sparse path -> value memo store with list cursors.

Entries are created lazily as values arrive and are never evicted. A list
entry carries the cursor of its column, so a refreshed list keeps the user's
position instead of jumping back to the top.
"""

from __future__ import annotations

from dataclasses import dataclass

from .path import TreePath
from .values import ListValue, Loading, NodeValue


def clamp_cursor(cursor: int, length: int) -> int:
    """Clamp ``cursor`` into ``[0, length - 1]``, or ``0`` for empty lists."""
    if length <= 0:
        return 0
    return max(0, min(cursor, length - 1))


@dataclass
class CacheEntry:
    value: NodeValue
    cursor: int = 0


class PathValueCache:
    """Monotonically growing mapping of ``TreePath`` to ``CacheEntry``."""

    def __init__(self) -> None:
        self._entries: dict[TreePath, CacheEntry] = {}

    def __contains__(self, path: TreePath) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, path: TreePath) -> NodeValue | None:
        entry = self._entries.get(path)
        return entry.value if entry is not None else None

    def entry(self, path: TreePath) -> CacheEntry | None:
        return self._entries.get(path)

    def insert_or_merge(self, path: TreePath, value: NodeValue) -> None:
        """Store ``value`` for ``path``.

        List -> List keeps the stored cursor (clamped to the new length) and
        swaps the children. Any other transition replaces the entry, except
        that a list going to ``Loading`` remembers its cursor so the list that
        eventually answers the refetch lands on the same row.
        """
        existing = self._entries.get(path)
        if existing is None:
            self._entries[path] = CacheEntry(value)
            return

        if isinstance(value, ListValue):
            if isinstance(existing.value, (ListValue, Loading)):
                cursor = clamp_cursor(existing.cursor, len(value.children))
                self._entries[path] = CacheEntry(value, cursor)
                return
            self._entries[path] = CacheEntry(value)
            return

        if isinstance(value, Loading) and isinstance(existing.value, (ListValue, Loading)):
            self._entries[path] = CacheEntry(value, existing.cursor)
            return

        self._entries[path] = CacheEntry(value)

    def current_list(self, path: TreePath) -> tuple[tuple[str, ...], int] | None:
        """Return ``(children, cursor)`` when ``path`` holds a list."""
        entry = self._entries.get(path)
        if entry is None or not isinstance(entry.value, ListValue):
            return None
        return entry.value.children, entry.cursor

    def set_cursor(self, path: TreePath, cursor: int) -> bool:
        """Move the list cursor of ``path``; returns ``False`` when not a list."""
        entry = self._entries.get(path)
        if entry is None or not isinstance(entry.value, ListValue):
            return False
        entry.cursor = clamp_cursor(cursor, len(entry.value.children))
        return True

    def selected_child(self, path: TreePath) -> TreePath | None:
        """Return the child path under the list cursor of ``path``."""
        current = self.current_list(path)
        if current is None:
            return None
        children, cursor = current
        if not 0 <= cursor < len(children):
            return None
        return path.child(children[cursor])
