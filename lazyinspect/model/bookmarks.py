"""Bookmarks and the bounded recents list."""

from __future__ import annotations

from dataclasses import dataclass

from .path import TreePath

MAX_RECENTS = 50


@dataclass(frozen=True)
class Bookmark:
    display: str
    path: TreePath


def record_recent(recents: list[TreePath], path: TreePath, max_entries: int = MAX_RECENTS) -> list[TreePath]:
    """Return ``recents`` with ``path`` moved to the front and the tail trimmed."""
    updated = [path]
    updated.extend(existing for existing in recents if existing != path)
    return updated[: max(1, max_entries)]
