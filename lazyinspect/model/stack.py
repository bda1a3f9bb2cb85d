"""Breadcrumb stack of visited locations.

Pseudo-locations (root menu, bookmarks, recents) share the stack with
concrete tree paths. The bottom item is always the root menu.
"""

from __future__ import annotations

from dataclasses import dataclass

from .path import TreePath


@dataclass(frozen=True)
class MenuItem:
    """A pseudo-location that is not backed by a tree path."""

    name: str


@dataclass(frozen=True)
class AtPath:
    path: TreePath


StackItem = MenuItem | AtPath

ROOT = MenuItem("Root")
BOOKMARKS = MenuItem("Bookmarks")
RECENTS = MenuItem("Recents")

# Order of options shown in the root menu.
ROOT_MENU: tuple[str, ...] = ("Bookmarks", "Recents", "Root")


class BrowseStack:
    """Non-empty stack of ``StackItem`` whose floor is ``ROOT``."""

    def __init__(self, items: list[StackItem] | None = None) -> None:
        self._items: list[StackItem] = [ROOT]
        self._items.extend(item for item in items or [] if item != ROOT)

    @property
    def items(self) -> tuple[StackItem, ...]:
        return tuple(self._items)

    @property
    def top(self) -> StackItem:
        return self._items[-1]

    def previous(self) -> StackItem | None:
        """Return the item below the top (the always-visible left column)."""
        if len(self._items) < 2:
            return None
        return self._items[-2]

    def current_path(self) -> TreePath | None:
        top = self._items[-1]
        return top.path if isinstance(top, AtPath) else None

    def push(self, item: StackItem) -> None:
        self._items.append(item)

    def push_path(self, path: TreePath) -> None:
        self._items.append(AtPath(path))

    def pop(self) -> StackItem | None:
        """Pop the top item unless it is the root floor."""
        if len(self._items) <= 1:
            return None
        return self._items.pop()

    def replace(self, items: list[StackItem]) -> None:
        """Replace everything above the root floor with ``items``."""
        self._items[1:] = [item for item in items if item != ROOT]

    def __len__(self) -> int:
        return len(self._items)
