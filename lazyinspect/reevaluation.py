"""Decide which paths the session still needs from the evaluator.

These functions only read session state. The session dispatches whatever they
return after every processed message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .model import BOOKMARKS, RECENTS, ROOT, ROOT_PATH, AtPath, TreePath

if TYPE_CHECKING:
    from .session import BrowseSession

ROOT_MENU_TREE_INDEX = 2


def _append_unique(out: list[TreePath], path: TreePath | None) -> None:
    if path is not None and path not in out:
        out.append(path)


def menu_target(session: BrowseSession) -> TreePath | None:
    """Return the tree path previewed by the selected menu row, if any."""
    top = session.stack.top
    if top == BOOKMARKS:
        bookmark = session.selected_bookmark()
        return bookmark.path if bookmark is not None else None
    if top == RECENTS:
        return session.selected_recent()
    if top == ROOT and session.root_cursor == ROOT_MENU_TREE_INDEX:
        return ROOT_PATH
    return None


def _visible_paths(session: BrowseSession) -> list[TreePath]:
    """Current path, its selected child, the parent column, and menu targets."""
    out: list[TreePath] = []
    current = session.stack.current_path()
    if current is not None:
        _append_unique(out, current)
        _append_unique(out, session.cache.selected_child(current))

    previous = session.stack.previous()
    if isinstance(previous, AtPath):
        _append_unique(out, previous.path)

    _append_unique(out, menu_target(session))
    return out


def paths_to_fetch(session: BrowseSession) -> list[TreePath]:
    """Return visible paths that have no cache entry yet, in fetch order."""
    return [path for path in _visible_paths(session) if path not in session.cache]


def paths_to_refresh(session: BrowseSession) -> list[TreePath]:
    """Return the visible paths regardless of what the cache already holds."""
    return _visible_paths(session)
