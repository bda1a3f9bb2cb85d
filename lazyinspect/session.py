"""Browse-session state machine.

``BrowseSession`` is owned by the driver thread and is the only place that
mutates navigation state, the value cache, bookmarks, and recents. It consumes
``Message`` values one at a time; after each one it asks the reevaluation
policy which paths are missing and hands them to ``request_fetch`` without
waiting for the answers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from . import messages as msg
from .input.router import route_key
from .model import (
    BOOKMARKS,
    INACTIVE,
    LOADING,
    RECENTS,
    ROOT,
    ROOT_MENU,
    ROOT_PATH,
    AtPath,
    Bookmark,
    BrowseStack,
    InputBuffer,
    InputMode,
    NamingBookmark,
    Navigating,
    PathValueCache,
    Searching,
    TreePath,
    clamp_cursor,
    record_recent,
)
from .reevaluation import ROOT_MENU_TREE_INDEX, paths_to_fetch, paths_to_refresh

logger = logging.getLogger(__name__)

# Upper bound on handlers run for one inbound message (the message itself plus
# the follow-ups it produces, e.g. ``KeyPress`` -> routed command).
MAX_HANDLERS_PER_MESSAGE = 3

DEFAULT_VISIBLE_LIST_HEIGHT = 20
ROOT_BOOKMARK_LABEL = "root"


def _ignore(*_args: object) -> None:
    return None


@dataclass(frozen=True)
class SessionCallbacks:
    """Side effects the session triggers but does not perform itself."""

    request_fetch: Callable[[TreePath], None] = _ignore
    save_bookmarks: Callable[[list[Bookmark]], None] = _ignore
    save_recents: Callable[[list[TreePath]], None] = _ignore


def next_index(index: int, length: int) -> int:
    """Move down one row, wrapping from the last row to the first."""
    if length <= 1:
        return index
    return 0 if index >= length - 1 else index + 1


def prev_index(index: int, length: int) -> int:
    """Move up one row, wrapping from the first row to the last."""
    if length <= 1:
        return index
    return length - 1 if index <= 0 else index - 1


def closest_match(labels: tuple[str, ...], needle: str, cursor: int) -> int | None:
    """Return the index containing ``needle`` that is nearest to ``cursor``.

    Ties resolve to the lower index, so search results do not jump past the
    first equally distant hit.
    """
    matches = [index for index, label in enumerate(labels) if needle in label]
    if not matches:
        return None
    return min(matches, key=lambda index: abs(index - cursor))


def cycle_match(labels: tuple[str, ...], cursor: int, predicate: Callable[[str], bool], forward: bool) -> int | None:
    """Scan from just past ``cursor`` in one direction, wrapping around.

    The row under the cursor is considered last, so a lone match stays put.
    """
    length = len(labels)
    if length == 0:
        return None
    step = 1 if forward else -1
    for offset in range(1, length + 1):
        index = (cursor + step * offset) % length
        if predicate(labels[index]):
            return index
    return None


class BrowseSession:
    """Navigation stack, value cache, and input modes of one browse session."""

    def __init__(
        self,
        callbacks: SessionCallbacks | None = None,
        bookmarks: list[Bookmark] | None = None,
        recents: list[TreePath] | None = None,
    ) -> None:
        self.callbacks = callbacks if callbacks is not None else SessionCallbacks()
        self.stack = BrowseStack()
        self.cache = PathValueCache()
        self.bookmarks: list[Bookmark] = list(bookmarks or [])
        self.recents: list[TreePath] = list(recents or [])
        self.root_cursor = 0
        self.bookmark_cursor = 0
        self.recents_cursor = 0
        self.input_mode: InputMode = INACTIVE
        self.tab_prefix: str | None = None
        self.visible_list_height = DEFAULT_VISIBLE_LIST_HEIGHT
        self.running = True
        self._handlers: dict[type[msg.Message], Callable[[msg.Message], msg.Message | None]] = {
            msg.Data: self._on_data,
            msg.KeyPress: self._on_key_press,
            msg.ViewHeight: self._on_view_height,
            msg.GoToPath: self._on_go_to_path,
            msg.Quit: self._on_quit,
            msg.Back: self._on_back,
            msg.EnterItem: self._on_enter_item,
            msg.ListUp: self._on_list_up,
            msg.ListDown: self._on_list_down,
            msg.PageUp: self._on_page_up,
            msg.PageDown: self._on_page_down,
            msg.Refresh: self._on_refresh,
            msg.SearchEnter: self._on_search_enter,
            msg.SearchExit: self._on_input_exit,
            msg.SearchInput: self._on_search_input,
            msg.SearchNext: self._on_search_next,
            msg.SearchPrev: self._on_search_prev,
            msg.NavigatorEnter: self._on_navigator_enter,
            msg.NavigatorExit: self._on_input_exit,
            msg.NavigatorInput: self._on_navigator_input,
            msg.BookmarkInputEnter: self._on_bookmark_input_enter,
            msg.BookmarkInputExit: self._on_input_exit,
            msg.BookmarkInput: self._on_bookmark_input,
            msg.CreateBookmark: self._on_create_bookmark,
            msg.DeleteBookmark: self._on_delete_bookmark,
        }

    # -- driver entry points -------------------------------------------------

    def apply(self, message: msg.Message) -> None:
        """Process ``message`` and its follow-ups, then dispatch missing fetches."""
        current: msg.Message | None = message
        handled = 0
        while current is not None and self.running and handled < MAX_HANDLERS_PER_MESSAGE:
            current = self.update(current)
            handled += 1
        if current is not None and self.running:
            logger.warning("Dropping follow-up message %r", current)
        if self.running:
            self.reevaluate()

    def update(self, message: msg.Message) -> msg.Message | None:
        """Apply one message to the session; may return one follow-up."""
        handler = self._handlers.get(type(message))
        if handler is None:
            logger.warning("Unhandled message %r", message)
            return None
        return handler(message)

    def reevaluate(self) -> None:
        """Request every visible path that has no cache entry yet."""
        for path in paths_to_fetch(self):
            self.cache.insert_or_merge(path, LOADING)
            self.callbacks.request_fetch(path)

    # -- read helpers used by the renderer and policy --------------------------

    def selected_bookmark(self) -> Bookmark | None:
        if 0 <= self.bookmark_cursor < len(self.bookmarks):
            return self.bookmarks[self.bookmark_cursor]
        return None

    def selected_recent(self) -> TreePath | None:
        if 0 <= self.recents_cursor < len(self.recents):
            return self.recents[self.recents_cursor]
        return None

    def current_path(self) -> TreePath | None:
        return self.stack.current_path()

    def current_labels(self) -> tuple[str, ...] | None:
        """Labels of the list shown in the current column."""
        top = self.stack.top
        if top == ROOT:
            return ROOT_MENU
        if top == BOOKMARKS:
            return tuple(bookmark.display for bookmark in self.bookmarks)
        if top == RECENTS:
            return tuple(recent_label(path) for path in self.recents)
        if isinstance(top, AtPath):
            listing = self.cache.current_list(top.path)
            return listing[0] if listing is not None else None
        return None

    def current_cursor(self) -> int | None:
        top = self.stack.top
        if top == ROOT:
            return self.root_cursor
        if top == BOOKMARKS:
            return self.bookmark_cursor
        if top == RECENTS:
            return self.recents_cursor
        if isinstance(top, AtPath):
            listing = self.cache.current_list(top.path)
            return listing[1] if listing is not None else None
        return None

    def _set_current_cursor(self, index: int) -> None:
        top = self.stack.top
        if top == ROOT:
            self.root_cursor = clamp_cursor(index, len(ROOT_MENU))
        elif top == BOOKMARKS:
            self.bookmark_cursor = clamp_cursor(index, len(self.bookmarks))
        elif top == RECENTS:
            self.recents_cursor = clamp_cursor(index, len(self.recents))
        elif isinstance(top, AtPath):
            self.cache.set_cursor(top.path, index)

    def _move_current_cursor(self, move: Callable[[int, int], int]) -> None:
        labels = self.current_labels()
        cursor = self.current_cursor()
        if not labels or cursor is None:
            return
        self._set_current_cursor(move(cursor, len(labels)))

    # -- navigation ----------------------------------------------------------

    def go_to_path(self, path: TreePath) -> None:
        """Rebuild the breadcrumb as ``Root > root > ... > path``.

        Each cached ancestor list gets its cursor aligned on the child that
        leads to ``path``, so the columns show the route taken.
        """
        chain = list(reversed(list(path.ancestors())))
        chain.append(path)
        for parent, child in zip(chain, chain[1:]):
            listing = self.cache.current_list(parent)
            if listing is not None and child.last in listing[0]:
                self.cache.set_cursor(parent, listing[0].index(child.last))
        self.root_cursor = ROOT_MENU_TREE_INDEX
        self.stack.replace([AtPath(item) for item in chain])

    def _record_recent(self, path: TreePath) -> None:
        self.recents = record_recent(self.recents, path)
        self.recents_cursor = 0
        self.callbacks.save_recents(list(self.recents))

    def _on_data(self, message: msg.Data) -> None:
        self.cache.insert_or_merge(message.path, message.value)

    def _on_key_press(self, message: msg.KeyPress) -> msg.Message | None:
        return route_key(message.key, self.input_mode)

    def _on_view_height(self, message: msg.ViewHeight) -> None:
        self.visible_list_height = max(1, message.rows)

    def _on_go_to_path(self, message: msg.GoToPath) -> None:
        self.go_to_path(message.path)

    def _on_quit(self, _message: msg.Message) -> None:
        self.running = False

    def _on_back(self, _message: msg.Message) -> None:
        self.stack.pop()

    def _on_enter_item(self, _message: msg.Message) -> None:
        top = self.stack.top
        if top == ROOT:
            if self.root_cursor == 0:
                self.stack.push(BOOKMARKS)
            elif self.root_cursor == 1:
                self.stack.push(RECENTS)
            else:
                self.stack.push_path(ROOT_PATH)
            return
        if top == BOOKMARKS:
            bookmark = self.selected_bookmark()
            if bookmark is not None:
                self.stack.push_path(bookmark.path)
                self._record_recent(bookmark.path)
            return
        if top == RECENTS:
            recent = self.selected_recent()
            if recent is not None:
                self.stack.push_path(recent)
                self._record_recent(recent)
            return
        if isinstance(top, AtPath):
            child = self.cache.selected_child(top.path)
            if child is not None:
                self.stack.push_path(child)

    def _on_list_up(self, _message: msg.Message) -> None:
        self._move_current_cursor(prev_index)

    def _on_list_down(self, _message: msg.Message) -> None:
        self._move_current_cursor(next_index)

    def _page_delta(self) -> int:
        return max(1, self.visible_list_height // 2)

    def _on_page_up(self, _message: msg.Message) -> None:
        delta = self._page_delta()
        self._move_current_cursor(lambda cursor, length: clamp_cursor(cursor - delta, length))

    def _on_page_down(self, _message: msg.Message) -> None:
        delta = self._page_delta()
        self._move_current_cursor(lambda cursor, length: clamp_cursor(cursor + delta, length))

    def _on_refresh(self, _message: msg.Message) -> None:
        for path in paths_to_refresh(self):
            logger.debug("Refreshing %r", path.render())
            self.callbacks.request_fetch(path)

    # -- input modes ---------------------------------------------------------

    def _on_input_exit(self, _message: msg.Message) -> None:
        self.input_mode = INACTIVE
        self.tab_prefix = None

    def _on_search_enter(self, _message: msg.Message) -> None:
        self.input_mode = Searching(InputBuffer())

    def _on_search_input(self, message: msg.SearchInput) -> None:
        mode = self.input_mode
        if not isinstance(mode, Searching):
            return
        buffer = mode.buffer
        if message.key == "ENTER":
            buffer.typing = False
            return
        if not buffer.typing:
            return
        if not buffer.handle_key(message.key):
            return
        labels = self.current_labels()
        cursor = self.current_cursor()
        if not labels or cursor is None:
            return
        index = closest_match(labels, buffer.text, cursor)
        if index is not None:
            self._set_current_cursor(index)

    def _search_step(self, forward: bool) -> None:
        mode = self.input_mode
        if not isinstance(mode, Searching):
            return
        labels = self.current_labels()
        cursor = self.current_cursor()
        if not labels or cursor is None:
            return
        needle = mode.buffer.text
        index = cycle_match(labels, cursor, lambda label: needle in label, forward)
        if index is not None:
            self._set_current_cursor(index)

    def _on_search_next(self, _message: msg.Message) -> None:
        self._search_step(forward=True)

    def _on_search_prev(self, _message: msg.Message) -> None:
        self._search_step(forward=False)

    def _on_navigator_enter(self, _message: msg.Message) -> None:
        current = self.stack.current_path()
        seed = ""
        if current is not None and not current.is_root:
            seed = current.render() + "."
        self.tab_prefix = None
        self.input_mode = Navigating(InputBuffer.seeded(seed))

    def _on_navigator_input(self, message: msg.NavigatorInput) -> None:
        mode = self.input_mode
        if not isinstance(mode, Navigating):
            return
        buffer = mode.buffer
        key = message.key
        if key in {"TAB", "SHIFT_TAB"}:
            self._complete(buffer, forward=key == "TAB")
            return

        self.tab_prefix = None
        if key == "ENTER":
            buffer.typing = False
            current = self.stack.current_path()
            if current is not None:
                self._record_recent(current)
            return
        if buffer.handle_key(key):
            buffer.typing = True
            self._follow_typed_path(buffer.text)

    def _typed_parent(self, text: str) -> tuple[TreePath, str] | None:
        """Split navigator text into the parent path and the trailing segment.

        Returns ``None`` while the parent still has an empty segment (``"."``,
        ``"a.."``); such text names no node yet.
        """
        typed = TreePath.parse(text)
        parent = typed.parent()
        if parent is None:
            return ROOT_PATH, ""
        if "" in parent.segments:
            return None
        return parent, typed.last

    def _follow_typed_path(self, text: str) -> None:
        split = self._typed_parent(text)
        if split is None:
            return
        parent, segment = split
        if self.stack.current_path() != parent:
            self.go_to_path(parent)
        listing = self.cache.current_list(parent)
        if listing is None or not segment:
            return
        children = listing[0]
        for index, name in enumerate(children):
            if name.startswith(segment):
                self.cache.set_cursor(parent, index)
                return

    def _complete(self, buffer: InputBuffer, forward: bool) -> None:
        split = self._typed_parent(buffer.text)
        if split is None:
            return
        parent, segment = split
        listing = self.cache.current_list(parent)
        if listing is None:
            return
        children, cursor = listing
        prefix = self.tab_prefix if self.tab_prefix is not None else segment
        index = cycle_match(children, cursor, lambda name: name.startswith(prefix), forward)
        if index is None:
            return
        if self.tab_prefix is None:
            self.tab_prefix = prefix
        if self.stack.current_path() != parent:
            self.go_to_path(parent)
        self.cache.set_cursor(parent, index)
        buffer.replace(parent.child(children[index]).render())

    def _on_bookmark_input_enter(self, _message: msg.Message) -> None:
        name = ""
        current = self.stack.current_path()
        if current is not None:
            selected = self.cache.selected_child(current)
            if selected is not None:
                name = selected.last
        self.input_mode = NamingBookmark(InputBuffer.seeded(name))

    def _on_bookmark_input(self, message: msg.BookmarkInput) -> None:
        mode = self.input_mode
        if isinstance(mode, NamingBookmark):
            mode.buffer.handle_key(message.key)

    def _on_create_bookmark(self, _message: msg.Message) -> None:
        mode = self.input_mode
        self.input_mode = INACTIVE
        current = self.stack.current_path()
        if not isinstance(mode, NamingBookmark) or current is None:
            return
        display = mode.buffer.text or current.last or ROOT_BOOKMARK_LABEL
        self.bookmarks.append(Bookmark(display=display, path=current))
        logger.info("Created bookmark %r -> %r", display, current.render())
        self.callbacks.save_bookmarks(list(self.bookmarks))

    def _on_delete_bookmark(self, _message: msg.Message) -> None:
        if self.stack.top != BOOKMARKS or self.selected_bookmark() is None:
            return
        removed = self.bookmarks.pop(self.bookmark_cursor)
        self.bookmark_cursor = clamp_cursor(self.bookmark_cursor, len(self.bookmarks))
        logger.info("Deleted bookmark %r", removed.display)
        self.callbacks.save_bookmarks(list(self.bookmarks))


def recent_label(path: TreePath) -> str:
    return path.render() if not path.is_root else ROOT_BOOKMARK_LABEL
