"""Rendering engine for the three-column browse view.

Composes a full ANSI frame from a ``BrowseSession`` without mutating it:
the breadcrumb header, the previous/current/preview columns, the input prompt
and the keymap hints. ``render_session`` also reports how many list rows fit
so the driver can feed ``ViewHeight`` back to the session.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from ..model import (
    BOOKMARKS,
    LOADING,
    RECENTS,
    ROOT,
    ROOT_MENU,
    ROOT_PATH,
    AtPath,
    BoolValue,
    ErrorValue,
    FloatValue,
    IntValue,
    ListValue,
    NamingBookmark,
    Navigating,
    NodeValue,
    NullValue,
    PathValue,
    Searching,
    StackItem,
    StringValue,
    TreePath,
)
from ..session import ROOT_BOOKMARK_LABEL, BrowseSession, recent_label
from .ansi import fit_ansi_line, sanitize_terminal_text, wrap_ansi_line
from .highlight import DEFAULT_STYLE, highlight_value
from .theme import DEFAULT_THEME, UITheme, value_color

DIVIDER = "│"
BREADCRUMB_SEPARATOR = " > "
# Rows taken by the header, the column titles, the prompt, and the keymap.
CHROME_ROWS = 4
PREVIOUS_COLUMN_PERCENT = 20
PREVIEW_COLUMN_PERCENT = 30
MIN_COLUMN_WIDTH = 4

_HIGHLIGHTED_TYPES = (IntValue, FloatValue, BoolValue, StringValue, PathValue, NullValue)

NORMAL_KEYMAP: tuple[tuple[str, str], ...] = (
    ("q", "quit"),
    ("h", "back"),
    ("l", "enter"),
    ("/", "search"),
    (".", "goto"),
    ("s", "bookmark"),
    ("d", "delete"),
    ("r", "refresh"),
)
SEARCH_TYPING_KEYMAP = (("enter", "commit"), ("esc", "exit"))
SEARCH_COMMITTED_KEYMAP = (("n", "next"), ("N", "prev"), ("esc", "exit"))
NAVIGATOR_KEYMAP = (("tab", "complete"), ("enter", "go"), ("esc", "exit"))
BOOKMARK_KEYMAP = (("enter", "save"), ("esc", "cancel"))


@dataclass(frozen=True)
class PaneContent:
    """What one column shows: a list of labels or a single value."""

    title: str
    labels: tuple[str, ...] | None = None
    cursor: int | None = None
    value: NodeValue | None = None


@dataclass(frozen=True)
class ColumnLayout:
    previous: int
    current: int
    preview: int


def column_layout(width: int) -> ColumnLayout:
    """Split ``width`` into previous/current/preview columns plus two dividers."""
    usable = max(3 * MIN_COLUMN_WIDTH, width - 2)
    previous = max(MIN_COLUMN_WIDTH, usable * PREVIOUS_COLUMN_PERCENT // 100)
    preview = max(MIN_COLUMN_WIDTH, usable * PREVIEW_COLUMN_PERCENT // 100)
    current = max(MIN_COLUMN_WIDTH, usable - previous - preview)
    return ColumnLayout(previous=previous, current=current, preview=preview)


def list_scroll_start(cursor: int, count: int, height: int) -> int:
    """First visible row so that ``cursor`` stays inside ``height`` rows."""
    if height <= 0 or count <= height:
        return 0
    start = max(0, cursor - height + 1)
    return min(start, count - height)


def item_label(item: StackItem) -> str:
    if isinstance(item, AtPath):
        return item.path.last or ROOT_BOOKMARK_LABEL
    return item.name


def breadcrumb(session: BrowseSession) -> str:
    return BREADCRUMB_SEPARATOR.join(item_label(item) for item in session.stack.items)


def path_content(session: BrowseSession, path: TreePath) -> PaneContent:
    title = path.render() or ROOT_BOOKMARK_LABEL
    entry = session.cache.entry(path)
    if entry is None:
        return PaneContent(title=title, value=LOADING)
    if isinstance(entry.value, ListValue):
        return PaneContent(title=title, labels=entry.value.children, cursor=entry.cursor)
    return PaneContent(title=f"{title}: {entry.value.type_name}", value=entry.value)


def item_content(session: BrowseSession, item: StackItem) -> PaneContent:
    if item == ROOT:
        return PaneContent(title=ROOT.name, labels=ROOT_MENU, cursor=session.root_cursor)
    if item == BOOKMARKS:
        labels = tuple(bookmark.display for bookmark in session.bookmarks)
        return PaneContent(title=BOOKMARKS.name, labels=labels, cursor=session.bookmark_cursor)
    if item == RECENTS:
        labels = tuple(recent_label(path) for path in session.recents)
        return PaneContent(title=RECENTS.name, labels=labels, cursor=session.recents_cursor)
    if isinstance(item, AtPath):
        return path_content(session, item.path)
    return PaneContent(title=str(item))


def preview_content(session: BrowseSession) -> PaneContent | None:
    """Content of whatever sits under the cursor of the current column."""
    top = session.stack.top
    if top == ROOT:
        if session.root_cursor == 0:
            return item_content(session, BOOKMARKS)
        if session.root_cursor == 1:
            return item_content(session, RECENTS)
        return path_content(session, ROOT_PATH)
    if top == BOOKMARKS:
        bookmark = session.selected_bookmark()
        return path_content(session, bookmark.path) if bookmark is not None else None
    if top == RECENTS:
        recent = session.selected_recent()
        return path_content(session, recent) if recent is not None else None
    if isinstance(top, AtPath):
        child = session.cache.selected_child(top.path)
        return path_content(session, child) if child is not None else None
    return None


def _mark_span(text: str, start: int, length: int, style: str, theme: UITheme) -> str:
    if length <= 0 or not style:
        return text
    end = start + length
    return f"{text[:start]}{style}{text[start:end]}{theme.reset}{text[end:]}"


def _selected(text: str, theme: UITheme) -> str:
    if not theme.selected:
        return text
    # Keep the selection colors active across inner resets.
    return theme.selected + text.replace(theme.reset, theme.reset + theme.selected) + theme.reset


def format_list_row(
    label: str,
    selected: bool,
    theme: UITheme,
    search: str = "",
    prefix: str = "",
) -> str:
    text = sanitize_terminal_text(label)
    if search:
        index = text.find(search)
        if index >= 0:
            text = _mark_span(text, index, len(search), theme.search_match, theme)
    elif prefix and text.startswith(prefix):
        text = _mark_span(text, 0, len(prefix), theme.completion_match, theme)
    gutter = "> " if selected else "  "
    if selected:
        return _selected(gutter + text, theme)
    return gutter + text


def list_lines(
    content: PaneContent,
    height: int,
    theme: UITheme,
    search: str = "",
    prefix: str = "",
) -> list[str]:
    labels = content.labels or ()
    if not labels:
        return ["  (empty)"]
    cursor = content.cursor if content.cursor is not None else -1
    start = list_scroll_start(max(cursor, 0), len(labels), height)
    rows: list[str] = []
    for index in range(start, min(len(labels), start + height)):
        rows.append(format_list_row(labels[index], index == cursor, theme, search, prefix))
    return rows


def value_lines(
    value: NodeValue,
    width: int,
    height: int,
    theme: UITheme,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> list[str]:
    """Render a non-list value, wrapped to ``width`` and cut to ``height``."""
    if isinstance(value, _HIGHLIGHTED_TYPES):
        source_lines = highlight_value(value.display(), style, no_color)
    else:
        color = value_color(theme, value)
        reset = theme.reset if color else ""
        source_lines = [
            f"{color}{line}{reset}"
            for line in sanitize_terminal_text(value.display()).split("\n")
        ]
    if isinstance(value, ErrorValue):
        source_lines.insert(0, f"{theme.value_error}error:{theme.reset}" if theme.value_error else "error:")

    out: list[str] = []
    for line in source_lines:
        out.extend(wrap_ansi_line(line, width))
        if len(out) >= height:
            break
    return out[:height]


def pane_lines(
    content: PaneContent | None,
    width: int,
    height: int,
    theme: UITheme,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
    search: str = "",
    prefix: str = "",
) -> list[str]:
    if content is None:
        return []
    if content.labels is not None:
        return list_lines(content, height, theme, search, prefix)
    if content.value is not None:
        return value_lines(content.value, width, height, theme, style, no_color)
    return []


def _title(content: PaneContent | None, theme: UITheme) -> str:
    if content is None:
        return ""
    text = sanitize_terminal_text(content.title)
    return f"{theme.title}{text}{theme.reset}" if theme.title else text


def _typed_segment(text: str) -> str:
    return text.rsplit(".", 1)[-1]


def match_highlights(session: BrowseSession) -> tuple[str, str]:
    """Return ``(search needle, completion prefix)`` for the current column."""
    mode = session.input_mode
    if isinstance(mode, Searching):
        return mode.buffer.text, ""
    if isinstance(mode, Navigating):
        if session.tab_prefix is not None:
            return "", session.tab_prefix
        return "", _typed_segment(mode.buffer.text)
    return "", ""


def prompt_line(session: BrowseSession, theme: UITheme) -> str:
    mode = session.input_mode
    if isinstance(mode, Searching):
        label = "Search: "
    elif isinstance(mode, Navigating):
        label = "Goto: "
    elif isinstance(mode, NamingBookmark):
        label = "bookmark name: "
    else:
        current = session.current_path()
        if current is None:
            return ""
        return sanitize_terminal_text(current.render() or ROOT_BOOKMARK_LABEL)
    text = sanitize_terminal_text(mode.buffer.text)
    return f"{theme.prompt_label}{label}{theme.reset}{theme.prompt_text}{text}{theme.reset}"


def keymap_entries(session: BrowseSession) -> tuple[tuple[str, str], ...]:
    mode = session.input_mode
    if isinstance(mode, Searching):
        return SEARCH_TYPING_KEYMAP if mode.buffer.typing else SEARCH_COMMITTED_KEYMAP
    if isinstance(mode, Navigating):
        return NAVIGATOR_KEYMAP
    if isinstance(mode, NamingBookmark):
        return BOOKMARK_KEYMAP
    return NORMAL_KEYMAP


def keymap_line(session: BrowseSession, theme: UITheme) -> str:
    parts = [
        f"{theme.keymap_key}{key}{theme.reset} {theme.keymap_text}{description}{theme.reset}"
        for key, description in keymap_entries(session)
    ]
    return "  ".join(parts)


def render_session(
    session: BrowseSession,
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> tuple[list[str], int]:
    """Compose the frame rows for ``session``.

    Returns the rows and the number of list rows available in the body,
    which the driver reports as ``ViewHeight``.
    """
    width = max(1, width)
    body_height = max(1, height - CHROME_ROWS)
    layout = column_layout(width)
    search, prefix = match_highlights(session)
    divider = f"{theme.divider}{DIVIDER}{theme.reset}" if theme.divider else DIVIDER

    previous_item = session.stack.previous()
    previous = item_content(session, previous_item) if previous_item is not None else None
    current = item_content(session, session.stack.top)

    rows: list[str] = []
    header = sanitize_terminal_text(breadcrumb(session))
    rows.append(fit_ansi_line(f"{theme.breadcrumb}{header}{theme.reset}" if theme.breadcrumb else header, width))

    previous_lines = pane_lines(previous, layout.previous, body_height, theme, style, no_color)
    if current.labels is None:
        # A scalar spans both the current and preview columns.
        value_width = layout.current + 1 + layout.preview
        current_lines = pane_lines(current, value_width, body_height, theme, style, no_color)
        rows.append(fit_ansi_line(_title(previous, theme), layout.previous) + divider + fit_ansi_line(_title(current, theme), value_width))
        for row in range(body_height):
            left = previous_lines[row] if row < len(previous_lines) else ""
            middle = current_lines[row] if row < len(current_lines) else ""
            rows.append(fit_ansi_line(left, layout.previous) + divider + fit_ansi_line(middle, value_width))
    else:
        preview = preview_content(session)
        current_lines = pane_lines(current, layout.current, body_height, theme, style, no_color, search, prefix)
        preview_lines = pane_lines(preview, layout.preview, body_height, theme, style, no_color)
        rows.append(
            fit_ansi_line(_title(previous, theme), layout.previous)
            + divider
            + fit_ansi_line(_title(current, theme), layout.current)
            + divider
            + fit_ansi_line(_title(preview, theme), layout.preview)
        )
        for row in range(body_height):
            left = previous_lines[row] if row < len(previous_lines) else ""
            middle = current_lines[row] if row < len(current_lines) else ""
            right = preview_lines[row] if row < len(preview_lines) else ""
            rows.append(
                fit_ansi_line(left, layout.previous)
                + divider
                + fit_ansi_line(middle, layout.current)
                + divider
                + fit_ansi_line(right, layout.preview)
            )

    rows.append(fit_ansi_line(prompt_line(session, theme), width))
    rows.append(fit_ansi_line(keymap_line(session, theme), width))
    return rows, body_height


def write_frame(fd: int, rows: list[str]) -> None:
    """Clear the screen and write ``rows`` in one ``os.write`` call."""
    out = "\033[H\033[J" + "\r\n".join(rows)
    os.write(fd, out.encode("utf-8", errors="replace"))
