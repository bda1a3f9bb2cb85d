"""Map key tokens to session messages based on the active input mode.

Precedence follows the input mode variant: searching, then navigating, then
bookmark naming, then normal browsing. Only one mode is ever active.
"""

from __future__ import annotations

from .. import messages as msg
from ..model import InputMode, NamingBookmark, Navigating, Searching
from .key_registry import KeyComboBinding, KeyComboRegistry

NORMAL_BINDINGS = KeyComboRegistry().register_bindings(
    KeyComboBinding(("q", "CTRL_C"), msg.Quit),
    KeyComboBinding(("h", "LEFT"), msg.Back),
    KeyComboBinding(("j", "DOWN"), msg.ListDown),
    KeyComboBinding(("k", "UP"), msg.ListUp),
    KeyComboBinding(("l", "RIGHT", "ENTER"), msg.EnterItem),
    KeyComboBinding(("f", "/"), msg.SearchEnter),
    KeyComboBinding((".",), msg.NavigatorEnter),
    KeyComboBinding(("s",), msg.BookmarkInputEnter),
    KeyComboBinding(("d",), msg.DeleteBookmark),
    KeyComboBinding(("r", "CTRL_R"), msg.Refresh),
    KeyComboBinding(("CTRL_D", "PAGE_DOWN"), msg.PageDown),
    KeyComboBinding(("CTRL_U", "PAGE_UP"), msg.PageUp),
)

# Keys that keep working while a search prompt is open.
SEARCH_TYPING_BINDINGS = KeyComboRegistry().register_bindings(
    KeyComboBinding(("ESC",), msg.SearchExit),
    KeyComboBinding(("UP",), msg.ListUp),
    KeyComboBinding(("DOWN",), msg.ListDown),
)

SEARCH_COMMITTED_BINDINGS = KeyComboRegistry().register_bindings(
    KeyComboBinding(("ESC",), msg.SearchExit),
    KeyComboBinding(("n",), msg.SearchNext),
    KeyComboBinding(("N",), msg.SearchPrev),
    KeyComboBinding(("k", "UP"), msg.ListUp),
    KeyComboBinding(("j", "DOWN"), msg.ListDown),
)


def route_search_key(key: str, typing: bool) -> msg.Message | None:
    if typing:
        routed = SEARCH_TYPING_BINDINGS.dispatch(key)
        return routed if routed is not None else msg.SearchInput(key)
    return SEARCH_COMMITTED_BINDINGS.dispatch(key)


def route_navigator_key(key: str, typing: bool) -> msg.Message | None:
    if key == "ESC":
        return msg.NavigatorExit()
    # A second Enter on a committed path closes the prompt.
    if key == "ENTER" and not typing:
        return msg.NavigatorExit()
    return msg.NavigatorInput(key)


def route_bookmark_key(key: str) -> msg.Message | None:
    if key == "ESC":
        return msg.BookmarkInputExit()
    if key == "ENTER":
        return msg.CreateBookmark()
    return msg.BookmarkInput(key)


def route_key(key: str, mode: InputMode) -> msg.Message | None:
    """Return the message for ``key`` under ``mode``, or ``None`` to ignore it."""
    if isinstance(mode, Searching):
        return route_search_key(key, mode.buffer.typing)
    if isinstance(mode, Navigating):
        return route_navigator_key(key, mode.buffer.typing)
    if isinstance(mode, NamingBookmark):
        return route_bookmark_key(key)
    return NORMAL_BINDINGS.dispatch(key)
