"""Data model for browse sessions: paths, values, cache, stack, inputs."""

from .bookmarks import MAX_RECENTS, Bookmark, record_recent
from .cache import CacheEntry, PathValueCache, clamp_cursor
from .input_buffer import (
    INACTIVE,
    Inactive,
    InputBuffer,
    InputMode,
    NamingBookmark,
    Navigating,
    Searching,
)
from .path import ROOT_PATH, SEPARATOR, TreePath
from .stack import BOOKMARKS, RECENTS, ROOT, ROOT_MENU, AtPath, BrowseStack, MenuItem, StackItem
from .values import (
    LOADING,
    BoolValue,
    ErrorValue,
    ExternalValue,
    FloatValue,
    FunctionValue,
    IntValue,
    ListValue,
    Loading,
    NodeValue,
    NullValue,
    PathValue,
    StringValue,
    Thunk,
)

__all__ = [
    "AtPath",
    "BOOKMARKS",
    "Bookmark",
    "BoolValue",
    "BrowseStack",
    "CacheEntry",
    "ErrorValue",
    "ExternalValue",
    "FloatValue",
    "FunctionValue",
    "INACTIVE",
    "Inactive",
    "InputBuffer",
    "InputMode",
    "IntValue",
    "LOADING",
    "ListValue",
    "Loading",
    "MAX_RECENTS",
    "MenuItem",
    "NamingBookmark",
    "Navigating",
    "NodeValue",
    "NullValue",
    "PathValue",
    "PathValueCache",
    "RECENTS",
    "ROOT",
    "ROOT_MENU",
    "ROOT_PATH",
    "SEPARATOR",
    "Searching",
    "StackItem",
    "StringValue",
    "Thunk",
    "TreePath",
    "clamp_cursor",
    "record_recent",
]
