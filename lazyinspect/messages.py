"""Messages consumed by the browse session.

Input, evaluator results, and renderer feedback all reach the session as one
of these immutable values. Key-carrying messages hold the normalized key
token produced by ``lazyinspect.input.read_key``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .model import NodeValue, TreePath


class Message:
    """Base class for everything the driver processes."""


@dataclass(frozen=True)
class Data(Message):
    path: TreePath
    value: NodeValue


@dataclass(frozen=True)
class KeyPress(Message):
    key: str


@dataclass(frozen=True)
class ViewHeight(Message):
    rows: int


@dataclass(frozen=True)
class GoToPath(Message):
    path: TreePath


@dataclass(frozen=True)
class SearchInput(Message):
    key: str


@dataclass(frozen=True)
class NavigatorInput(Message):
    key: str


@dataclass(frozen=True)
class BookmarkInput(Message):
    key: str


@dataclass(frozen=True)
class _Command(Message):
    pass


class Quit(_Command):
    pass


class Back(_Command):
    pass


class EnterItem(_Command):
    pass


class ListUp(_Command):
    pass


class ListDown(_Command):
    pass


class PageUp(_Command):
    pass


class PageDown(_Command):
    pass


class Refresh(_Command):
    pass


class SearchEnter(_Command):
    pass


class SearchExit(_Command):
    pass


class SearchNext(_Command):
    pass


class SearchPrev(_Command):
    pass


class NavigatorEnter(_Command):
    pass


class NavigatorExit(_Command):
    pass


class BookmarkInputEnter(_Command):
    pass


class BookmarkInputExit(_Command):
    pass


class CreateBookmark(_Command):
    pass


class DeleteBookmark(_Command):
    pass
