"""Dotted tree paths used as cache keys and evaluator requests.

The root is the path with zero segments; it renders as the empty string.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

SEPARATOR = "."


@dataclass(frozen=True)
class TreePath:
    segments: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> TreePath:
        """Split dotted ``text`` into a path; ``""`` parses to the root."""
        if text == "":
            return ROOT_PATH
        return cls(tuple(text.split(SEPARATOR)))

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def last(self) -> str:
        return self.segments[-1] if self.segments else ""

    def parent(self) -> TreePath | None:
        if not self.segments:
            return None
        return TreePath(self.segments[:-1])

    def child(self, name: str) -> TreePath:
        return TreePath(self.segments + (name,))

    def ancestors(self) -> Iterator[TreePath]:
        """Yield parents from nearest to the root."""
        parent = self.parent()
        while parent is not None:
            yield parent
            parent = parent.parent()

    def render(self) -> str:
        return SEPARATOR.join(self.segments)

    def __str__(self) -> str:
        return self.render()


ROOT_PATH = TreePath()
