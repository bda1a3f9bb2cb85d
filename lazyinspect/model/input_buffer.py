"""Single-line text input buffers and the session's input mode variant.

Exactly one ``InputMode`` is active at a time. Each active mode owns its own
buffer, so search text never leaks into the navigator and vice versa.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class InputBuffer:
    """Editable text with a caret.

    ``typing`` stays true until Enter is pressed once; afterwards single-letter
    shortcuts (``n``/``N``) apply instead of editing.
    """

    text: str = ""
    cursor: int = 0
    typing: bool = True

    @classmethod
    def seeded(cls, text: str) -> InputBuffer:
        return cls(text=text, cursor=len(text))

    def insert(self, ch: str) -> None:
        self.text = self.text[: self.cursor] + ch + self.text[self.cursor :]
        self.cursor += len(ch)

    def backspace(self) -> None:
        if self.cursor == 0:
            return
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1

    def move_left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def move_right(self) -> None:
        self.cursor = min(len(self.text), self.cursor + 1)

    def replace(self, text: str) -> None:
        self.text = text
        self.cursor = len(text)

    def handle_key(self, key: str) -> bool:
        """Apply an editing key token; returns whether the text changed."""
        if key == "BACKSPACE":
            before = self.text
            self.backspace()
            return self.text != before
        if key == "LEFT":
            self.move_left()
            return False
        if key == "RIGHT":
            self.move_right()
            return False
        if len(key) == 1 and key.isprintable():
            self.insert(key)
            return True
        return False


@dataclass(frozen=True)
class Inactive:
    pass


@dataclass(frozen=True)
class Searching:
    buffer: InputBuffer = field(default_factory=InputBuffer)


@dataclass(frozen=True)
class Navigating:
    buffer: InputBuffer = field(default_factory=InputBuffer)


@dataclass(frozen=True)
class NamingBookmark:
    buffer: InputBuffer = field(default_factory=InputBuffer)


InputMode = Inactive | Searching | Navigating | NamingBookmark

INACTIVE = Inactive()
