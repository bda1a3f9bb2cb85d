"""ANSI-aware text measurement and line shaping utilities.

Clipping and wrapping preserve escape sequences so that colored cells stay
aligned when columns are padded side by side.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies, ignoring ANSI."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def sanitize_terminal_text(text: str) -> str:
    """Escape control bytes that would move the cursor or ring the bell."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", text)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` cells and pad the remainder with spaces."""
    clipped = clip_ansi_line(text, width)
    used = display_width(clipped)
    if "\x1b" in clipped:
        clipped += RESET
    return clipped + " " * max(0, width - used)


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Wrap a styled line into chunks that fit ``width`` display columns.

    Escape sequences remain attached to their surrounding chunk, and tab
    expansion respects terminal tab-stop alignment for each wrapped segment.
    """
    if width <= 0:
        return [""]
    if not text:
        return [""]

    wrapped: list[str] = []
    chunk: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                chunk.append(match.group(0))
                i = match.end()
                continue

        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > width and chunk:
            wrapped.append("".join(chunk))
            chunk = []
            col = 0
            w = char_display_width(ch, col)
        chunk.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    wrapped.append("".join(chunk))
    return wrapped
