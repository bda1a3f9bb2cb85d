"""Syntax highlighting for scalar value previews.

Values are shown as Nix literals, so the pygments Nix lexer colors them.
Unknown style names fall back to the default style.
"""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import NixLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from ..config import DEFAULT_STYLE
from .ansi import sanitize_terminal_text

_LEXER = NixLexer(stripnl=False, ensurenl=False)
_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    formatter = Terminal256Formatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def highlight_value(source: str, style: str = DEFAULT_STYLE, no_color: bool = False) -> list[str]:
    """Return the preview text split into lines, colored unless ``no_color``."""
    source = sanitize_terminal_text(source)
    if no_color:
        return source.split("\n")
    formatter = _formatter_for_style(normalize_style(style))
    rendered = highlight(source, _LEXER, formatter)
    return rendered.rstrip("\n").split("\n")
