"""UI theme definitions.

Themes are UI-only ANSI palettes (columns, prompts, value types). Syntax
highlighting of value previews is a separate pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..model import (
    BoolValue,
    ErrorValue,
    FloatValue,
    FunctionValue,
    IntValue,
    ListValue,
    NodeValue,
    PathValue,
    StringValue,
    Thunk,
)


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reset: str
    selected: str
    title: str
    breadcrumb: str
    search_match: str
    completion_match: str
    prompt_label: str
    prompt_text: str
    keymap_key: str
    keymap_text: str
    value_list: str
    value_number: str
    value_string: str
    value_path: str
    value_bool: str
    value_function: str
    value_thunk: str
    value_error: str
    value_default: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reset="\033[0m",
    selected="\033[30;43m",
    title="\033[1;34m",
    breadcrumb="\033[1m",
    search_match="\033[30;44m",
    completion_match="\033[30;42m",
    prompt_label="\033[38;5;250m",
    prompt_text="\033[38;5;252m",
    keymap_key="\033[30;47m",
    keymap_text="\033[0m",
    value_list="\033[36m",
    value_number="\033[94m",
    value_string="\033[91m",
    value_path="\033[38;2;187;159;252m",
    value_bool="\033[32m",
    value_function="\033[35m",
    value_thunk="\033[95m",
    value_error="\033[31m",
    value_default="\033[0m",
)

MONO_THEME = UITheme(
    name="mono",
    divider="",
    reset="",
    selected="",
    title="",
    breadcrumb="",
    search_match="",
    completion_match="",
    prompt_label="",
    prompt_text="",
    keymap_key="",
    keymap_text="",
    value_list="",
    value_number="",
    value_string="",
    value_path="",
    value_bool="",
    value_function="",
    value_thunk="",
    value_error="",
    value_default="",
)


def value_color(theme: UITheme, value: NodeValue) -> str:
    """Return the palette entry used for a value of this type."""
    if isinstance(value, ListValue):
        return theme.value_list
    if isinstance(value, (IntValue, FloatValue)):
        return theme.value_number
    if isinstance(value, StringValue):
        return theme.value_string
    if isinstance(value, PathValue):
        return theme.value_path
    if isinstance(value, BoolValue):
        return theme.value_bool
    if isinstance(value, FunctionValue):
        return theme.value_function
    if isinstance(value, Thunk):
        return theme.value_thunk
    if isinstance(value, ErrorValue):
        return theme.value_error
    return theme.value_default


def theme_for(no_color: bool) -> UITheme:
    return MONO_THEME if no_color else DEFAULT_THEME
