"""Typed node values produced by the evaluator.

Each variant is a frozen dataclass exposing ``type_name`` for pane titles and
``display()`` for the value preview. ``ListValue`` holds child names only; the
list cursor lives in the cache entry.
"""

from __future__ import annotations

import json
from dataclasses import dataclass


class NodeValue:
    """Common base for every cached node value."""

    type_name = "Value"

    def display(self) -> str:
        return self.type_name


@dataclass(frozen=True)
class ListValue(NodeValue):
    children: tuple[str, ...] = ()

    type_name = "List"

    def display(self) -> str:
        return "\n".join(self.children)


@dataclass(frozen=True)
class Thunk(NodeValue):
    type_name = "Thunk"


@dataclass(frozen=True)
class IntValue(NodeValue):
    value: int

    type_name = "Int"

    def display(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class FloatValue(NodeValue):
    value: float

    type_name = "Float"

    def display(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class BoolValue(NodeValue):
    value: bool

    type_name = "Bool"

    def display(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class StringValue(NodeValue):
    value: str

    type_name = "String"

    def display(self) -> str:
        # Multi-line strings read better unescaped.
        if "\n" in self.value:
            return f"''\n{self.value}\n''"
        return json.dumps(self.value, ensure_ascii=False)


@dataclass(frozen=True)
class PathValue(NodeValue):
    value: str

    type_name = "Path"

    def display(self) -> str:
        return self.value


@dataclass(frozen=True)
class NullValue(NodeValue):
    type_name = "Null"

    def display(self) -> str:
        return "null"


@dataclass(frozen=True)
class FunctionValue(NodeValue):
    type_name = "Function"


@dataclass(frozen=True)
class ExternalValue(NodeValue):
    type_name = "External"


@dataclass(frozen=True)
class ErrorValue(NodeValue):
    message: str

    type_name = "Error"

    def display(self) -> str:
        return self.message


@dataclass(frozen=True)
class Loading(NodeValue):
    type_name = "Loading"

    def display(self) -> str:
        return "Loading..."


LOADING = Loading()
