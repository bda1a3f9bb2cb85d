"""Line protocol spoken with the evaluator process.

Requests are dotted path expressions, one per line (the root is the empty
line). Every response is one JSON object ``{"type": "<code>", "data": ...}``
where ``code`` selects the value variant.
"""

from __future__ import annotations

import json

from ..model import (
    BoolValue,
    ErrorValue,
    ExternalValue,
    FloatValue,
    FunctionValue,
    IntValue,
    ListValue,
    NodeValue,
    NullValue,
    PathValue,
    StringValue,
    Thunk,
    TreePath,
)

TYPE_THUNK = 0
TYPE_INT = 1
TYPE_FLOAT = 2
TYPE_BOOL = 3
TYPE_STRING = 4
TYPE_PATH = 5
TYPE_NULL = 6
TYPE_ATTRS = 7
TYPE_LIST = 8
TYPE_FUNCTION = 9
TYPE_EXTERNAL = 10
TYPE_ERROR = 11


class ProtocolError(ValueError):
    """Raised when a response line cannot be decoded into a node value."""


def encode_request(path: TreePath) -> str:
    return path.render() + "\n"


def _type_code(raw: object) -> int:
    if isinstance(raw, bool):
        raise ProtocolError(f"invalid type code: {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw)
        except ValueError as exc:
            raise ProtocolError(f"invalid type code: {raw!r}") from exc
    raise ProtocolError(f"invalid type code: {raw!r}")


def _expect(data: object, kind: type | tuple[type, ...], code: int) -> object:
    # bool is an int subclass; never accept it where a number is expected.
    if isinstance(data, bool) and kind is not bool:
        raise ProtocolError(f"unexpected payload for type {code}: {data!r}")
    if not isinstance(data, kind):
        raise ProtocolError(f"unexpected payload for type {code}: {data!r}")
    return data


def decode_response(line: str) -> NodeValue:
    """Decode one response line, raising ``ProtocolError`` when malformed."""
    text = line.strip()
    if not text:
        raise ProtocolError("empty response")
    try:
        message = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProtocolError(f"malformed response {text!r}: {exc}") from exc
    if not isinstance(message, dict) or "type" not in message:
        raise ProtocolError(f"malformed response {text!r}")

    code = _type_code(message["type"])
    data = message.get("data")

    if code == TYPE_THUNK:
        return Thunk()
    if code == TYPE_INT:
        return IntValue(_expect(data, int, code))
    if code == TYPE_FLOAT:
        return FloatValue(float(_expect(data, (int, float), code)))
    if code == TYPE_BOOL:
        return BoolValue(_expect(data, bool, code))
    if code == TYPE_STRING:
        return StringValue(_expect(data, str, code))
    if code == TYPE_PATH:
        return PathValue(_expect(data, str, code))
    if code == TYPE_NULL:
        return NullValue()
    if code == TYPE_ATTRS:
        names = _expect(data, list, code)
        if not all(isinstance(name, str) for name in names):
            raise ProtocolError(f"attribute names must be strings: {names!r}")
        return ListValue(tuple(names))
    if code == TYPE_LIST:
        count = _expect(data, int, code)
        if count < 0:
            raise ProtocolError(f"negative list length: {count}")
        return ListValue(tuple(str(index) for index in range(count)))
    if code == TYPE_FUNCTION:
        return FunctionValue()
    if code == TYPE_EXTERNAL:
        return ExternalValue()
    if code == TYPE_ERROR:
        return ErrorValue(str(data) if data is not None else "evaluation error")
    raise ProtocolError(f"unknown type code: {code}")
