from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from typing import Iterator

import orjson

from json2php.convert.values import (
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)


INDENT = "    "
JSON_INDENT = "  "
EMPTY_ARRAY = "[]"
NULL_TOKEN = "null"


def quote_string(text: str) -> str:
    escaped = text.replace("'", "\\'")
    return f"'{escaped}'"


def _render_number(number: int | float) -> str:
    if isinstance(number, int):
        return str(number)
    return orjson.dumps(number).decode("utf-8")


def _json_text(text: str) -> str:
    return orjson.dumps(text).decode("utf-8")


@dataclass
class _Frame:
    depth: int
    entries: Iterator[tuple[str | None, JsonValue]]
    closer: str = "]"
    emitted: bool = False


# Appends the text for a value, pushing a frame when a non-empty container opens.
Opener = Callable[[JsonValue, int, list[str], list[_Frame]], None]


def _open_literal(value: JsonValue, depth: int, parts: list[str], stack: list[_Frame]) -> None:
    match value:
        case JsonNull():
            parts.append(NULL_TOKEN)
        case JsonString(value=text):
            parts.append(quote_string(text))
        case JsonBool(value=flag):
            parts.append("true" if flag else "false")
        case JsonNumber(value=number):
            parts.append(_render_number(number))
        case JsonArray(items=items):
            if not items:
                parts.append(EMPTY_ARRAY)
                return
            parts.append("[\n")
            stack.append(_Frame(depth, ((None, item) for item in items)))
        case JsonObject(entries=entries):
            if not entries:
                parts.append(EMPTY_ARRAY)
                return
            parts.append("[\n")
            stack.append(_Frame(depth, iter(entries)))
        case _:
            parts.append(str(value))


def _open_json(value: JsonValue, depth: int, parts: list[str], stack: list[_Frame]) -> None:
    match value:
        case JsonNull():
            parts.append(NULL_TOKEN)
        case JsonString(value=text):
            parts.append(_json_text(text))
        case JsonBool(value=flag):
            parts.append("true" if flag else "false")
        case JsonNumber(value=number):
            parts.append(_render_number(number))
        case JsonArray(items=items):
            if not items:
                parts.append("[]")
                return
            parts.append("[\n")
            stack.append(_Frame(depth, ((None, item) for item in items), closer="]"))
        case JsonObject(entries=entries):
            if not entries:
                parts.append("{}")
                return
            parts.append("{\n")
            stack.append(_Frame(depth, iter(entries), closer="}"))
        case _:
            parts.append(str(value))


def _walk(
    value: JsonValue,
    depth: int,
    indent: str,
    open_node: Opener,
    render_key: Callable[[str], str],
) -> str:
    parts: list[str] = []
    stack: list[_Frame] = []
    open_node(value, depth, parts, stack)

    while stack:
        frame = stack[-1]
        entry = next(frame.entries, None)
        if entry is None:
            stack.pop()
            parts.append(f"\n{indent * frame.depth}{frame.closer}")
            continue

        if frame.emitted:
            parts.append(",\n")
        frame.emitted = True

        key, item = entry
        parts.append(indent * (frame.depth + 1))
        if key is not None:
            parts.append(render_key(key))
        open_node(item, frame.depth + 1, parts, stack)

    return "".join(parts)


def to_array_literal(value: JsonValue, depth: int = 0) -> str:
    """Render a JSON value as a PHP short-array literal.

    Nested elements are indented four spaces per level and the closing bracket
    of a container lines up with ``depth``. Objects become associative arrays
    in key insertion order; empty objects and empty arrays both render as
    ``[]``.
    """
    return _walk(value, depth, INDENT, _open_literal, lambda key: f"{quote_string(key)} => ")


def format_json(value: JsonValue) -> str:
    """Canonical re-serialization with two-space indentation.

    Matches ``orjson.dumps(..., option=OPT_INDENT_2)`` but has no nesting limit
    beyond what the parser accepted.
    """
    return _walk(value, 0, JSON_INDENT, _open_json, lambda key: f"{_json_text(key)}: ")
