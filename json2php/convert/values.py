"""Tagged JSON value model and the strict parse step."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Union

import orjson

from json2php.convert.errors import InvalidJsonError


@dataclass(frozen=True, slots=True)
class JsonNull:
    pass


@dataclass(frozen=True, slots=True)
class JsonBool:
    value: bool


@dataclass(frozen=True, slots=True)
class JsonNumber:
    value: int | float


@dataclass(frozen=True, slots=True)
class JsonString:
    value: str


@dataclass(frozen=True, slots=True)
class JsonArray:
    items: tuple["JsonValue", ...] = ()


@dataclass(frozen=True, slots=True)
class JsonObject:
    # Insertion order of the source document.
    entries: tuple[tuple[str, "JsonValue"], ...] = ()

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]


JsonValue = Union[JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject]

JSON_NULL = JsonNull()


def _scalar(data: Any) -> JsonValue:
    if data is None:
        return JSON_NULL
    if isinstance(data, bool):
        return JsonBool(data)
    if isinstance(data, (int, float)):
        return JsonNumber(data)
    if isinstance(data, str):
        return JsonString(data)
    raise TypeError(f"Unsupported JSON value type: {type(data).__name__}")


def from_python(data: Any) -> JsonValue:
    """Build a tagged value from parser output (dict/list/str/int/float/bool/None)."""
    results: list[JsonValue] = []
    pending: list[tuple[Any, bool]] = [(data, False)]

    while pending:
        node, expanded = pending.pop()
        if isinstance(node, dict):
            if not expanded:
                pending.append((node, True))
                pending.extend((child, False) for child in reversed(list(node.values())))
                continue
            start = len(results) - len(node)
            children = results[start:]
            del results[start:]
            results.append(JsonObject(tuple(zip(node.keys(), children))))
        elif isinstance(node, list):
            if not expanded:
                pending.append((node, True))
                pending.extend((child, False) for child in reversed(node))
                continue
            start = len(results) - len(node)
            children = results[start:]
            del results[start:]
            results.append(JsonArray(tuple(children)))
        else:
            results.append(_scalar(node))

    return results[0]


def to_python(value: JsonValue) -> Any:
    """Inverse of :func:`from_python`; objects become insertion-ordered dicts."""
    root: list[Any] = []
    # (tagged node, container to fill, key in that container)
    pending: list[tuple[JsonValue, Any, Any]] = [(value, root, None)]

    while pending:
        node, target, key = pending.pop()
        match node:
            case JsonNull():
                converted: Any = None
            case JsonBool(value=flag):
                converted = flag
            case JsonNumber(value=number):
                converted = number
            case JsonString(value=text):
                converted = text
            case JsonArray(items=items):
                converted = [None] * len(items)
                pending.extend((item, converted, idx) for idx, item in enumerate(items))
            case JsonObject(entries=entries):
                converted = {entry_key: None for entry_key, _ in entries}
                pending.extend((item, converted, entry_key) for entry_key, item in entries)
            case _:
                raise TypeError(f"Unsupported JSON value type: {type(node).__name__}")

        if key is None and target is root:
            root.append(converted)
        else:
            target[key] = converted

    return root[0]


def parse_json(text: str) -> JsonValue:
    try:
        data = orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        raise InvalidJsonError("syntax", str(exc)) from exc
    return from_python(data)
