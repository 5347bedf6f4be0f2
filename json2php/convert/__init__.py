"""Sanitize, parse and transcode JSON into PHP array literals."""

from json2php.convert.errors import InvalidJsonError
from json2php.convert.sanitizer import sanitize
from json2php.convert.service import ConversionResult, ConverterSession, Notification, convert
from json2php.convert.transcoder import format_json, to_array_literal
from json2php.convert.values import JsonValue, parse_json

__all__ = [
    "ConversionResult",
    "ConverterSession",
    "InvalidJsonError",
    "JsonValue",
    "Notification",
    "convert",
    "format_json",
    "parse_json",
    "sanitize",
    "to_array_literal",
]
