from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from typing import Literal

from loguru import logger

from json2php.config.schema import ObservabilityConfig
from json2php.convert.errors import InvalidJsonError
from json2php.convert.sanitizer import sanitize
from json2php.convert.transcoder import format_json, to_array_literal
from json2php.convert.values import parse_json
from json2php.domain.hashing import input_digest, sha256_text


EMPTY_INPUT_MESSAGE = "Please enter valid JSON"
INVALID_INPUT_MESSAGE = "Invalid JSON. Check the syntax."

Pane = Literal["json", "php"]


@dataclass(frozen=True)
class ConversionResult:
    formatted: str
    array_literal: str


@dataclass(frozen=True)
class Notification:
    level: Literal["success", "error"]
    title: str
    message: str


Notifier = Callable[[Notification], None]


def _format_payload_for_log(payload: str, max_chars: int) -> str:
    if max_chars <= 0 or len(payload) <= max_chars:
        return payload

    head = max_chars // 2
    tail = max_chars - head
    omitted = max(0, len(payload) - max_chars)
    if head <= 0 or tail <= 0:
        return payload[:max_chars]

    return f"{payload[:head]}\n...[truncated {omitted} chars]...\n{payload[-tail:]}"


def _log_parse_failure(
    log,
    *,
    cleaned: str,
    exc: InvalidJsonError,
    observability: ObservabilityConfig,
) -> None:
    log.warning(
        "JSON parse failed reason={} error={} cleaned_len={} cleaned_hash={}",
        exc.reason,
        exc.detail or "-",
        len(cleaned),
        sha256_text(cleaned),
    )
    if observability.log_invalid_payload:
        payload_to_log = _format_payload_for_log(cleaned, observability.invalid_payload_max_chars)
        log.warning("JSON parse payload={}", payload_to_log)


def convert(
    raw: str,
    *,
    sanitize_input: bool = True,
    notify: Notifier | None = None,
    observability: ObservabilityConfig | None = None,
) -> ConversionResult:
    """Turn raw pasted text into formatted JSON and a PHP array literal.

    Raises :class:`InvalidJsonError` when the text is blank or does not parse;
    no partial result is produced in that case.
    """
    observability = observability or ObservabilityConfig()
    log = logger.bind(input_hash=input_digest(raw))

    if not raw.strip():
        log.info("Rejected empty input")
        raise InvalidJsonError("empty")

    cleaned = raw
    if sanitize_input:
        cleaned = sanitize(raw)
        log.bind(stage="sanitize").debug("Sanitized input raw_len={} cleaned_len={}", len(raw), len(cleaned))

    try:
        value = parse_json(cleaned)
        log.bind(stage="parse").debug("Parsed {}", type(value).__name__)
    except InvalidJsonError as exc:
        _log_parse_failure(log.bind(stage="parse"), cleaned=cleaned, exc=exc, observability=observability)
        if notify is not None:
            notify(Notification("error", "Conversion error", "The provided JSON is not valid"))
        raise

    formatted = format_json(value)
    array_literal = to_array_literal(value)
    log.bind(stage="transcode").debug("Rendered array literal chars={}", len(array_literal))
    log.info("Converted JSON formatted_chars={} array_chars={}", len(formatted), len(array_literal))

    if notify is not None:
        notify(Notification("success", "Conversion successful", "JSON converted correctly"))
    return ConversionResult(formatted=formatted, array_literal=array_literal)


class ConverterSession:
    """Caller-side state for an interactive surface.

    Holds what is currently displayed. Every submit replaces all of it, so a
    failed conversion never leaves output from an earlier one on screen.
    """

    def __init__(
        self,
        *,
        sanitize_input: bool = True,
        notify: Notifier | None = None,
        observability: ObservabilityConfig | None = None,
    ) -> None:
        self.sanitize_input = sanitize_input
        self.notify = notify
        self.observability = observability
        self.formatted = ""
        self.array_literal = ""
        self.error = ""

    def submit(self, raw: str) -> ConversionResult | None:
        try:
            result = convert(
                raw,
                sanitize_input=self.sanitize_input,
                notify=self.notify,
                observability=self.observability,
            )
        except InvalidJsonError as exc:
            self.formatted = ""
            self.array_literal = ""
            self.error = EMPTY_INPUT_MESSAGE if exc.reason == "empty" else INVALID_INPUT_MESSAGE
            return None

        self.formatted = result.formatted
        self.array_literal = result.array_literal
        self.error = ""
        return result

    def copy_payload(self, pane: Pane) -> str:
        text = self.formatted if pane == "json" else self.array_literal
        if not text:
            raise ValueError(f"Nothing to copy from the {pane} pane")
        if self.notify is not None:
            label = "JSON" if pane == "json" else "PHP array"
            self.notify(Notification("success", "Copied", f"{label} copied to clipboard"))
        return text
