from __future__ import annotations

from typing import Literal


InvalidJsonReason = Literal["empty", "syntax"]


class InvalidJsonError(ValueError):
    """Raised when input text cannot be turned into a JSON value.

    ``reason`` and ``detail`` are diagnostic only; callers present a single
    generic invalid-input message.
    """

    def __init__(self, reason: InvalidJsonReason, detail: str | None = None) -> None:
        self.reason = reason
        self.detail = detail
        message = "Empty JSON text" if reason == "empty" else "Invalid JSON"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
