from __future__ import annotations

import hashlib


def sha256_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def input_digest(raw: str, length: int = 12) -> str:
    """Short, stable id for a raw input, used to correlate log lines."""
    return sha256_text(raw)[:length]
