from __future__ import annotations

import re


# A backslash followed by anything that is not a JSON escape target.
_STRAY_BACKSLASH_RE = re.compile(r'\\([^"\\/bfnrtu])')


def sanitize(raw: str) -> str:
    """Undo common double-escaping artifacts before strict parsing.

    The passes run in a fixed order and are heuristic: text that legitimately
    contains a backslash-n sequence inside a string can be altered, and an
    escaped newline inside a JSON string becomes a raw newline that the strict
    parser then rejects.
    """
    cleaned = raw.strip()
    cleaned = cleaned.replace('\\"', '"')
    cleaned = cleaned.replace("\\n", "\n").replace("\\t", "\t")
    # No backslash-n or backslash-t pair survives the pass above, so this is
    # a no-op in practice.
    cleaned = cleaned.replace("\\\\n", "\\n").replace("\\\\t", "\\t")
    return _STRAY_BACKSLASH_RE.sub(r"\1", cleaned)
