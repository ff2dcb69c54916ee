"""Path-string helpers shared by the resource index and the resolver.

Reference paths are treated as plain '/'-separated strings, never as OS paths:
they were authored on another machine and may not match any local layout.
"""

from __future__ import annotations

import re
from urllib.parse import unquote

# A '%' that does not start a two-digit hex escape.
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def basename(path: str) -> str:
    """Portion after the last '/' (the whole string if there is none)."""
    return path.rsplit("/", 1)[-1]


def percent_decode(text: str) -> str:
    """Strictly decode %XX escapes as UTF-8.

    Raises:
        ValueError: on a malformed escape or an invalid UTF-8 byte sequence
            (``UnicodeDecodeError`` is a ValueError subclass).
    """
    if _BAD_ESCAPE_RE.search(text):
        raise ValueError(f"Malformed percent-escape in {text!r}")
    return unquote(text, encoding="utf-8", errors="strict")


def strip_leading(reference: str) -> str:
    """Drop a single leading './' or, failing that, a single leading '/'."""
    if reference.startswith("./"):
        return reference[2:]
    if reference.startswith("/"):
        return reference[1:]
    return reference
