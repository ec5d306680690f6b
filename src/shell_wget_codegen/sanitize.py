"""Escaping helpers for values embedded in the generated shell command."""

from __future__ import annotations

from urllib.parse import quote


# encodeURIComponent's unreserved set, minus the apostrophe so the result
# stays inside a single-quoted shell word.
_URI_COMPONENT_SAFE = "-_.!~*()"

_QUOTED_MODES = frozenset({"header", "raw", "formdata", "graphql", "file"})


def escape_single_quotes(value: str) -> str:
    """Make ``value`` safe to place between single quotes in a POSIX shell."""
    return value.replace("'", "'\\''")


def sanitize(value: object, mode: str | None = None, trim: bool = False) -> str:
    """Return ``value`` escaped for the given rendering mode.

    Non-string values render as an empty string. ``trim`` strips surrounding
    whitespace before escaping.
    """
    if not isinstance(value, str):
        return ""
    if trim is True:
        value = value.strip()
    if mode in _QUOTED_MODES:
        return escape_single_quotes(value)
    if mode == "urlencoded":
        return quote(value, safe=_URI_COMPONENT_SAFE)
    return value
