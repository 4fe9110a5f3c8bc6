"""String normalization helpers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

__all__ = ["ensure_string", "format_template", "is_blank", "safe_substring"]

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def ensure_string(value: Any, default: str = "") -> str:
    """Return *value* as a string; ``None`` becomes *default*."""
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def safe_substring(text: Any, start: Any = 0, length: Any = None) -> str:
    """Slice *text* from *start* for *length* characters, never raising.

    Negative or unparsable *start* and *length* are treated as ``0``.
    """
    safe_text = ensure_string(text)
    if not safe_text:
        return ""
    begin = max(0, _to_int(start))
    if length is None:
        return safe_text[begin:]
    return safe_text[begin : begin + max(0, _to_int(length))]


def is_blank(text: Any) -> bool:
    """True for ``None`` and strings that are empty after stripping."""
    return ensure_string(text).strip() == ""


def format_template(template: Any, values: Mapping[str, Any] | None) -> str:
    """Replace ``{key}`` placeholders with ``values[key]``.

    Placeholders with no matching key are left as written.
    """
    safe_template = ensure_string(template)
    if not isinstance(values, Mapping):
        return safe_template

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in values and values[key] is not None:
            return str(values[key])
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, safe_template)
