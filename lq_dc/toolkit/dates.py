"""Date coercion and formatting.

Numbers are read as epoch **milliseconds**.  Naive datetimes are treated as
local time whenever two values are compared.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time
from typing import Any

__all__ = ["days_between", "ensure_date", "format_date", "is_in_range"]

_TOKENS = re.compile(r"YYYY|YY|MM|M|DD|D|HH|H|mm|m|ss|s")


def _from_millis(value: float) -> datetime | None:
    if math.isnan(value) or math.isinf(value):
        return None
    try:
        return datetime.fromtimestamp(value / 1000)
    except (OverflowError, OSError, ValueError):
        return None


def ensure_date(value: Any, default: datetime | None = None) -> datetime:
    """Coerce *value* to a ``datetime``.

    Accepts ``datetime``, ``date``, epoch milliseconds and ISO-8601 strings.
    Anything else, or an unparsable value, yields *default* (the current
    local time when *default* is ``None``).
    """
    fallback = default if default is not None else datetime.now()
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, (int, float)):
        return _from_millis(value) or fallback
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return _from_millis(int(text)) or fallback
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return fallback
    return fallback


def format_date(value: Any, pattern: str = "YYYY-MM-DD") -> str:
    """Render *value* with a token pattern.

    Tokens: ``YYYY YY MM M DD D HH H mm m ss s``.  Two-letter tokens are
    zero padded.  Other characters are copied as-is.
    """
    dt = ensure_date(value)
    fields = {
        "YYYY": f"{dt.year}",
        "YY": f"{dt.year % 100:02d}",
        "MM": f"{dt.month:02d}",
        "M": f"{dt.month}",
        "DD": f"{dt.day:02d}",
        "D": f"{dt.day}",
        "HH": f"{dt.hour:02d}",
        "H": f"{dt.hour}",
        "mm": f"{dt.minute:02d}",
        "m": f"{dt.minute}",
        "ss": f"{dt.second:02d}",
        "s": f"{dt.second}",
    }
    return _TOKENS.sub(lambda match: fields[match.group(0)], pattern)


def days_between(start: Any, end: Any) -> int:
    """Calendar days from *start* to *end*; negative when *end* is earlier."""
    return (ensure_date(end).date() - ensure_date(start).date()).days


def is_in_range(value: Any, start: Any, end: Any) -> bool:
    """Whether *value* lies within ``[start, end]``, inclusive."""
    moment = ensure_date(value).timestamp()
    return ensure_date(start).timestamp() <= moment <= ensure_date(end).timestamp()
