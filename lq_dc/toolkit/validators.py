"""Simple value validators.  All return ``bool`` and never raise."""

from __future__ import annotations

import math
import re
from collections.abc import Sized
from typing import Any
from urllib.parse import urlparse

__all__ = [
    "is_email",
    "is_empty",
    "is_id_card",
    "is_integer",
    "is_mobile_phone",
    "is_number",
    "is_url",
]

_EMAIL = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
# Mainland China mobile numbers.
_MOBILE_PHONE = re.compile(r"^1[3-9]\d{9}$")
# Mainland China resident ID: 15 digits, or 17 digits plus a digit or X.
_ID_CARD = re.compile(r"^(\d{15}|\d{17}[\dXx])$")


def is_empty(value: Any) -> bool:
    """``None``, empty strings and empty containers are empty; numbers never are."""
    if value is None:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def is_number(value: Any) -> bool:
    """Real numbers (not NaN, not bool) and non-blank numeric strings."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return not math.isnan(value)
    if isinstance(value, str) and value.strip():
        try:
            return not math.isnan(float(value))
        except ValueError:
            return False
    return False


def is_integer(value: Any) -> bool:
    """Numbers with no fractional part, including ``"3"`` and ``3.0``."""
    if not is_number(value):
        return False
    if isinstance(value, int):
        return True
    try:
        number = float(value)
    except OverflowError:
        return False
    return math.isfinite(number) and number.is_integer()


def is_email(value: Any) -> bool:
    return isinstance(value, str) and _EMAIL.fullmatch(value) is not None


def is_url(value: Any) -> bool:
    """Absolute ``http``/``https`` URLs with a host."""
    if not isinstance(value, str):
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_mobile_phone(value: Any) -> bool:
    return isinstance(value, str) and _MOBILE_PHONE.fullmatch(value) is not None


def is_id_card(value: Any) -> bool:
    return isinstance(value, str) and _ID_CARD.fullmatch(value) is not None
