"""Number coercion, rounding and formatting."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

__all__ = ["clamp", "ensure_number", "format_number", "round_half_up"]


def ensure_number(value: Any, default: float = 0) -> float:
    """Coerce *value* to a number, or return *default*.

    Ints and floats pass through (``bool`` counts as ``0``/``1``).  Strings
    are parsed after stripping; an empty string is ``0``.  NaN and anything
    unparsable yield *default*.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return default if isinstance(value, float) and math.isnan(value) else value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return 0
        try:
            return int(stripped)
        except ValueError:
            pass
        try:
            number = float(stripped)
        except ValueError:
            return default
        return default if math.isnan(number) else number
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(number) else number


def clamp(num: Any, low: Any, high: Any) -> float:
    """Limit *num* to ``[low, high]``."""
    return min(max(ensure_number(num), ensure_number(low)), ensure_number(high))


def _safe_precision(precision: Any) -> int:
    value = ensure_number(precision)
    if math.isinf(value):
        return 0
    return max(0, math.floor(value))


def round_half_up(num: Any, precision: Any = 0) -> float:
    """Round half away from zero at *precision* decimals.

    Uses the decimal representation of the input, so ``1.005`` rounds to
    ``1.01`` instead of ``1.0``.
    """
    value = ensure_number(num)
    digits = _safe_precision(precision)
    if isinstance(value, float) and math.isinf(value):
        return value
    try:
        quantum = Decimal(1).scaleb(-digits)
        rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return value
    return int(rounded) if digits == 0 else float(rounded)


def format_number(num: Any, precision: Any = 2, thousands_separator: str = ",") -> str:
    """Format *num* with fixed decimals and grouped thousands."""
    value = ensure_number(num)
    digits = _safe_precision(precision)
    fixed = f"{value:,.{digits}f}"
    if thousands_separator == ",":
        return fixed
    return fixed.replace(",", thousands_separator)
