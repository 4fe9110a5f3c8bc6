"""Safe list access helpers."""

from __future__ import annotations

from typing import Any

__all__ = ["ensure_list", "safe_get", "unique"]


def safe_get(seq: Any, index: Any, default: Any = None) -> Any:
    """Return ``seq[index]``, or *default* when the index is out of range.

    Negative indexes count as out of range.  Anything that is not a list or
    tuple yields *default*.
    """
    if not isinstance(seq, (list, tuple)):
        return default
    if isinstance(index, bool) or not isinstance(index, int):
        return default
    if index < 0 or index >= len(seq):
        return default
    return seq[index]


def unique(seq: Any) -> list[Any]:
    """Return the items of *seq* without duplicates, keeping first occurrences."""
    if not isinstance(seq, (list, tuple)):
        return []

    seen: set[Any] = set()
    result: list[Any] = []
    for item in seq:
        # 1 and True hash equal; keep them apart like a strict comparison would.
        marker = (type(item), item)
        try:
            if marker in seen:
                continue
            seen.add(marker)
        except TypeError:
            if item in result:
                continue
        result.append(item)
    return result


def ensure_list(value: Any) -> list[Any]:
    """Wrap *value* in a list.  ``None`` becomes ``[]``; lists pass through."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]
