"""Safe mapping access, merging and copying."""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any

__all__ = ["deep_clone", "safe_get", "safe_merge"]

_MISSING = object()


def _step(current: Any, key: Any) -> Any:
    if isinstance(current, Mapping):
        if key in current:
            return current[key]
        # Dotted paths always yield string keys; fall back to int keys.
        if isinstance(key, str) and key.lstrip("-").isdigit() and int(key) in current:
            return current[int(key)]
        return _MISSING
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        try:
            index = int(key)
        except (TypeError, ValueError):
            return _MISSING
        if 0 <= index < len(current):
            return current[index]
        return _MISSING
    return _MISSING


def safe_get(obj: Any, path: str | Sequence[Any], default: Any = None) -> Any:
    """Follow *path* through nested mappings and sequences.

    Parameters
    ----------
    obj:
        Root container.
    path:
        Dotted string (``"user.addresses.0.city"``) or a sequence of keys.
    default:
        Returned when any step is missing, when a step lands on a scalar, or
        when *obj* itself is not a container.

    Returns
    -------
    Any
        The value at *path*, or *default*.  A stored ``None`` is returned
        as ``None``.
    """
    if not isinstance(obj, (Mapping, list, tuple)):
        return default
    if isinstance(path, str):
        keys: Sequence[Any] = path.split(".") if path else []
    elif isinstance(path, Sequence):
        keys = path
    else:
        return default

    current = obj
    for key in keys:
        current = _step(current, key)
        if current is _MISSING:
            return default
    return current


def safe_merge(*objs: Any) -> dict[Any, Any]:
    """Shallow-merge mappings left to right.  Non-mappings are skipped."""
    result: dict[Any, Any] = {}
    for obj in objs:
        if isinstance(obj, Mapping):
            result.update(obj)
    return result


def deep_clone(obj: Any) -> Any:
    """Return a deep copy of *obj*."""
    return copy.deepcopy(obj)
