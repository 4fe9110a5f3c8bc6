"""Restricted stand-ins for helper modules.

A :class:`RestrictedModule` mirrors the public surface (``__all__``) of a
real module, but every function and class in it is replaced by a stub that
raises :class:`RestrictedAccessError`.  Enums and plain constants pass
through unchanged so that type checks and comparisons keep working.
"""

from __future__ import annotations

import functools
import inspect
from enum import Enum
from types import MappingProxyType, ModuleType
from typing import Any, Callable, NoReturn

from lq_dc.license.errors import RestrictedAccessError


def _is_gated(value: object) -> bool:
    if inspect.isclass(value):
        return not issubclass(value, Enum)
    return callable(value)


def _make_stub(qualified_name: str, original: Callable[..., Any]) -> Callable[..., NoReturn]:
    @functools.wraps(original)
    def stub(*args: Any, **kwargs: Any) -> NoReturn:
        raise RestrictedAccessError(qualified_name)

    return stub


def _public_names(module: ModuleType) -> list[str]:
    names = getattr(module, "__all__", None)
    if names is None:
        names = [n for n in vars(module) if not n.startswith("_")]
    return list(names)


class RestrictedModule:
    """Read-only, stubbed view of a helper module.

    Parameters
    ----------
    module:
        The real module whose exports are mirrored.
    """

    __slots__ = ("_name", "_exports")

    def __init__(self, module: ModuleType) -> None:
        short_name = module.__name__.rsplit(".", 1)[-1]
        exports: dict[str, Any] = {}
        for name in _public_names(module):
            value = getattr(module, name)
            if _is_gated(value):
                value = _make_stub(f"{short_name}.{name}", value)
            exports[name] = value
        object.__setattr__(self, "_name", module.__name__)
        object.__setattr__(self, "_exports", MappingProxyType(exports))

    @property
    def name(self) -> str:
        """Dotted name of the module this stands in for."""
        return self._name

    def __getattr__(self, name: str) -> Any:
        try:
            return self._exports[name]
        except KeyError:
            raise AttributeError(f"restricted module {self._name!r} has no attribute {name!r}") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"restricted module {self._name!r} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"restricted module {self._name!r} is read-only")

    def __dir__(self) -> list[str]:
        return sorted(self._exports)

    def __repr__(self) -> str:
        return f"<restricted module {self._name!r}>"
