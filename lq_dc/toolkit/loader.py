"""Select real or restricted helper modules from an authorization predicate."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from types import ModuleType

from lq_dc.toolkit import (
    arrays,
    dates,
    functions,
    http_client,
    numbers,
    objects,
    platform,
    strings,
    validators,
)
from lq_dc.toolkit.restricted import RestrictedModule

logger = logging.getLogger(__name__)

HelperModule = ModuleType | RestrictedModule

# Order matters only for display.
HELPER_MODULES: dict[str, ModuleType] = {
    "arrays": arrays,
    "objects": objects,
    "strings": strings,
    "numbers": numbers,
    "dates": dates,
    "functions": functions,
    "validators": validators,
    "platform": platform,
    "http_client": http_client,
}


@dataclass(frozen=True)
class Toolkit:
    """The helper modules as exposed to library users."""

    authorized: bool
    arrays: HelperModule
    objects: HelperModule
    strings: HelperModule
    numbers: HelperModule
    dates: HelperModule
    functions: HelperModule
    validators: HelperModule
    platform: HelperModule
    http_client: HelperModule

    def modules(self) -> dict[str, HelperModule]:
        """Helper modules keyed by attribute name."""
        return {name: getattr(self, name) for name in HELPER_MODULES}


def build_toolkit(is_authorized: Callable[[], bool]) -> Toolkit:
    """Build a :class:`Toolkit`, calling *is_authorized* exactly once.

    Authorized callers get the real modules.  Otherwise every module is
    wrapped in a :class:`RestrictedModule`.
    """
    authorized = bool(is_authorized())
    if authorized:
        modules: dict[str, HelperModule] = dict(HELPER_MODULES)
    else:
        logger.debug("Building restricted toolkit")
        modules = {name: RestrictedModule(module) for name, module in HELPER_MODULES.items()}
    return Toolkit(authorized=authorized, **modules)


__all__ = ["HELPER_MODULES", "Toolkit", "build_toolkit"]
