"""Defensive-programming helper modules.

Import the modules directly (``from lq_dc.toolkit import strings``) for
ungated access inside this package.  Library users go through the
attributes on :mod:`lq_dc`, which honour the license gate.
"""

from __future__ import annotations

from lq_dc.toolkit.loader import HELPER_MODULES, Toolkit, build_toolkit
from lq_dc.toolkit.restricted import RestrictedModule

__all__ = [
    "HELPER_MODULES",
    "RestrictedModule",
    "Toolkit",
    "build_toolkit",
]
