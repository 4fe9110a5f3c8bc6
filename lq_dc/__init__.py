"""lq-dc: defensive-programming helpers behind a license gate.

At import time the package asks the default license gate once whether
full functionality is available and binds the helper modules accordingly:

* authorized -- ``lq_dc.arrays``, ``lq_dc.strings``, ... are the real modules;
* otherwise -- they are restricted stand-ins whose functions raise
  :class:`~lq_dc.license.RestrictedAccessError`.

:mod:`lq_dc.license` itself is never restricted.  After setting a key,
call :func:`reload_toolkit` to rebind the helpers::

    import lq_dc

    lq_dc.license.set_key(key, client_id)
    lq_dc.reload_toolkit()
    lq_dc.strings.is_blank("  ")
"""

from __future__ import annotations

from lq_dc import license
from lq_dc.license import RestrictedAccessError, get_license_gate
from lq_dc.toolkit import Toolkit, build_toolkit

__version__ = "0.3.0"

_toolkit: Toolkit


def reload_toolkit() -> Toolkit:
    """Re-query the default gate and rebind the helper module attributes."""
    global _toolkit
    _toolkit = build_toolkit(get_license_gate().is_authorized)
    globals().update(_toolkit.modules())
    return _toolkit


def current_toolkit() -> Toolkit:
    """The toolkit the package attributes are currently bound to."""
    return _toolkit


reload_toolkit()

__all__ = [
    "RestrictedAccessError",
    "Toolkit",
    "arrays",
    "current_toolkit",
    "dates",
    "functions",
    "http_client",
    "license",
    "numbers",
    "objects",
    "platform",
    "reload_toolkit",
    "strings",
    "validators",
]
