"""Process-wide default license gate.

Provides :func:`get_license_gate` -- the gate the package wiring and the
module-level shortcuts use.  Thread-safe singleton built from
:class:`lq_dc.config.Settings` on first access.
"""

from __future__ import annotations

import threading
from typing import Callable

from lq_dc.license.license_gate import LicenseGate

_lock = threading.Lock()
_instance: LicenseGate | None = None
_factory_fn: Callable[[], LicenseGate] | None = None


def _default_gate() -> LicenseGate:
    from lq_dc.config import load_settings
    from lq_dc.license.storage import JsonFileStore

    settings = load_settings()
    gate = LicenseGate(
        config=settings.license_config(),
        store=JsonFileStore(settings.storage_path),
    )
    gate.load()
    return gate


def register_gate_factory(factory_fn: Callable[[], LicenseGate]) -> None:
    """Register how the default gate is created.

    Call before the first :func:`get_license_gate`, e.g. to use a different
    store.  Any already-created gate is discarded.
    """
    global _factory_fn, _instance
    with _lock:
        _factory_fn = factory_fn
        _instance = None


def get_license_gate() -> LicenseGate:
    """Return the process-wide :class:`LicenseGate`, creating it if needed."""
    global _instance
    if _instance is not None:
        return _instance

    with _lock:
        if _instance is not None:
            return _instance
        _instance = _factory_fn() if _factory_fn is not None else _default_gate()
        return _instance


def reset_license_gate() -> None:
    """Drop the singleton and any registered factory.  **For testing only.**"""
    global _instance, _factory_fn
    with _lock:
        _instance = None
        _factory_fn = None
