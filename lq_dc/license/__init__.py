"""lq-dc license gate.

Validates client-bound license keys, tracks their expiration, and decides
whether the helper modules are exposed for real or as restricted stubs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lq_dc.license._factory import get_license_gate, register_gate_factory, reset_license_gate
from lq_dc.license.errors import LicenseError, RestrictedAccessError, StorageError
from lq_dc.license.fingerprint import FingerprintAlgorithm, short_fingerprint
from lq_dc.license.license_gate import (
    KEY_PREFIX,
    KEY_SUFFIX_LENGTH,
    LicenseConfig,
    LicenseGate,
    LicenseInfo,
    PersistedLicense,
)
from lq_dc.license.storage import JsonFileStore, KeyValueStore, MemoryStore


def set_key(key: str, client_id: str | None = None) -> bool:
    """Set the license key on the default gate."""
    return get_license_gate().set_key(key, client_id)


def is_authorized() -> bool:
    """Whether the default gate currently authorizes full functionality."""
    return get_license_gate().is_authorized()


def clear() -> None:
    get_license_gate().clear()


def configure(options: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
    get_license_gate().configure(options, **kwargs)


def get_info() -> LicenseInfo:
    return get_license_gate().get_info()


__all__ = [
    "KEY_PREFIX",
    "KEY_SUFFIX_LENGTH",
    "FingerprintAlgorithm",
    "JsonFileStore",
    "KeyValueStore",
    "LicenseConfig",
    "LicenseError",
    "LicenseGate",
    "LicenseInfo",
    "MemoryStore",
    "PersistedLicense",
    "RestrictedAccessError",
    "StorageError",
    "clear",
    "configure",
    "get_info",
    "get_license_gate",
    "is_authorized",
    "register_gate_factory",
    "reset_license_gate",
    "set_key",
    "short_fingerprint",
]
