"""Exception hierarchy for the license gate."""

from __future__ import annotations


class LicenseError(Exception):
    """Base class for license gate errors."""


class StorageError(LicenseError):
    """Raised by a key-value store when a read, write or delete fails.

    The gate catches this at every persistence call; it never reaches
    library callers.
    """


class RestrictedAccessError(LicenseError):
    """Raised by every helper function while the library is unlicensed."""

    def __init__(self, function_name: str) -> None:
        self.function_name = function_name
        super().__init__(
            f"'{function_name}' is unavailable: no valid license key is set. "
            "Call lq_dc.license.set_key(key, client_id) and then lq_dc.reload_toolkit()."
        )
