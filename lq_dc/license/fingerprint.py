"""Short client fingerprints embedded in license keys.

A fingerprint is a deterministic, collision-tolerant digest of a client
identifier rendered as 8 lowercase hex characters.  It is not a security
primitive; it only binds a key to the identifier it was issued for.

Two interchangeable implementations exist:

* **md5** -- the first 8 hex digits of the MD5 digest (what the key
  generator uses by default).
* **rolling** -- a 32-bit polynomial rolling hash, for runtimes where MD5
  is unavailable.
"""

from __future__ import annotations

import hashlib
import logging
from enum import Enum

logger = logging.getLogger(__name__)

FINGERPRINT_LENGTH = 8
SENTINEL_FINGERPRINT = "0" * FINGERPRINT_LENGTH


class FingerprintAlgorithm(str, Enum):
    """Digest routine used to fingerprint a client identifier."""

    MD5 = "md5"
    ROLLING = "rolling"


def _md5_fingerprint(value: str) -> str:
    digest = hashlib.md5(value.encode("utf-8"), usedforsecurity=False)
    return digest.hexdigest()[:FINGERPRINT_LENGTH]


def _rolling_fingerprint(value: str) -> str:
    h = 0
    for ch in value:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    return f"{h:0{FINGERPRINT_LENGTH}x}"


_IMPLEMENTATIONS = {
    FingerprintAlgorithm.MD5: _md5_fingerprint,
    FingerprintAlgorithm.ROLLING: _rolling_fingerprint,
}


def short_fingerprint(
    value: str,
    algorithm: FingerprintAlgorithm = FingerprintAlgorithm.MD5,
) -> str:
    """Return the 8-character fingerprint of *value*.

    Parameters
    ----------
    value:
        The client identifier to fingerprint.
    algorithm:
        Which digest routine to use.

    Returns
    -------
    str
        Eight lowercase hex characters.  If the digest cannot be computed
        (non-string input, digest unavailable in the runtime) the
        :data:`SENTINEL_FINGERPRINT` is returned instead, which never
        matches a generated key.
    """
    try:
        return _IMPLEMENTATIONS[FingerprintAlgorithm(algorithm)](value)
    except (AttributeError, TypeError, ValueError, KeyError) as exc:
        logger.warning("Fingerprint computation failed (%s); using sentinel", exc)
        return SENTINEL_FINGERPRINT
