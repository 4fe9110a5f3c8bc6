"""License key issuing.

Generates keys that :class:`~lq_dc.license.license_gate.LicenseGate`
accepts for a given client id.  Exposed on the command line as
``lq-dc generate`` and ``lq-dc validate``.
"""

from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lq_dc.license.fingerprint import FINGERPRINT_LENGTH, FingerprintAlgorithm, short_fingerprint
from lq_dc.license.license_gate import (
    FINGERPRINT_OFFSET,
    KEY_PREFIX,
    KEY_SUFFIX_LENGTH,
    check_key,
)


class IssuedLicense(BaseModel):
    """A generated key with the metadata handed to the client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    license_key: str
    client_name: str
    client_id: str
    issue_date: datetime
    expiration_date: datetime
    valid_days: int = Field(ge=1)


def generate_license_key(
    client_id: str,
    *,
    algorithm: FingerprintAlgorithm = FingerprintAlgorithm.MD5,
) -> str:
    """Generate a key bound to *client_id*.

    Parameters
    ----------
    client_id:
        The client identifier whose fingerprint is embedded in the key.
    algorithm:
        Fingerprint routine; must match the gate's configuration.

    Returns
    -------
    str
        ``KEY_PREFIX`` followed by a 36-character hex suffix carrying the
        fingerprint at its midpoint.
    """
    if not client_id:
        raise ValueError("client_id is required")
    suffix = secrets.token_hex(KEY_SUFFIX_LENGTH // 2)
    fingerprint = short_fingerprint(client_id, algorithm)
    suffix = suffix[:FINGERPRINT_OFFSET] + fingerprint + suffix[FINGERPRINT_OFFSET + FINGERPRINT_LENGTH :]
    return f"{KEY_PREFIX}{suffix}"


def generate_license(
    client_id: str,
    *,
    client_name: str = "Unknown Client",
    valid_days: int = 30,
    algorithm: FingerprintAlgorithm = FingerprintAlgorithm.MD5,
    now: datetime | None = None,
) -> IssuedLicense:
    """Generate a key plus issue and expiration dates for *client_id*.

    ``valid_days`` is informational for the recipient; the gate applies its
    own ``expiration_period`` when the key is set.
    """
    issued = now or datetime.now(UTC)
    return IssuedLicense(
        license_key=generate_license_key(client_id, algorithm=algorithm),
        client_name=client_name,
        client_id=client_id,
        issue_date=issued,
        expiration_date=issued + timedelta(days=valid_days),
        valid_days=valid_days,
    )


def validate_license_key(
    key: str,
    client_id: str | None = None,
    *,
    algorithm: FingerprintAlgorithm = FingerprintAlgorithm.MD5,
) -> bool:
    """Check *key* the way the gate does.

    Without *client_id* only the prefix and length are checked.
    """
    return check_key(key, client_id, algorithm, require_client=False) is None
