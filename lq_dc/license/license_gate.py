"""License gate: key validation, expiration tracking and authorization.

The gate decides whether the helper modules are exposed for real or as
restricted stand-ins.  It is a feature flag, not access control: keys are
validated locally with public, reversible rules.

Key format::

    lq-91-0302<36-character suffix>
                        ^^^^^^^^
                        suffix[18:26] == short_fingerprint(client_id)

A key is only accepted together with the client identifier it was issued
for.  An accepted key stays valid for ``expiration_period`` from the moment
it is set.  An optional ``hard_stop_timestamp`` acts as an absolute
cutover after which nothing is authorized.

Accepted keys are persisted as::

    {"licenseKey": "...", "clientId": "...", "expirationDate": "<ISO-8601>"}
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from lq_dc.license.errors import StorageError
from lq_dc.license.fingerprint import (
    FINGERPRINT_LENGTH,
    FingerprintAlgorithm,
    short_fingerprint,
)
from lq_dc.license.storage import KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)

KEY_PREFIX = "lq-91-0302"
KEY_SUFFIX_LENGTH = 36
FINGERPRINT_OFFSET = KEY_SUFFIX_LENGTH // 2

DEFAULT_STORAGE_KEY = "lq-dc-license-key"
DEFAULT_EXPIRATION_PERIOD = timedelta(days=180)


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _utc_now() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class LicenseConfig(BaseModel):
    """Gate behaviour.  Fields accept snake_case names or camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    enabled: bool = True
    storage_key: str = Field(default=DEFAULT_STORAGE_KEY, min_length=1)
    expiration_period: timedelta = DEFAULT_EXPIRATION_PERIOD
    show_diagnostics: bool = True
    hard_stop_timestamp: datetime | None = None
    fingerprint_algorithm: FingerprintAlgorithm = FingerprintAlgorithm.MD5

    @field_validator("expiration_period")
    @classmethod
    def _positive_period(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError("expiration_period must be positive")
        return v

    @field_validator("hard_stop_timestamp")
    @classmethod
    def _aware_hard_stop(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v) if v is not None else None


class PersistedLicense(BaseModel):
    """The record written to the key-value store."""

    model_config = ConfigDict(populate_by_name=True)

    license_key: str = Field(alias="licenseKey")
    client_id: str = Field(alias="clientId")
    expiration_date: datetime = Field(alias="expirationDate")


class LicenseInfo(BaseModel):
    """Snapshot returned by :meth:`LicenseGate.get_info`."""

    authorized: bool
    expiration: datetime | None
    config: LicenseConfig


@dataclass
class LicenseState:
    authorized: bool = False
    key: str | None = None
    client_id: str | None = None
    expiration: datetime | None = None


# ---------------------------------------------------------------------------
# Key validation
# ---------------------------------------------------------------------------


def check_key(
    key: object,
    client_id: object = None,
    algorithm: FingerprintAlgorithm = FingerprintAlgorithm.MD5,
    *,
    require_client: bool = True,
) -> str | None:
    """Return why *key* is invalid for *client_id*, or ``None`` if it is valid.

    With ``require_client=False`` a missing client id skips the fingerprint
    check instead of failing, which is what the key tooling uses for
    format-only validation.
    """
    if not isinstance(key, str) or not key:
        return "key must be a non-empty string"
    if not key.startswith(KEY_PREFIX):
        return f"key must start with '{KEY_PREFIX}'"
    suffix = key[len(KEY_PREFIX) :]
    if len(suffix) != KEY_SUFFIX_LENGTH:
        return f"key suffix must be {KEY_SUFFIX_LENGTH} characters, got {len(suffix)}"
    if client_id is None or client_id == "":
        return "a client id is required" if require_client else None
    if not isinstance(client_id, str):
        return "client id must be a string"
    expected = short_fingerprint(client_id, algorithm)
    embedded = suffix[FINGERPRINT_OFFSET : FINGERPRINT_OFFSET + FINGERPRINT_LENGTH]
    if embedded != expected:
        return "key is not bound to this client id"
    return None


def mask_key(key: str) -> str:
    """Shorten a key for log output."""
    if len(key) <= len(KEY_PREFIX) + 4:
        return "***"
    return f"{key[: len(KEY_PREFIX)]}...{key[-4:]}"


# ---------------------------------------------------------------------------
# Gate
# ---------------------------------------------------------------------------


class LicenseGate:
    """Owns the license state and every operation on it.

    Parameters
    ----------
    config:
        Initial configuration.  Defaults to :class:`LicenseConfig` defaults.
    store:
        Where accepted keys are persisted.  Defaults to an in-memory store.
    clock:
        Returns the current aware ``datetime``.  Injected by tests.
    """

    def __init__(
        self,
        config: LicenseConfig | None = None,
        store: KeyValueStore | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._config = config.model_copy(deep=True) if config is not None else LicenseConfig()
        self._store: KeyValueStore = store if store is not None else MemoryStore()
        self._clock = clock or _utc_now
        self._state = LicenseState(authorized=not self._config.enabled)

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def _diagnostic(self, level: int, msg: str, *args: Any) -> None:
        if self._config.show_diagnostics:
            logger.log(level, msg, *args)

    def _now(self) -> datetime:
        return _as_utc(self._clock())

    # -- persistence --------------------------------------------------------

    def load(self) -> bool:
        """Restore a previously accepted key from the store.

        Returns ``True`` if a valid, unexpired key was restored.  Unreadable,
        malformed, mismatched or expired records are logged and ignored.
        """
        with self._lock:
            config = self._config
            try:
                raw = self._store.get(config.storage_key)
            except StorageError as exc:
                logger.warning("Could not read persisted license: %s", exc)
                return False
            if raw is None:
                return False

            try:
                record = PersistedLicense.model_validate(raw)
            except ValidationError as exc:
                logger.warning(
                    "Ignoring malformed license record under '%s' (%d errors)",
                    config.storage_key,
                    exc.error_count(),
                )
                return False

            reason = check_key(record.license_key, record.client_id, config.fingerprint_algorithm)
            if reason is not None:
                self._diagnostic(logging.WARNING, "Ignoring persisted license key: %s", reason)
                return False

            expiration = _as_utc(record.expiration_date)
            if self._now() >= expiration:
                self._diagnostic(
                    logging.WARNING,
                    "Persisted license %s expired at %s",
                    mask_key(record.license_key),
                    expiration.isoformat(),
                )
                return False

            self._state.key = record.license_key
            self._state.client_id = record.client_id
            self._state.expiration = expiration
            self._refresh_locked(self._now())

        self._diagnostic(
            logging.INFO,
            "Restored license %s, valid until %s",
            mask_key(record.license_key),
            expiration.isoformat(),
        )
        return True

    def _persist(self, storage_key: str, record: PersistedLicense) -> None:
        try:
            self._store.set(storage_key, record.model_dump(mode="json", by_alias=True))
        except StorageError as exc:
            logger.warning("Could not persist license; keeping it in memory only: %s", exc)

    # -- operations ---------------------------------------------------------

    def set_key(self, key: str, client_id: str | None = None) -> bool:
        """Validate *key* for *client_id* and, if valid, make it the active key.

        Returns ``False`` and leaves the state untouched when the key is
        malformed, the client id is missing, or the embedded fingerprint
        does not match.
        """
        with self._lock:
            config = self._config
            reason = check_key(key, client_id, config.fingerprint_algorithm)
            if reason is not None:
                self._diagnostic(logging.WARNING, "License key rejected: %s", reason)
                return False

            now = self._now()
            expiration = now + config.expiration_period
            self._state.key = key
            self._state.client_id = client_id
            self._state.expiration = expiration
            self._refresh_locked(now)
            self._persist(
                config.storage_key,
                PersistedLicense(license_key=key, client_id=client_id, expiration_date=expiration),
            )

        self._diagnostic(
            logging.INFO,
            "License key %s accepted for client '%s', valid until %s",
            mask_key(key),
            client_id,
            expiration.isoformat(),
        )
        return True

    def _refresh_locked(self, now: datetime) -> bool:
        state = self._state
        config = self._config
        if not config.enabled:
            authorized = True
        elif config.hard_stop_timestamp is not None and now >= config.hard_stop_timestamp:
            authorized = False
        elif state.key is None or state.expiration is None:
            authorized = False
        else:
            authorized = now < state.expiration

        if state.authorized and not authorized:
            self._diagnostic(logging.WARNING, "License is no longer valid")
        state.authorized = authorized
        return authorized

    def is_authorized(self) -> bool:
        """Recompute and return whether full functionality is available."""
        with self._lock:
            return self._refresh_locked(self._now())

    def clear(self) -> None:
        """Forget the active key and remove the persisted record."""
        with self._lock:
            self._state.key = None
            self._state.client_id = None
            self._state.expiration = None
            self._state.authorized = False
            storage_key = self._config.storage_key
            try:
                self._store.delete(storage_key)
            except StorageError as exc:
                logger.warning("Could not remove persisted license: %s", exc)
        self._diagnostic(logging.INFO, "License cleared")

    def configure(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """Merge configuration fields into the current config.

        Fields may be given as a mapping, as keyword arguments, or both, by
        snake_case name or camelCase alias.  Fields not given keep their
        values.

        Raises
        ------
        ValueError
            If a field name is unknown or a value fails validation.
        """
        updates = {**(options or {}), **kwargs}
        names = {field.alias or name: name for name, field in LicenseConfig.model_fields.items()}
        normalized: dict[str, Any] = {}
        for key, value in updates.items():
            name = names.get(key, key)
            if name not in LicenseConfig.model_fields:
                raise ValueError(f"Unknown license option: {key!r}")
            normalized[name] = value

        with self._lock:
            merged = {**self._config.model_dump(), **normalized}
            self._config = LicenseConfig.model_validate(merged)
            if not self._config.enabled:
                self._state.authorized = True
            else:
                self._refresh_locked(self._now())

        if normalized:
            self._diagnostic(logging.INFO, "License configuration updated: %s", ", ".join(sorted(normalized)))

    def get_info(self) -> LicenseInfo:
        """Return a snapshot of authorization, expiration and a config copy."""
        with self._lock:
            authorized = self._refresh_locked(self._now())
            return LicenseInfo(
                authorized=authorized,
                expiration=self._state.expiration,
                config=self._config.model_copy(deep=True),
            )
