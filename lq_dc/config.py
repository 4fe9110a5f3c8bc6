"""Library configuration loaded from environment variables."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lq_dc.license.fingerprint import FingerprintAlgorithm
from lq_dc.license.license_gate import DEFAULT_STORAGE_KEY, LicenseConfig

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_PATH = Path.home() / ".lq_dc" / "license.json"


class Settings(BaseSettings):
    """Settings loaded from environment variables with the LQDC_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="LQDC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False

    # License gate
    license_enabled: bool = True
    license_storage_key: str = DEFAULT_STORAGE_KEY
    license_expiration_days: int = Field(default=180, ge=1)
    show_diagnostics: bool = True
    hard_stop_timestamp: datetime | None = None
    fingerprint_algorithm: FingerprintAlgorithm = FingerprintAlgorithm.MD5

    # Persistence
    storage_path: Path = DEFAULT_STORAGE_PATH

    @field_validator("storage_path", mode="after")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    def license_config(self) -> LicenseConfig:
        return LicenseConfig(
            enabled=self.license_enabled,
            storage_key=self.license_storage_key,
            expiration_period=timedelta(days=self.license_expiration_days),
            show_diagnostics=self.show_diagnostics,
            hard_stop_timestamp=self.hard_stop_timestamp,
            fingerprint_algorithm=self.fingerprint_algorithm,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info("Loaded settings; license store at %s", settings.storage_path)

    return settings
