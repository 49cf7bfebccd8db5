"""keydecoder service configuration.

All settings are prefixed with ``KEYDECODER_``. Defaults work without any env
vars set.
"""
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import KeyStrategy


class KeyDecoderSettings(BaseSettings):
    """Runtime configuration for the decode service."""

    model_config = SettingsConfigDict(env_prefix="KEYDECODER_")

    log_level: str = "INFO"
    max_payload_bytes: int = 1_048_576
    default_strategy: KeyStrategy = KeyStrategy.USE_KEYS


settings = KeyDecoderSettings()
