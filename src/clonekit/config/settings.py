"""Configuration settings using Pydantic Settings.

Provides typed configuration for the default strategy chain with environment
variable support.

Usage:
    from clonekit.config import CloneSettings

    # Load from environment variables (CLONEKIT_*)
    settings = CloneSettings()

    # Or override with explicit values
    settings = CloneSettings(extra_immutable_prefixes=["money."])
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class CloneSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the built-in strategies.

    Attributes:
        extra_immutable_prefixes: Additional qualified-name prefixes
            (``module.QualName``) of third-party types to share by reference.
        share_frozen_records: Share frozen dataclasses and frozen Pydantic
            models by reference instead of copying them field by field.
        warn_on_container_fallback: Emit a ContainerSubstitutionWarning when a
            container is copied into a generic substitute type.

    Environment Variables:
        CLONEKIT_EXTRA_IMMUTABLE_PREFIXES (JSON list, e.g. '["money."]')
        CLONEKIT_SHARE_FROZEN_RECORDS
        CLONEKIT_WARN_ON_CONTAINER_FALLBACK
    """

    model_config = SettingsConfigDict(
        env_prefix="CLONEKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    extra_immutable_prefixes: tuple[str, ...] = ()
    share_frozen_records: bool = True
    warn_on_container_fallback: bool = True
