"""Configuration module using Pydantic Settings.

Usage:
    from clonekit.config import CloneSettings

    settings = CloneSettings(share_frozen_records=False)
"""

from clonekit.config.settings import CloneSettings

__all__ = [
    "CloneSettings",
]
