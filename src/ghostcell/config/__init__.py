"""Configuration module using Pydantic Settings.

Usage:
    from ghostcell.config import GhostCellSettings

    settings = GhostCellSettings(strategy="auto")
"""

from ghostcell.config.settings import GhostCellSettings, get_settings, reset_settings

__all__ = [
    "GhostCellSettings",
    "get_settings",
    "reset_settings",
]
