"""Configuration settings using Pydantic Settings.

Provides typed defaults for new cells with environment variable support.

Usage:
    from ghostcell.config import GhostCellSettings, get_settings

    # Load from environment variables (GHOSTCELL_*)
    settings = get_settings()

    # Or override with explicit values
    settings = GhostCellSettings(strategy="auto", warn_on_dirty_discard=True)
    cell = GhostCell(data, settings=settings)
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from ghostcell.core.duplication.models import DuplicationStrategy


class GhostCellSettings(BaseSettings):  # type: ignore[misc]
    """Defaults applied to every GhostCell that isn't given explicit options.

    Attributes:
        strategy: Duplication strategy (deep, protocol, auto).
        warn_on_dirty_discard: Emit a UserWarning when a cell with unsaved
            changes is discarded at scope exit.

    Environment Variables:
        GHOSTCELL_STRATEGY
        GHOSTCELL_WARN_ON_DIRTY_DISCARD
    """

    model_config = SettingsConfigDict(
        env_prefix="GHOSTCELL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    strategy: DuplicationStrategy = DuplicationStrategy.DEEP
    warn_on_dirty_discard: bool = False


# Module-level settings instance, loaded on first use
_settings: GhostCellSettings | None = None


def get_settings() -> GhostCellSettings:
    """Access the process-wide settings, loading them on first call.

    Returns:
        The cached GhostCellSettings instance.
    """
    global _settings
    if _settings is None:
        _settings = GhostCellSettings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
