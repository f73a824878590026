"""Shared accessors for application dependencies."""

from functools import lru_cache

from .config import Settings, settings


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return settings
