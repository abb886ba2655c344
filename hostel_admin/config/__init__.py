"""Configuration package."""

from hostel_admin.config.settings import Settings, get_settings, settings

__all__ = ["Settings", "get_settings", "settings"]
