"""Configuration module for the document index sync."""

from config.settings import Settings, get_settings, refresh_settings

__all__ = ["Settings", "get_settings", "refresh_settings"]
