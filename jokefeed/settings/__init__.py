"""Environment-driven application settings."""

from jokefeed.settings.app import AppSettings, LogLevel, get_settings


__all__ = ["AppSettings", "LogLevel", "get_settings"]
