"""Persistent configuration."""

from .settings_manager import SettingsManager, DEFAULT_SETTINGS

__all__ = ['SettingsManager', 'DEFAULT_SETTINGS']
