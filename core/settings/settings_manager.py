"""
Settings manager implementation for the view effects toolkit.

Uses QSettings for persistent storage. Keys use dot notation
('animation.fps', 'download.timeout').
"""
from typing import Any, Callable, Dict, List, Optional, Union
import threading
from pathlib import Path
from PySide6.QtCore import QSettings, QObject, Signal
from core.logging.logger import get_logger, is_verbose_logging

logger = get_logger('SettingsManager')


DEFAULT_SETTINGS: Dict[str, Any] = {
    # Animation manager
    'animation.fps': 60,
    'animation.max_frame_dt': 0.5,  # seconds; larger wall-clock gaps are clamped

    # File download helper
    'download.timeout': 30,         # seconds
    'download.chunk_size': 1024,    # bytes per streamed read

    # Threading
    'threading.io_workers': 4,
}


class SettingsManager(QObject):
    """
    Centralized settings management.

    Uses QSettings for persistent storage with organization/application name,
    or an INI file when ``path`` is given. Thread-safe with change
    notifications.
    """

    # Signal emitted when settings change
    settings_changed = Signal(str, object)  # key, new_value

    def __init__(self, organization: str = "ViewFx",
                 application: str = "ViewFx",
                 path: Optional[Union[str, Path]] = None):
        """
        Initialize the settings manager.

        Args:
            organization: Organization name for QSettings
            application: Application name for QSettings
            path: Optional INI file to use instead of the platform store
        """
        super().__init__()

        if path is not None:
            self._settings = QSettings(str(path), QSettings.Format.IniFormat)
        else:
            self._settings = QSettings(organization, application)
        self._organization = organization
        self._application = application
        self._lock = threading.RLock()
        self._change_handlers: Dict[str, List[Callable]] = {}

        self._set_defaults()

        logger.info("SettingsManager initialized")

    def _set_defaults(self) -> None:
        """Set default values if not already present."""
        with self._lock:
            for key, value in DEFAULT_SETTINGS.items():
                if not self._settings.contains(key):
                    self._settings.setValue(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value.

        Args:
            key: Setting key in dot notation (e.g., 'animation.fps')
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        with self._lock:
            return self._settings.value(key, default)

    @staticmethod
    def to_bool(value: Any, default: bool = False) -> bool:
        """Normalize a stored setting value to bool.

        Accepts common string forms ("true", "1", "yes", "on") as True and
        ("false", "0", "no", "off") as False.
        """
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            v = value.strip().lower()
            if v in ("true", "1", "yes", "on"):
                return True
            if v in ("false", "0", "no", "off"):
                return False
            return default
        if value is None:
            return default
        return bool(value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Convenience wrapper around get() that normalizes to bool."""
        return self.to_bool(self.get(key, default), default)

    def get_int(self, key: str, default: int = 0) -> int:
        """Convenience wrapper around get() that normalizes to int.

        INI-backed stores hand values back as strings.
        """
        raw = self.get(key, default)
        try:
            return int(float(raw))
        except (TypeError, ValueError):
            logger.debug("Setting %s=%r is not an int; using %r", key, raw, default)
            return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        """Convenience wrapper around get() that normalizes to float."""
        raw = self.get(key, default)
        try:
            return float(raw)
        except (TypeError, ValueError):
            logger.debug("Setting %s=%r is not a float; using %r", key, raw, default)
            return default

    def set(self, key: str, value: Any) -> None:
        """
        Set a setting value.

        Args:
            key: Setting key in dot notation
            value: Value to set
        """
        with self._lock:
            old_value = self._settings.value(key)
            self._settings.setValue(key, value)

            # Emit change signal
            self.settings_changed.emit(key, value)

            # Call registered handlers
            for handler in self._change_handlers.get(key, ()):
                try:
                    handler(value, old_value)
                except Exception as e:
                    logger.error(f"Error in change handler for {key}: {e}")

        if is_verbose_logging():
            logger.debug("Setting changed: %s: %r -> %r", key, old_value, value)
        else:
            logger.debug("Setting changed: %s", key)

    def on_changed(self, key: str, handler: Callable[[Any, Any], None]) -> None:
        """
        Register a handler for when a specific setting changes.

        Args:
            key: Setting key to watch
            handler: Callback function(new_value, old_value)
        """
        with self._lock:
            self._change_handlers.setdefault(key, []).append(handler)

        logger.debug(f"Registered change handler for {key}")

    def save(self) -> None:
        """Force save settings to persistent storage."""
        with self._lock:
            self._settings.sync()
        logger.debug("Settings saved")

    def reset_to_defaults(self) -> None:
        """Reset all settings to default values."""
        with self._lock:
            self._settings.clear()
            for key, value in DEFAULT_SETTINGS.items():
                self._settings.setValue(key, value)
            self._settings.sync()

        logger.info("Settings reset to defaults")
        self.settings_changed.emit('*', None)  # Signal that all changed

    def get_all_keys(self) -> List[str]:
        """Get all setting keys."""
        with self._lock:
            return self._settings.allKeys()

    def contains(self, key: str) -> bool:
        """Check if a setting key exists."""
        with self._lock:
            return self._settings.contains(key)

    def clear(self) -> None:
        """Clear all settings (use with caution)."""
        with self._lock:
            self._settings.clear()
        logger.warning("All settings cleared")
