"""
Centralized logging configuration for the view effects toolkit.

Uses rotating file handler with logs stored in logs/ directory.
Includes colored console output for debug mode.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


_VERBOSE: bool = False
_PERF_METRICS_ENABLED: bool = True
# Base directory for logs. setup_logging() may point it elsewhere so that
# get_log_dir() always matches the active RotatingFileHandler.
_BASE_DIR: Path = Path(__file__).parent.parent.parent

LOG_FORMAT = '%(asctime)s - %(name)-30s - %(levelname)-8s - %(message)s'

_env_perf = os.getenv("VIEWFX_PERF_METRICS")
if _env_perf is not None:
    if _env_perf.strip().lower() in ("0", "false", "off", "no"):
        _PERF_METRICS_ENABLED = False
    elif _env_perf.strip().lower() in ("1", "true", "on", "yes"):
        _PERF_METRICS_ENABLED = True


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',       # Cyan
        'INFO': '\033[32m',        # Green
        'WARNING': '\033[33m',     # Yellow
        'ERROR': '\033[31m',       # Red
        'CRITICAL': '\033[35m',    # Magenta
    }
    FALLBACK_COLOR = '\033[38;5;208m'
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record):
        original_levelname = record.levelname

        color = None
        if '[FALLBACK]' in str(record.msg):
            # Fallback paths stand out regardless of level.
            color = self.FALLBACK_COLOR
        elif record.levelname in self.COLORS:
            color = self.COLORS[record.levelname]

        if color is None:
            return super().format(record)

        record.levelname = f"{self.BOLD}{color}{record.levelname}{self.RESET}"
        try:
            message = super().format(record)
        finally:
            record.levelname = original_levelname
        return f"{color}{message}{self.RESET}"


class SuppressingStreamHandler(logging.StreamHandler):
    """Stream handler that collapses runs of DEBUG/INFO lines from one logger.

    Per-frame animation chatter is folded into a single
    "[N Suppressed: CHECK LOG]" line on the console while file logs keep
    every record.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._last_name: Optional[str] = None
        self._last_level: Optional[int] = None
        self._suppress_count: int = 0
        self._last_record: Optional[logging.LogRecord] = None

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._emit_with_suppression(record)
        except Exception:
            self.handleError(record)

    def _emit_with_suppression(self, record: logging.LogRecord) -> None:
        if record.levelno >= logging.WARNING:
            self._flush_summary()
            super().emit(record)
            self._last_name = None
            self._last_level = None
            return

        if record.name == self._last_name and record.levelno == self._last_level:
            self._suppress_count += 1
            self._last_record = record
            return

        self._flush_summary()
        super().emit(record)
        self._last_name = record.name
        self._last_level = record.levelno

    def _flush_summary(self) -> None:
        if self._suppress_count <= 0 or self._last_record is None:
            self._suppress_count = 0
            self._last_record = None
            return

        last = self._last_record
        summary = logging.LogRecord(
            last.name,
            last.levelno,
            last.pathname,
            last.lineno,
            f"[{self._suppress_count} Suppressed: CHECK LOG]",
            args=None,
            exc_info=None,
        )
        summary.created = last.created
        summary.msecs = last.msecs
        super().emit(summary)

        self._suppress_count = 0
        self._last_record = None

    def close(self) -> None:
        try:
            self._flush_summary()
        finally:
            super().close()


def get_log_dir() -> Path:
    """Return the directory used for log files."""
    return _BASE_DIR / "logs"


def setup_logging(debug: bool = False, verbose: bool = False,
                  log_dir: Optional[Path] = None) -> None:
    """
    Configure application logging with file rotation.

    Args:
        debug: If True, set log level to DEBUG and enable console output.
        verbose: When True, enables additional high-volume debug logs
            (per-stage animation tracing, start-value resolution).
            Verbose mode also implies debug-level logging.
        log_dir: Directory to write ``viewfx.log`` into (defaults to logs/
            under the project root).
    """
    global _VERBOSE, _BASE_DIR

    debug_enabled = debug or verbose

    if log_dir is not None:
        _BASE_DIR = Path(log_dir).parent
        target_dir = Path(log_dir)
    else:
        target_dir = get_log_dir()
    target_dir.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if debug_enabled else logging.INFO

    # Create formatter with aligned columns for logger name and level
    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    # File handler with rotation (1MB max, keep 5 backups)
    file_handler = RotatingFileHandler(
        target_dir / "viewfx.log",
        maxBytes=1 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    if debug_enabled:
        console_handler = SuppressingStreamHandler(sys.stdout)
        if sys.stdout.isatty():
            console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt='%H:%M:%S'))
        else:
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    # Keep HTTP connection pool chatter out of debug logs unless verbose.
    noisy_level = logging.DEBUG if verbose else logging.INFO
    for name in ("urllib3", "urllib3.connectionpool"):
        logging.getLogger(name).setLevel(noisy_level)

    _VERBOSE = bool(verbose)

    root_logger.info(
        "Logging initialized (debug=%s, verbose=%s)",
        debug_enabled,
        _VERBOSE,
    )


_SHORT_NAME_OVERRIDES = {
    "core.animation.animator": "animation.manager",
    "core.animation.group": "animation.group",
    "core.animation.view_animations": "animation.view",
}


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with optional short-name overrides for noisy modules."""
    actual = _SHORT_NAME_OVERRIDES.get(name, name)
    return logging.getLogger(actual)


def is_verbose_logging() -> bool:
    """Return True when verbose debug logging is enabled globally."""
    return _VERBOSE


def is_perf_metrics_enabled() -> bool:
    """Return True when PERF metrics/telemetry are enabled globally."""
    return _PERF_METRICS_ENABLED
