"""
Shared pytest fixtures for view effects tests.
"""
import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope='session')
def qt_app():
    """Create QApplication instance for tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app
    # Don't quit - causes issues with pytest


@pytest.fixture
def animation_manager(qt_app):
    """AnimationManager driven by simulated time through advance()."""
    from core.animation import AnimationManager
    manager = AnimationManager(fps=60, timer_driven=False)
    yield manager
    manager.cleanup()


@pytest.fixture
def view_animator(animation_manager):
    from core.animation import ViewAnimator
    return ViewAnimator(animation_manager)


@pytest.fixture
def view(qt_app):
    from core.view import AnimatedView
    return AnimatedView(x=10, y=20, width=100, height=50, name="view")


@pytest.fixture
def settings_manager(qt_app, tmp_path):
    """Create SettingsManager instance backed by a throwaway INI file."""
    from core.settings import SettingsManager
    manager = SettingsManager(path=tmp_path / "settings.ini")
    yield manager
    # Clear test settings
    manager.clear()


@pytest.fixture
def thread_manager():
    """Create ThreadManager instance for testing."""
    from core.threading.manager import ThreadManager
    manager = ThreadManager()
    yield manager
    manager.shutdown(wait=True)


@pytest.fixture
def temp_image(qt_app):
    """Create a simple 200x100 red test image."""
    from PySide6.QtGui import QImage, QColor
    from PySide6.QtCore import QSize

    image = QImage(QSize(200, 100), QImage.Format.Format_RGB32)
    image.fill(QColor(255, 0, 0))  # Red
    return image


def run_frames(manager, total: float, step: float = 1.0 / 60.0) -> None:
    """Advance ``manager`` by ``total`` seconds in ``step`` sized frames."""
    remaining = total
    while remaining > 1e-9:
        dt = min(step, remaining)
        manager.advance(dt)
        remaining -= dt


def process_events_until(predicate, timeout: float = 2.0) -> bool:
    """Pump the Qt event loop until ``predicate()`` is true or time runs out."""
    import time
    from PySide6.QtCore import QCoreApplication

    deadline = time.time() + timeout
    while time.time() < deadline:
        QCoreApplication.processEvents()
        if predicate():
            return True
        time.sleep(0.005)
    QCoreApplication.processEvents()
    return predicate()
