"""IO pool and UI-thread dispatch."""

from .manager import ThreadManager, TaskResult, run_on_ui_thread

__all__ = ['ThreadManager', 'TaskResult', 'run_on_ui_thread']
