"""
Thread Manager

IO thread pool for blocking work (downloads, file copies) plus helpers that
marshal results back onto the Qt UI thread.
"""
import threading
import time
from concurrent.futures import ThreadPoolExecutor, Future
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
from PySide6.QtCore import QTimer, QObject, QThread, QCoreApplication, Signal
from core.logging.logger import get_logger, is_verbose_logging
from core.logging.tags import TAG_THREADING

logger = get_logger(__name__)


# UI-thread invoker for reliable main thread dispatch
class _UiInvoker(QObject):
    invoke = Signal(object, object, object)

    def __init__(self):
        super().__init__()
        self.invoke.connect(self._on_invoke)

    def _on_invoke(self, func, args, kwargs):
        try:
            func(*args, **(kwargs or {}))
        except Exception as e:
            logger.exception("UI invoker callable raised: %s", e)


_ui_invoker: Optional[_UiInvoker] = None
_ui_invoker_lock = threading.Lock()


def _ensure_ui_invoker() -> Optional[_UiInvoker]:
    global _ui_invoker
    app = QCoreApplication.instance()
    if app is None:
        logger.error("run_on_ui_thread: No QCoreApplication instance")
        return None
    with _ui_invoker_lock:
        if _ui_invoker is None:
            inv = _UiInvoker()
            inv.moveToThread(app.thread())
            _ui_invoker = inv
    return _ui_invoker


@dataclass
class TaskResult:
    """Container for task execution results"""
    success: bool
    result: Any = None
    error: Optional[Exception] = None
    execution_time: float = 0.0
    task_id: Optional[str] = None


class ThreadManager:
    """
    Thread manager for blocking IO work.

    Features:
    - IO thread pool with per-task result callbacks
    - UI thread dispatch utilities
    - Submission statistics
    """

    def __init__(self, io_workers: int = 4):
        """
        Initialize thread manager.

        Args:
            io_workers: Maximum worker threads in the IO pool
        """
        self._shutdown = False
        self.io_workers = max(1, int(io_workers))
        self._executor = ThreadPoolExecutor(
            max_workers=self.io_workers,
            thread_name_prefix="io_pool"
        )
        self._active_tasks: Dict[str, Future] = {}
        self._stats = {'submitted': 0, 'completed': 0, 'failed': 0}
        self._lock = threading.Lock()

        logger.info("ThreadManager initialized with IO=%d workers", self.io_workers)

    @classmethod
    def from_settings(cls, settings: Any) -> "ThreadManager":
        """Build a manager sized from the ``threading.io_workers`` setting."""
        return cls(io_workers=settings.get_int('threading.io_workers', 4))

    def submit_io_task(self, func: Callable, *args, task_id: Optional[str] = None,
                       callback: Optional[Callable[[TaskResult], None]] = None,
                       **kwargs) -> str:
        """
        Submit a task to the IO pool.

        Args:
            func: Function to execute
            *args: Positional arguments for func
            task_id: Optional unique identifier
            callback: Optional callback for the result (runs on the worker thread)
            **kwargs: Keyword arguments for func

        Returns:
            str: Task ID for tracking
        """
        if self._shutdown:
            raise RuntimeError("Thread manager is shut down")

        task_id = task_id or f"task_{time.monotonic_ns()}"

        def wrapped_func():
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                task_result = TaskResult(
                    success=True,
                    result=result,
                    execution_time=time.time() - start_time,
                    task_id=task_id
                )
                self._count('completed')
            except Exception as e:
                task_result = TaskResult(
                    success=False,
                    error=e,
                    execution_time=time.time() - start_time,
                    task_id=task_id
                )
                logger.error(f"Task {task_id} failed: {e}")
                self._count('failed')
            finally:
                with self._lock:
                    self._active_tasks.pop(task_id, None)

            if callback:
                try:
                    callback(task_result)
                except Exception as e:
                    logger.error(f"Callback for task {task_id} failed: {e}")

            return task_result

        with self._lock:
            future = self._executor.submit(wrapped_func)
            if not future.done():
                self._active_tasks[task_id] = future
        self._count('submitted')

        if is_verbose_logging():
            logger.debug(f"{TAG_THREADING} Submitted task {task_id} to io pool")
        return task_id

    def cancel_task(self, task_id: str) -> bool:
        """Attempt to cancel a task that has not started yet."""
        with self._lock:
            future = self._active_tasks.get(task_id)
        if future is None:
            return False
        cancelled = future.cancel()
        if cancelled:
            with self._lock:
                self._active_tasks.pop(task_id, None)
            logger.info(f"Cancelled task {task_id}")
        return cancelled

    def get_active_tasks(self) -> List[str]:
        """Get list of currently active task IDs"""
        with self._lock:
            return list(self._active_tasks.keys())

    def get_pool_stats(self) -> Dict[str, int]:
        """Get submission statistics for the IO pool"""
        with self._lock:
            return dict(self._stats)

    def _count(self, key: str) -> None:
        with self._lock:
            self._stats[key] += 1

    def shutdown(self, wait: bool = True) -> None:
        """
        Shutdown the pool.

        Args:
            wait: Whether to wait for running tasks
        """
        if self._shutdown:
            return
        self._shutdown = True
        logger.info("Shutting down thread manager...")

        for task_id in self.get_active_tasks():
            self.cancel_task(task_id)

        self._executor.shutdown(wait=wait, cancel_futures=not wait)
        logger.info("Thread manager shut down complete")

    @staticmethod
    def run_on_ui_thread(func: Callable, *args, **kwargs) -> None:
        """Dispatch a callable to the Qt UI thread.

        Without a QCoreApplication there is no UI thread; the callable runs
        inline so results are still delivered.
        """
        app = QCoreApplication.instance()
        if app is None:
            logger.warning("%s run_on_ui_thread called without QCoreApplication; running inline",
                           TAG_THREADING)
            func(*args, **(kwargs or {}))
            return

        if QThread.currentThread() is app.thread():
            func(*args, **(kwargs or {}))
            return

        inv = _ensure_ui_invoker()
        if inv is None:
            raise RuntimeError("UI invoker unavailable")
        inv.invoke.emit(func, args, kwargs or {})

    @staticmethod
    def single_shot(delay_ms: int, func: Callable, *args, **kwargs) -> None:
        """Schedule a callable to run on the UI thread after a delay"""
        app = QCoreApplication.instance()
        if app is None:
            raise RuntimeError("single_shot called without QCoreApplication")

        def _invoke():
            func(*args, **(kwargs or {}))

        if QThread.currentThread() is app.thread():
            QTimer.singleShot(max(0, int(delay_ms)), _invoke)
        else:
            def _schedule_on_ui():
                QTimer.singleShot(max(0, int(delay_ms)), _invoke)
            ThreadManager.run_on_ui_thread(_schedule_on_ui)


def run_on_ui_thread(action: Callable[[], None], delay_ms: Optional[int] = None) -> None:
    """
    Run ``action`` on the UI thread, optionally after ``delay_ms``.

    Without a delay the action is posted to the event loop (never run inline),
    matching a handler post.
    """
    if delay_ms is None:
        ThreadManager.single_shot(0, action)
    else:
        ThreadManager.single_shot(delay_ms, action)
