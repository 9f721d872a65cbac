"""
File helpers: background downloads and temp-file copies.

download_file streams a URL to disk on the IO pool and reports back on the UI
thread; copy_to_temp_file is synchronous and meant for small local files.
"""
import os
import re
import shutil
import tempfile
import threading
import uuid
from pathlib import Path
from typing import Callable, Optional, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from core.logging.logger import get_logger
from core.logging.tags import TAG_IO
from core.settings.settings_manager import DEFAULT_SETTINGS, SettingsManager
from core.threading.manager import ThreadManager, TaskResult
from core.utils.decorators import log_errors, suppress_exceptions

logger = get_logger(__name__)

_FILENAME_RE = re.compile(r'"(.*?)"')

_default_manager: Optional[ThreadManager] = None
_default_manager_lock = threading.Lock()


def _shared_thread_manager() -> ThreadManager:
    global _default_manager
    with _default_manager_lock:
        if _default_manager is None:
            _default_manager = ThreadManager()
    return _default_manager


def filename_from_disposition(header: Optional[str]) -> str:
    """
    File name quoted in a Content-Disposition header, or a random UUID.

    >>> filename_from_disposition('attachment; filename="report.pdf"')
    'report.pdf'
    """
    match = _FILENAME_RE.search(header or "")
    if header and match and match.group(1):
        # Never let the server pick a directory
        name = Path(match.group(1)).name
        if name:
            return name
    return str(uuid.uuid4())


@log_errors(logger, f"{TAG_IO} Download failed in {{func_name}}", log_level="warning")
def _download(url: str, output_folder: Path, timeout: float, chunk_size: int) -> Path:
    with requests.get(url, stream=True, timeout=timeout) as resp:
        resp.raise_for_status()
        target = output_folder / filename_from_disposition(resp.headers.get("Content-Disposition"))
        logger.debug("%s Saving %s to %s", TAG_IO, url, target)

        downloaded = 0
        try:
            with open(target, "wb") as f:
                for chunk in resp.iter_content(chunk_size=chunk_size):
                    if chunk:
                        f.write(chunk)
                        downloaded += len(chunk)
        except Exception:
            target.unlink(missing_ok=True)
            raise

    logger.debug("%s Downloaded %s (%d bytes)", TAG_IO, target.name, downloaded)
    return target


def download_file(url: str, output_folder: Union[str, Path],
                  on_done: Callable[[TaskResult], None],
                  thread_manager: Optional[ThreadManager] = None,
                  settings: Optional[SettingsManager] = None,
                  timeout: Optional[float] = None,
                  chunk_size: Optional[int] = None) -> str:
    """
    Download ``url`` into ``output_folder`` in the background.

    The file name from a quoted Content-Disposition filename is kept;
    otherwise a random UUID is used.

    Args:
        url: URL pointing to a file
        output_folder: Existing directory receiving the file
        on_done: Called once on the UI thread with a TaskResult whose
            ``result`` is the saved Path, or whose ``error`` says why not
        thread_manager: Pool to run on (a shared one by default)
        settings: Source of ``download.timeout`` and ``download.chunk_size``
        timeout: Connect/read timeout in seconds; overrides settings
        chunk_size: Bytes per streamed read; overrides settings

    Returns:
        Task ID of the download

    Raises:
        RuntimeError: If the thread manager is shut down
    """
    if timeout is None:
        timeout = (settings.get_float('download.timeout', DEFAULT_SETTINGS['download.timeout'])
                   if settings is not None else DEFAULT_SETTINGS['download.timeout'])
    if chunk_size is None:
        chunk_size = (settings.get_int('download.chunk_size', DEFAULT_SETTINGS['download.chunk_size'])
                      if settings is not None else DEFAULT_SETTINGS['download.chunk_size'])
    manager = thread_manager or _shared_thread_manager()

    def _deliver(result: TaskResult) -> None:
        ThreadManager.run_on_ui_thread(on_done, result)

    return manager.submit_io_task(
        _download, url, Path(output_folder), timeout, chunk_size,
        task_id=f"download_{uuid.uuid4().hex[:8]}",
        callback=_deliver,
    )


def _local_path(source: Union[str, Path]) -> Path:
    if isinstance(source, str) and source.startswith("file:"):
        return Path(url2pathname(urlparse(source).path))
    return Path(source)


@suppress_exceptions(logger, f"{TAG_IO} Cannot copy to temp file")
def copy_to_temp_file(source: Union[str, Path], cache_dir: Union[str, Path]) -> Optional[Path]:
    """
    Copy a local path or ``file://`` URI into a new temp file in ``cache_dir``.

    The temp file keeps the source extension. Returns None on failure.
    """
    src = _local_path(source)
    fd, name = tempfile.mkstemp(prefix="temp", suffix=src.suffix, dir=str(cache_dir))
    target = Path(name)
    try:
        with os.fdopen(fd, "wb") as fout, open(src, "rb") as fin:
            shutil.copyfileobj(fin, fout)
    except Exception:
        target.unlink(missing_ok=True)
        raise
    return target
