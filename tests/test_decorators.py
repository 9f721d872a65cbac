"""
Tests for the failure-logging decorators, mostly through the IO helpers that use them.
"""
import logging
from unittest.mock import MagicMock, patch

import pytest
import requests

from core.utils.decorators import log_errors, suppress_exceptions
from utils import file_utils
from utils.file_utils import copy_to_temp_file
from utils.image_utils import image_to_temp_file


class TestSuppressExceptions:

    def test_failed_copy_logs_io_error_with_traceback(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR):
            assert copy_to_temp_file(tmp_path / "gone.mp4", tmp_path) is None

        record = next(r for r in caplog.records if "Cannot copy to temp file" in r.message)
        assert record.message.startswith("[IO]")
        assert record.exc_info is not None

    def test_failed_image_save_returns_none(self, temp_image, tmp_path, caplog):
        with caplog.at_level(logging.ERROR):
            assert image_to_temp_file(temp_image, tmp_path / "no-such-dir") is None
        assert any(r.levelno == logging.ERROR for r in caplog.records)

    def test_successful_call_is_transparent(self, tmp_path, caplog):
        source = tmp_path / "a.txt"
        source.write_text("hello")

        with caplog.at_level(logging.DEBUG):
            copy = copy_to_temp_file(source, tmp_path)

        assert copy.read_text() == "hello"
        assert not any("Cannot copy" in r.message for r in caplog.records)

    def test_sentinel_and_level_are_configurable(self):
        log = MagicMock()

        @suppress_exceptions(log, "Measure failed", return_value=(0, 0), log_level="warning")
        def measure():
            raise OSError("unreadable")

        assert measure() == (0, 0)
        log.warning.assert_called_once()
        assert "Measure failed: unreadable" in log.warning.call_args[0][0]
        log.error.assert_not_called()

    def test_wrapped_name_is_kept(self):
        assert copy_to_temp_file.__name__ == "copy_to_temp_file"
        assert image_to_temp_file.__name__ == "image_to_temp_file"


class TestLogErrors:

    def test_download_failure_is_logged_and_raised(self, tmp_path, caplog):
        with patch.object(file_utils.requests, "get",
                          side_effect=requests.ConnectionError("refused")):
            with caplog.at_level(logging.WARNING):
                with pytest.raises(requests.ConnectionError):
                    file_utils._download("https://example.com/x", tmp_path, 5, 1024)

        record = next(r for r in caplog.records if "Download failed" in r.message)
        assert record.levelno == logging.WARNING
        assert "_download" in record.message
        assert "refused" in record.message

    def test_can_swallow_instead_of_raising(self):
        log = MagicMock()

        @log_errors(log, "Cleanup failed in {func_name}", reraise=False)
        def remove_cache():
            raise PermissionError("locked")

        assert remove_cache() is None
        assert "Cleanup failed in remove_cache: locked" in log.error.call_args[0][0]

    def test_unknown_level_falls_back_to_error(self):
        log = MagicMock(spec=logging.Logger)

        @log_errors(log, "Oops", log_level="loud", reraise=False)
        def fail():
            raise ValueError("x")

        fail()
        log.error.assert_called_once()
