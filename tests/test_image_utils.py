"""Tests for QImage resize and temp-file helpers."""
import pytest
from PySide6.QtGui import QImage

from utils.image_utils import fit_size, image_to_temp_file, resize_image


class TestResize:

    @pytest.mark.parametrize("box, expected", [
        ((100, 100), (100, 50)),    # width bound wins
        ((400, 100), (200, 100)),   # height bound wins
        ((1000, 1000), (1000, 500)),  # small images are scaled up
        ((150, 70), (140, 70)),
    ])
    def test_fit_size(self, box, expected):
        assert fit_size(200, 100, *box) == expected

    def test_resize_keeps_aspect_ratio(self, temp_image):
        resized = resize_image(temp_image, 100, 100)
        assert (resized.width(), resized.height()) == (100, 50)

    @pytest.mark.parametrize("box", [(0, 100), (100, 0), (-1, -1)])
    def test_non_positive_bounds_return_input(self, temp_image, box):
        assert resize_image(temp_image, *box) is temp_image

    def test_null_image_is_returned_untouched(self, qt_app):
        image = QImage()
        assert resize_image(image, 10, 10) is image


class TestImageToTempFile:

    def test_writes_png(self, temp_image, tmp_path):
        path = image_to_temp_file(temp_image, tmp_path, fmt="PNG")

        assert path is not None
        assert path.parent == tmp_path
        assert path.suffix == ".png"
        loaded = QImage(str(path))
        assert (loaded.width(), loaded.height()) == (200, 100)

    def test_default_is_jpeg(self, temp_image, tmp_path):
        path = image_to_temp_file(temp_image, tmp_path)
        assert path is not None
        assert path.suffix == ".jpeg"
        assert path.stat().st_size > 0

    def test_missing_directory_returns_none(self, temp_image, tmp_path, caplog):
        with caplog.at_level("ERROR"):
            assert image_to_temp_file(temp_image, tmp_path / "missing") is None
        assert any("Cannot convert image to file" in r.message for r in caplog.records)

    def test_unknown_format_returns_none_and_cleans_up(self, temp_image, tmp_path):
        assert image_to_temp_file(temp_image, tmp_path, fmt="NOPE") is None
        assert list(tmp_path.iterdir()) == []
