"""
Image helpers on top of QImage.

resize_image fits an image inside a bounding box keeping its aspect ratio;
image_to_temp_file encodes an image into a fresh temp file.
"""
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage

from core.logging.logger import get_logger
from core.logging.tags import TAG_IO
from core.utils.decorators import suppress_exceptions

logger = get_logger(__name__)


def fit_size(width: int, height: int, max_width: int, max_height: int) -> tuple[int, int]:
    """
    Largest size with the aspect ratio of ``width`` x ``height`` inside the box.

    One side always matches its bound exactly; the other is truncated to an int.
    """
    image_ratio = width / height
    box_ratio = max_width / max_height
    if box_ratio > image_ratio:
        return int(max_height * image_ratio), max_height
    return max_width, int(max_width / image_ratio)


def resize_image(image: QImage, max_width: int, max_height: int) -> QImage:
    """
    Resize ``image`` retaining its aspect ratio.

    The result either has the height matching ``max_height`` and a width
    <= ``max_width``, or the width matching ``max_width`` and a height
    <= ``max_height``. Small images are scaled up. When either bound is not
    positive (or the image is empty) the input is returned untouched.
    """
    if max_width <= 0 or max_height <= 0 or image.isNull() or image.height() <= 0:
        return image

    width, height = fit_size(image.width(), image.height(), max_width, max_height)
    return image.scaled(
        width, height,
        Qt.AspectRatioMode.IgnoreAspectRatio,
        Qt.TransformationMode.SmoothTransformation,
    )


@suppress_exceptions(logger, f"{TAG_IO} Cannot convert image to file")
def image_to_temp_file(image: QImage, cache_dir: Union[str, Path], fmt: str = "JPEG",
                       quality: int = 70) -> Optional[Path]:
    """
    Encode ``image`` and save it into a new temporary file in ``cache_dir``.

    Args:
        image: Image to encode
        cache_dir: Directory receiving the temp file
        fmt: Qt image format name (JPEG, PNG, WEBP...)
        quality: 0-100, ignored by lossless formats

    Returns:
        Path of the written file, or None if encoding or writing failed
    """
    fd, name = tempfile.mkstemp(prefix="temp", suffix=f".{fmt.lower()}", dir=str(cache_dir))
    os.close(fd)
    path = Path(name)
    if not image.save(str(path), fmt.upper(), quality):
        path.unlink(missing_ok=True)
        raise OSError(f"QImage.save failed for format {fmt}")

    logger.debug("%s Encoded %dx%d image to %s", TAG_IO, image.width(), image.height(), path.name)
    return path
