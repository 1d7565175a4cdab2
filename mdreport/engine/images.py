"""Image helpers shared by the page header and the image emitter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from .geometry import MM_PER_INCH, Size
from ..exceptions import MediaError

logger = logging.getLogger(__name__)

DEFAULT_DPI = 96.0


def image_size_mm(source: Union[str, Path], dpi: float = DEFAULT_DPI) -> Size:
    """Natural size of an image in millimetres.

    The DPI stored in the file wins over ``dpi`` when present.

    Raises:
        MediaError: If the file is missing or not a readable image.
    """
    path = Path(source)
    if not path.is_file():
        raise MediaError("Image not found", str(path))
    try:
        with Image.open(path) as image:
            width_px, height_px = image.size
            file_dpi = image.info.get("dpi")
    except (OSError, UnidentifiedImageError) as exc:
        raise MediaError("Cannot read image", f"{path}: {exc}") from exc

    if file_dpi:
        try:
            dpi_x, dpi_y = float(file_dpi[0]), float(file_dpi[1])
        except (TypeError, ValueError, IndexError):
            dpi_x = dpi_y = dpi
        if dpi_x <= 0 or dpi_y <= 0:
            dpi_x = dpi_y = dpi
    else:
        dpi_x = dpi_y = dpi

    size = Size(width_px * MM_PER_INCH / dpi_x, height_px * MM_PER_INCH / dpi_y)
    logger.debug(f"Image {path.name}: {width_px}x{height_px}px -> {size.width:.1f}x{size.height:.1f}mm")
    return size


def aspect_height(source: Union[str, Path], width: float) -> float:
    """Height that keeps the image aspect ratio at ``width``."""
    natural = image_size_mm(source)
    if natural.width <= 0:
        return 0.0
    return width * natural.height / natural.width
