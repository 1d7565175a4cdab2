"""Utility helpers shared across renderer components."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from reportlab.lib.colors import Color
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from ..engine.geometry import DEFAULT_MARGINS, PAGE_SIZES, Margins, Size
from ..exceptions import ConfigError, FontError

logger = logging.getLogger(__name__)

BODY_FONT_NAME = "Report-Body"
HEADING_FONT_NAME = "Report-Heading"

_PDF_FONTS_REGISTERED: Dict[str, str] = {}


def ensure_page_size(page_size: Union[str, Size, Iterable[float]]) -> Size:
    """Resolve a preset name, ``Size`` or (width, height) in mm."""
    if isinstance(page_size, Size):
        return page_size

    if isinstance(page_size, str):
        preset = PAGE_SIZES.get(page_size.upper())
        if preset:
            return Size(preset.width, preset.height)
        raise ConfigError(f"Unsupported page size preset: {page_size}")

    if isinstance(page_size, Iterable):
        values = list(page_size)
        if len(values) != 2:
            raise ConfigError("Page size iterable must contain exactly two values")
        return Size(float(values[0]), float(values[1]))

    return PAGE_SIZES["A4"]


def ensure_margins(margins: Union[Margins, Iterable[float], None]) -> Margins:
    """Resolve margins given as ``Margins`` or (top, right, bottom, left) in mm."""
    if isinstance(margins, Margins):
        return margins

    values = list(margins) if isinstance(margins, Iterable) else []
    if len(values) not in (0, 4):
        raise ConfigError("Margins must be provided as four numeric values (top, right, bottom, left)")

    if not values:
        return Margins(
            top=DEFAULT_MARGINS.top,
            bottom=DEFAULT_MARGINS.bottom,
            left=DEFAULT_MARGINS.left,
            right=DEFAULT_MARGINS.right,
        )

    top, right, bottom, left = [float(v) for v in values]
    return Margins(top=top, bottom=bottom, left=left, right=right)


def rgb_to_color(rgb: Tuple[int, int, int]) -> Color:
    red, green, blue = rgb
    return Color(red / 255.0, green / 255.0, blue / 255.0)


def ensure_pdf_font(font_name: str, font_path: Optional[Union[str, Path]]) -> str:
    """Register a TrueType font under ``font_name`` once.

    Raises:
        FontError: If the file is missing or reportlab cannot load it.
    """
    if not font_name or not font_path:
        raise FontError("Font name and path are required")
    if font_name in _PDF_FONTS_REGISTERED:
        return font_name

    path = Path(font_path)
    if not path.is_file():
        raise FontError("Font file not found", str(path))

    try:
        pdfmetrics.registerFont(TTFont(font_name, str(path)))
    except (TTFError, OSError) as exc:
        raise FontError("Cannot load font", f"{path}: {exc}") from exc

    _PDF_FONTS_REGISTERED[font_name] = str(path)
    logger.debug(f"Registered font {font_name} from {path}")
    return font_name


def resolve_font(font_name: str, font_path: Optional[Union[str, Path]], fallback: str) -> str:
    """Register ``font_path`` when given, otherwise use the built-in ``fallback``.

    The registered name carries the file stem so two renders with different
    font files never share a registration.
    """
    if font_path:
        return ensure_pdf_font(f"{font_name}-{Path(font_path).stem}", font_path)
    return fallback
