"""Geometry primitives and unit helpers for layout calculations.

Layout works in millimetres with the y axis growing downwards from the top
edge of the page. Conversions to PDF points happen only at the drawing
surface.
"""

from __future__ import annotations

from dataclasses import dataclass

POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4
MM_PER_POINT = MM_PER_INCH / POINTS_PER_INCH


@dataclass(slots=True)
class Size:
    width: float
    height: float


@dataclass(slots=True)
class Margins:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0


@dataclass(slots=True)
class PageGeometry:
    """Page size plus margins, with the content limits derived from them."""

    size: Size
    margins: Margins

    @property
    def content_top(self) -> float:
        return self.margins.top

    @property
    def content_bottom(self) -> float:
        """Lowest y the cursor may reach on a page."""
        return self.size.height - self.margins.bottom

    @property
    def content_left(self) -> float:
        return self.margins.left

    @property
    def content_right(self) -> float:
        return self.size.width - self.margins.right

    @property
    def content_width(self) -> float:
        return self.size.width - self.margins.left - self.margins.right


# Page presets in millimetres (portrait).
PAGE_SIZES = {
    "A4": Size(210.0, 297.0),
    "LETTER": Size(215.9, 279.4),
}

DEFAULT_MARGINS = Margins(top=30.0, bottom=20.0, left=20.0, right=20.0)


def mm_to_points(value: float | None) -> float:
    if value is None:
        return 0.0
    return float(value) / MM_PER_POINT


def points_to_mm(value: float | None) -> float:
    if value is None:
        return 0.0
    return float(value) * MM_PER_POINT
