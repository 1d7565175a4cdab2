"""Drawing surface interface used by the layout flow.

Coordinates are millimetres, measured from the top-left corner of the page.
Implementations own the page stack and the cursor; they are single-owner
and not thread-safe.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from .geometry import PageGeometry

RGB = Tuple[int, int, int]

BLACK: RGB = (0, 0, 0)


@dataclass(frozen=True, slots=True)
class FontSpec:
    """A registered font name and its size in points."""

    name: str
    size: float


class DrawingSurface(Protocol):
    geometry: PageGeometry
    page_number: int

    def measure_text(self, text: str, font: FontSpec) -> float:
        """Width of ``text`` in millimetres."""
        ...

    def draw_text_box(
        self,
        text: str,
        font: FontSpec,
        line_height: float,
        *,
        x: Optional[float] = None,
        width: Optional[float] = None,
        color: RGB = BLACK,
        fill: Optional[RGB] = None,
        padding: float = 0.0,
        inline: bool = False,
    ) -> float:
        """Draw ``text`` at the cursor.

        Block mode wraps ``text`` to ``width`` (default: up to the right
        margin), starts a new page whenever the next line would cross the
        bottom margin, leaves the cursor at the left margin below the last
        line and returns the height advanced.

        Inline mode draws a single unwrapped line at the cursor, moves the
        cursor right past the box and returns 0.
        """
        ...

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        *,
        color: RGB = BLACK,
        width: float = 0.2,
    ) -> None:
        ...

    def draw_image(
        self,
        source: str,
        x: float,
        y: float,
        width: float,
        height: Optional[float] = None,
    ) -> float:
        """Place an image with its top-left corner at (x, y); return its height."""
        ...

    def new_page(self) -> None:
        ...

    def get_cursor(self) -> Tuple[float, float]:
        ...

    def set_cursor(self, x: float, y: float) -> None:
        ...
