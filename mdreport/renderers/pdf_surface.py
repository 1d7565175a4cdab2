"""Drawing surface backed by a reportlab canvas.

The layout flow works in top-down millimetres; this surface converts to
reportlab's bottom-up points at the moment of drawing.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Tuple, Union

from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas as pdf_canvas

from ..engine.geometry import MM_PER_POINT, PageGeometry, mm_to_points, points_to_mm
from ..engine.images import aspect_height
from ..engine.surface import BLACK, RGB, FontSpec
from ..exceptions import MediaError, RenderingError
from .page_decorations import PageDecorator
from .render_utils import rgb_to_color

logger = logging.getLogger(__name__)

CanvasTarget = Union[str, Path, BytesIO]


class ReportLabSurface:
    """Single-owner page stack with a top-down millimetre cursor."""

    def __init__(
        self,
        output: CanvasTarget,
        geometry: PageGeometry,
        decorator: Optional[PageDecorator] = None,
    ) -> None:
        self.geometry = geometry
        self.decorator = decorator
        self.page_number = 1
        self._x = geometry.content_left
        self._y = geometry.content_top
        self._saved = False

        pagesize = (mm_to_points(geometry.size.width), mm_to_points(geometry.size.height))
        target = output if hasattr(output, "write") else str(output)
        self.canvas = pdf_canvas.Canvas(target, pagesize=pagesize)
        self._begin_page()

    # ------------------------------------------------------------------
    # Surface primitives
    # ------------------------------------------------------------------
    def measure_text(self, text: str, font: FontSpec) -> float:
        return points_to_mm(stringWidth(text, font.name, font.size))

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
        left = self._x if x is None else x
        if inline:
            box_width = width if width is not None else self.measure_text(text, font) + 2 * padding
            self._draw_line_of_text(text, font, left, self._y, box_width, line_height, color, fill, padding)
            self._x = left + box_width
            return 0.0

        box_width = width if width is not None else self.geometry.content_right - left
        advanced = 0.0
        for line in self.wrap_text(text, font, box_width - 2 * padding):
            if self._y + line_height > self.geometry.content_bottom and self._y > self.geometry.content_top:
                self.new_page()
            self._draw_line_of_text(line, font, left, self._y, box_width, line_height, color, fill, padding)
            self._y += line_height
            advanced += line_height
        self._x = self.geometry.content_left
        return advanced

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
        c = self.canvas
        c.saveState()
        c.setStrokeColor(rgb_to_color(color))
        c.setLineWidth(mm_to_points(width))
        c.line(mm_to_points(x1), self._pdf_y(y1), mm_to_points(x2), self._pdf_y(y2))
        c.restoreState()

    def draw_image(
        self,
        source: str,
        x: float,
        y: float,
        width: float,
        height: Optional[float] = None,
    ) -> float:
        if height is None:
            height = aspect_height(source, width)
        try:
            self.canvas.drawImage(
                str(source),
                mm_to_points(x),
                self._pdf_y(y + height),
                mm_to_points(width),
                mm_to_points(height),
                mask="auto",
            )
        except OSError as exc:
            raise MediaError("Cannot draw image", f"{source}: {exc}") from exc
        return height

    def new_page(self) -> None:
        self._end_page()
        self.canvas.showPage()
        self.page_number += 1
        self._x = self.geometry.content_left
        self._y = self.geometry.content_top
        self._begin_page()
        logger.debug(f"Started page {self.page_number}")

    def get_cursor(self) -> Tuple[float, float]:
        return self._x, self._y

    def set_cursor(self, x: float, y: float) -> None:
        self._x = x
        self._y = y

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------
    def set_metadata(
        self,
        author: Optional[str] = None,
        title: Optional[str] = None,
        subject: Optional[str] = None,
        creator: Optional[str] = None,
    ) -> None:
        if author:
            self.canvas.setAuthor(author)
        if title:
            self.canvas.setTitle(title)
        if subject:
            self.canvas.setSubject(subject)
        if creator:
            self.canvas.setCreator(creator)

    def save(self) -> None:
        """Close the last page and write the document."""
        if self._saved:
            return
        self._end_page()
        try:
            self.canvas.save()
        except OSError as exc:
            raise RenderingError("Cannot write PDF", str(exc)) from exc
        self._saved = True

    def wrap_text(self, text: str, font: FontSpec, width: float) -> List[str]:
        """Split ``text`` into lines no wider than ``width`` mm.

        Explicit newlines are kept, blank lines included.
        """
        max_width = mm_to_points(max(width, 0.0))
        lines: List[str] = []
        for raw_line in text.split("\n"):
            if not raw_line.strip():
                lines.append("")
                continue
            lines.extend(simpleSplit(raw_line, font.name, font.size, max_width) or [""])
        return lines

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _pdf_y(self, y: float) -> float:
        return mm_to_points(self.geometry.size.height - y)

    def _draw_line_of_text(
        self,
        text: str,
        font: FontSpec,
        x: float,
        y: float,
        width: float,
        line_height: float,
        color: RGB,
        fill: Optional[RGB],
        padding: float,
    ) -> None:
        c = self.canvas
        if fill is not None:
            c.saveState()
            c.setFillColor(rgb_to_color(fill))
            c.rect(
                mm_to_points(x),
                self._pdf_y(y + line_height),
                mm_to_points(width),
                mm_to_points(line_height),
                fill=1,
                stroke=0,
            )
            c.restoreState()
        if not text:
            return
        # Vertically centred in the line box, like a cell.
        baseline = y + 0.5 * line_height + 0.3 * font.size * MM_PER_POINT
        c.setFont(font.name, font.size)
        c.setFillColor(rgb_to_color(color))
        c.drawString(mm_to_points(x + padding), self._pdf_y(baseline), text)

    def _begin_page(self) -> None:
        if self.decorator is not None:
            self.decorator.draw_header(self)

    def _end_page(self) -> None:
        if self.decorator is not None:
            self.decorator.draw_footer(self)
