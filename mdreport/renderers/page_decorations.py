"""Per-page header (logo) and footer (generation notice)."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional, Union

from ..engine.images import aspect_height
from ..engine.surface import DrawingSurface, FontSpec

logger = logging.getLogger(__name__)

LOGO_WIDTH = 40.0
LOGO_TOP = 10.0
LOGO_RIGHT_MARGIN = 20.0
FOOTER_OFFSET = 15.0
FOOTER_LINE_HEIGHT = 5.0
FOOTER_FONT_SIZE = 9.0


def footer_text(system_info: str, when: Optional[date] = None) -> str:
    when = when or date.today()
    return f"Report generated on: {system_info} - {when.strftime('%d.%m.%Y')}"


class PageDecorator:
    """Draws the logo header and the footer on every page of a surface.

    The surface calls :meth:`draw_header` when a page starts and
    :meth:`draw_footer` before the page is closed. Both leave the cursor
    where they found it.
    """

    def __init__(
        self,
        font_name: str,
        *,
        logo_path: Optional[Union[str, Path]] = None,
        footer: Optional[str] = None,
    ) -> None:
        self.font = FontSpec(font_name, FOOTER_FONT_SIZE)
        self.logo_path = str(logo_path) if logo_path else None
        self.logo_height = aspect_height(self.logo_path, LOGO_WIDTH) if self.logo_path else 0.0
        self.footer = footer

    def draw_header(self, surface: DrawingSurface) -> None:
        if not self.logo_path:
            return
        x = surface.geometry.size.width - LOGO_RIGHT_MARGIN - LOGO_WIDTH
        surface.draw_image(self.logo_path, x, LOGO_TOP, LOGO_WIDTH, self.logo_height)

    def draw_footer(self, surface: DrawingSurface) -> None:
        if not self.footer:
            return
        saved = surface.get_cursor()
        page = surface.geometry.size
        width = surface.measure_text(self.footer, self.font)
        surface.set_cursor(max((page.width - width) / 2.0, 0.0), page.height - FOOTER_OFFSET)
        surface.draw_text_box(self.footer, self.font, FOOTER_LINE_HEIGHT, inline=True)
        surface.set_cursor(*saved)
