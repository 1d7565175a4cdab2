"""
Pytest configuration for mdreport
"""

import logging
import sys
import tempfile
import textwrap
from pathlib import Path

import pytest
from PIL import Image

from mdreport.engine.geometry import DEFAULT_MARGINS, PAGE_SIZES, Margins, PageGeometry, Size


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as an integration test")


class RecordingSurface:
    """In-memory drawing surface that records every call.

    Text is measured as ``0.2 mm * font size`` per character, which is close
    to the width of the built-in Courier fonts. Block text wraps on words and
    starts a new page when a line would cross the bottom margin, like the
    reportlab surface.
    """

    CHAR_WIDTH = 0.2

    def __init__(self, geometry=None):
        self.geometry = geometry or PageGeometry(
            PAGE_SIZES["A4"],
            Margins(
                top=DEFAULT_MARGINS.top,
                bottom=DEFAULT_MARGINS.bottom,
                left=DEFAULT_MARGINS.left,
                right=DEFAULT_MARGINS.right,
            ),
        )
        self.page_number = 1
        self.x = self.geometry.content_left
        self.y = self.geometry.content_top
        self.calls = []

    # Surface protocol -------------------------------------------------
    def measure_text(self, text, font):
        return len(text) * font.size * self.CHAR_WIDTH

    def draw_text_box(
        self,
        text,
        font,
        line_height,
        *,
        x=None,
        width=None,
        color=(0, 0, 0),
        fill=None,
        padding=0.0,
        inline=False,
    ):
        left = self.x if x is None else x
        if inline:
            box_width = width if width is not None else self.measure_text(text, font) + 2 * padding
            self.calls.append(
                {
                    "op": "inline",
                    "text": text,
                    "x": left,
                    "y": self.y,
                    "page": self.page_number,
                    "font": font,
                    "color": color,
                    "fill": fill,
                }
            )
            self.x = left + box_width
            return 0.0

        box_width = width if width is not None else self.geometry.content_right - left
        max_chars = max(1, int((box_width - 2 * padding) // (font.size * self.CHAR_WIDTH)))
        advanced = 0.0
        for raw_line in text.split("\n"):
            for line in textwrap.wrap(raw_line, max_chars) or [""]:
                if self.y + line_height > self.geometry.content_bottom and self.y > self.geometry.content_top:
                    self.new_page()
                self.calls.append(
                    {
                        "op": "text",
                        "text": line,
                        "x": left,
                        "y": self.y,
                        "page": self.page_number,
                        "font": font,
                        "color": color,
                        "fill": fill,
                    }
                )
                self.y += line_height
                advanced += line_height
        self.x = self.geometry.content_left
        return advanced

    def draw_line(self, x1, y1, x2, y2, *, color=(0, 0, 0), width=0.2):
        self.calls.append(
            {"op": "line", "x1": x1, "y1": y1, "x2": x2, "y2": y2, "page": self.page_number, "color": color}
        )

    def draw_image(self, source, x, y, width, height=None):
        height = 10.0 if height is None else height
        self.calls.append(
            {"op": "image", "source": source, "x": x, "y": y, "width": width, "height": height, "page": self.page_number}
        )
        return height

    def new_page(self):
        self.page_number += 1
        self.x = self.geometry.content_left
        self.y = self.geometry.content_top
        self.calls.append({"op": "new_page", "page": self.page_number})

    def get_cursor(self):
        return self.x, self.y

    def set_cursor(self, x, y):
        self.x = x
        self.y = y

    # Inspection helpers ----------------------------------------------
    def ops(self, op):
        return [call for call in self.calls if call["op"] == op]

    def texts(self):
        return [call["text"] for call in self.calls if call["op"] in ("text", "inline")]

    def find_text(self, text):
        for call in self.calls:
            if call["op"] in ("text", "inline") and call["text"] == text:
                return call
        raise AssertionError(f"{text!r} was never drawn")

    @property
    def page_breaks(self):
        return len(self.ops("new_page"))


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid leaking handlers between tests."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def surface():
    """Recording surface on an A4 page with the default report margins."""
    return RecordingSurface()


@pytest.fixture
def make_surface():
    """Factory for recording surfaces with a custom page height."""

    def _make(height=297.0, width=210.0, margins=None):
        geometry = PageGeometry(Size(width, height), margins or Margins(top=30.0, bottom=20.0, left=20.0, right=20.0))
        return RecordingSurface(geometry)

    return _make


@pytest.fixture
def png_image(temp_dir):
    """A 100x50 px PNG without DPI information (26.46 x 13.23 mm at 96 dpi)."""
    path = temp_dir / "picture.png"
    Image.new("RGB", (100, 50), color=(200, 30, 30)).save(path)
    return path
