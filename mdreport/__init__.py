"""
mdreport - Markdown to paginated PDF reports.

Turns a Markdown document into an A4 (or Letter) PDF with a logo header,
a generation footer and syntax-highlighted code, keeping headings together
with the content that follows them.

Quick Start:
    >>> from mdreport import render_markdown_file
    >>> render_markdown_file("report.md", "report.pdf")

Command line:
    mdreport report.md report.pdf --logo logo.png
"""

from .api import RenderResult, read_markdown, render_markdown, render_markdown_file
from .config import ReportConfig
from .exceptions import (
    ConfigError,
    FontError,
    MediaError,
    ParsingError,
    RenderingError,
    ReportError,
)
from .version import __version__

__all__ = [
    "__version__",
    "render_markdown",
    "render_markdown_file",
    "read_markdown",
    "RenderResult",
    "ReportConfig",
    "ReportError",
    "ParsingError",
    "RenderingError",
    "FontError",
    "MediaError",
    "ConfigError",
]
