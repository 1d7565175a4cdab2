"""PDF output: the reportlab surface and per-page decorations."""

from .page_decorations import PageDecorator, footer_text
from .pdf_surface import ReportLabSurface

__all__ = ["PageDecorator", "ReportLabSurface", "footer_text"]
