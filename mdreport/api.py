"""
High-level API for mdreport.

Example:
    >>> from mdreport import render_markdown_file
    >>> result = render_markdown_file("report.md", "report.pdf")
    >>> result.pages
    3
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .config import ReportConfig
from .engine.blocks import Block, BlockKind
from .engine.layout_flow import DEFAULT_BODY_FONT, DEFAULT_HEADING_FONT, FlowFonts, LayoutFlow
from .exceptions import ParsingError
from .markdown.parser import parse_blocks
from .metadata import DocumentMetadata, extract_metadata, system_description
from .renderers.page_decorations import PageDecorator, footer_text
from .renderers.pdf_surface import CanvasTarget, ReportLabSurface
from .renderers.render_utils import BODY_FONT_NAME, HEADING_FONT_NAME, resolve_font

logger = logging.getLogger(__name__)

PDF_CREATOR = "mdreport"


@dataclass(slots=True)
class RenderResult:
    """Summary of a finished render."""

    pages: int
    blocks: int
    page_breaks: int
    metadata: DocumentMetadata
    output: Optional[Path] = None


def _resolve_images(blocks: List[Block], base_dir: Optional[Path]) -> List[Block]:
    if base_dir is None:
        return blocks
    for block in blocks:
        if block.kind is BlockKind.IMAGE and block.source:
            source = Path(block.source)
            if not source.is_absolute():
                block.source = str(base_dir / source)
    return blocks


def render_markdown(
    source: str,
    output: CanvasTarget,
    config: Optional[ReportConfig] = None,
) -> RenderResult:
    """Render Markdown text to a PDF at ``output`` (path or binary stream).

    Raises:
        FontError: A configured font cannot be loaded.
        MediaError: The logo cannot be loaded.
        RenderingError: The PDF cannot be written.
    """
    config = config or ReportConfig()
    geometry = config.geometry
    metadata = extract_metadata(source)

    body_font = resolve_font(BODY_FONT_NAME, config.body_font_path, DEFAULT_BODY_FONT)
    heading_font = resolve_font(HEADING_FONT_NAME, config.heading_font_path, DEFAULT_HEADING_FONT)

    footer = footer_text(system_description()) if config.footer_enabled else None
    decorator = PageDecorator(body_font, logo_path=config.logo_path, footer=footer)

    blocks = _resolve_images(parse_blocks(source, highlight=config.highlight_code), config.base_dir)
    logger.info(f"Rendering {len(blocks)} blocks on {config.page_size} pages")

    surface = ReportLabSurface(output, geometry, decorator)
    flow = LayoutFlow(surface, fonts=FlowFonts(body=body_font, heading=heading_font))
    for block in blocks:
        flow.emit(block)

    surface.set_metadata(
        author=metadata.author,
        title=metadata.title,
        subject=metadata.subject,
        creator=PDF_CREATOR,
    )
    surface.save()

    output_path = None if hasattr(output, "write") else Path(output)
    logger.info(f"Rendered {flow.blocks_emitted} blocks on {surface.page_number} pages")
    return RenderResult(
        pages=surface.page_number,
        blocks=flow.blocks_emitted,
        page_breaks=flow.page_breaks,
        metadata=metadata,
        output=output_path,
    )


def read_markdown(input_path: Union[str, Path]) -> str:
    """Read a UTF-8 Markdown file.

    Raises:
        ParsingError: If the file cannot be read or decoded.
    """
    path = Path(input_path)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParsingError("Markdown input is not valid UTF-8", str(path)) from exc
    except OSError as exc:
        raise ParsingError("Cannot read Markdown input", f"{path}: {exc}") from exc


def render_markdown_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    config: Optional[ReportConfig] = None,
) -> RenderResult:
    """Render a Markdown file; relative image paths resolve against its folder."""
    input_path = Path(input_path)
    source = read_markdown(input_path)

    config = config or ReportConfig()
    if config.base_dir is None:
        config = dataclasses.replace(config, base_dir=input_path.resolve().parent)

    return render_markdown(source, Path(output_path), config)
