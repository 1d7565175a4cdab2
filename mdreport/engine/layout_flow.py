"""Block emitters: place each block on the surface, breaking pages first.

Every emitter follows the same steps: pick the font, ask the page-break
policy whether the block starts a new page, draw, then advance the cursor
by the drawn height plus a fixed gap and update the heading bookkeeping.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Tuple

from ..exceptions import MediaError
from ..highlight.palette import DEFAULT_PALETTE, RGB, color_for
from ..highlight.tokenizer import tokenize
from .blocks import Block, BlockKind
from .images import image_size_mm
from .layout_state import LayoutState
from .page_break_policy import PageBreakPolicy
from .surface import DrawingSurface, FontSpec

logger = logging.getLogger(__name__)

BULLET = "• "
UNORDERED_MARKERS = ("-", "+", "*")
ORDERED_MARKERS = (".", ")")

DEFAULT_BODY_FONT = "Courier-Oblique"
DEFAULT_HEADING_FONT = "Courier-BoldOblique"

HEADING_SIZES: Dict[int, float] = {1: 20.0, 2: 16.0, 3: 14.0, 4: 13.0, 5: 12.5}
DEFAULT_HEADING_SIZE = 12.0


@dataclass(frozen=True, slots=True)
class FlowFonts:
    """Font names and point sizes per block kind."""

    body: str = DEFAULT_BODY_FONT
    heading: str = DEFAULT_HEADING_FONT
    body_size: float = 12.0
    code_size: float = 11.0
    heading_sizes: Mapping[int, float] = field(default_factory=lambda: dict(HEADING_SIZES))

    def heading_font(self, level: int) -> FontSpec:
        return FontSpec(self.heading, self.heading_sizes.get(level, DEFAULT_HEADING_SIZE))

    @property
    def body_font(self) -> FontSpec:
        return FontSpec(self.body, self.body_size)

    @property
    def code_font(self) -> FontSpec:
        return FontSpec(self.body, self.code_size)


@dataclass(frozen=True, slots=True)
class FlowMetrics:
    """Line heights, gaps and decoration colours, all lengths in mm."""

    line_height: float = 6.0
    heading_line_height: float = 12.0
    heading_gap_before: float = 4.0
    heading_gap_after: float = 3.0
    paragraph_gap: float = 4.0
    code_gap: float = 3.0
    list_item_gap: float = 2.0
    rule_gap: float = 6.0
    image_gap: float = 4.0
    inline_code_padding: float = 2.0
    rule_width: float = 0.2
    code_fill: RGB = (240, 240, 240)
    inline_code_fill: RGB = (245, 245, 245)
    rule_color: RGB = (200, 200, 200)
    tab_size: int = 4


def list_prefix(marker: Optional[str], ordinal: Optional[int] = None) -> str:
    """Display prefix for a list item; anything unusable falls back to a bullet."""
    if marker in UNORDERED_MARKERS:
        return BULLET
    if marker in ORDERED_MARKERS and ordinal is not None and ordinal > 0:
        return f"{ordinal}. "
    return BULLET


class LayoutFlow:
    """Runs the block emitters for one render.

    The flow owns a fresh :class:`LayoutState`; it must not be shared
    between renders.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        policy: Optional[PageBreakPolicy] = None,
        fonts: Optional[FlowFonts] = None,
        metrics: Optional[FlowMetrics] = None,
        palette: Optional[Mapping[str, RGB]] = None,
    ) -> None:
        self.surface = surface
        self.geometry = surface.geometry
        self.policy = policy or PageBreakPolicy(top_margin=self.geometry.content_top)
        self.fonts = fonts or FlowFonts()
        self.metrics = metrics or FlowMetrics()
        self.palette = palette if palette is not None else DEFAULT_PALETTE
        self.state = LayoutState.fresh(self.geometry.content_top)
        self.blocks_emitted = 0
        self.page_breaks = 0
        self._sync()

    def emit(self, block: Block) -> None:
        """Dispatch ``block`` to the emitter for its kind."""
        kind = block.kind
        if kind is BlockKind.HEADING:
            self.emit_heading(block.level, block.text)
        elif kind is BlockKind.PARAGRAPH:
            self.emit_paragraph(block.text)
        elif kind is BlockKind.CODE:
            self.emit_code(block.text)
        elif kind is BlockKind.HIGHLIGHTED_CODE:
            self.emit_highlighted_code(block.text, language=block.language)
        elif kind is BlockKind.LIST_ITEM:
            self.emit_list_item(block.text, block.marker, block.ordinal)
        elif kind is BlockKind.THEMATIC_BREAK:
            self.emit_thematic_break()
        elif kind is BlockKind.INLINE_CODE:
            self.emit_inline_code(block.text)
        elif kind is BlockKind.IMAGE:
            self.emit_image(block.source, block.text)

    # ------------------------------------------------------------------
    # Emitters
    # ------------------------------------------------------------------
    def emit_heading(self, level: int, text: str) -> None:
        if not text:
            return
        self._sync()
        block = Block.heading(level, text)
        if not self.policy.on_fresh_page(self.state):
            if self._should_break(block):
                self._break_page(block)
            else:
                self._gap(self.metrics.heading_gap_before)

        # Position is recorded after the break decision, before drawing.
        self.state.record_heading(level)
        self.surface.draw_text_box(text, self.fonts.heading_font(level), self.metrics.heading_line_height)
        self._sync()
        self._gap(self.metrics.heading_gap_after)
        self.state.finish_heading(level)
        self.blocks_emitted += 1

    def emit_paragraph(self, text: str) -> None:
        if not text:
            return
        self._sync()
        self._break_if_needed(Block.paragraph(text))
        self.surface.draw_text_box(text, self.fonts.body_font, self.metrics.line_height)
        self._finish_content(self.metrics.paragraph_gap)

    def emit_code(self, code: str) -> None:
        code = self._prepare_code(code)
        if not code:
            return
        self._sync()
        self._break_if_needed(Block.code(code))
        self.surface.draw_text_box(
            code,
            self.fonts.code_font,
            self.metrics.line_height,
            fill=self.metrics.code_fill,
        )
        self._finish_content(self.metrics.code_gap)

    def emit_highlighted_code(
        self,
        code: str,
        tokens: Optional[Iterable[Tuple[str, str]]] = None,
        language: Optional[str] = None,
    ) -> None:
        """Draw code token by token, advancing one line per newline token."""
        if not code:
            return
        self._sync()
        self._break_if_needed(Block.highlighted_code(code, language))
        code = code.expandtabs(self.metrics.tab_size)
        if tokens is None:
            tokens = tokenize(code, language)

        font = self.fonts.code_font
        left = self.geometry.content_left
        self.surface.set_cursor(left, self.state.cursor_y)
        for text, category in tokens:
            if text == "\n":
                self._code_newline()
                continue
            if text:
                self._write_run(text, font, color_for(category, self.palette))

        x, _ = self.surface.get_cursor()
        if x > left:
            self._code_newline()
        self._finish_content(self.metrics.code_gap)

    def emit_list_item(self, text: str, marker: Optional[str], ordinal: Optional[int] = None) -> None:
        if not text:
            return
        self._sync()
        self._break_if_needed(Block.list_item(text, marker or "", ordinal))
        self.surface.draw_text_box(list_prefix(marker, ordinal) + text, self.fonts.body_font, self.metrics.line_height)
        self._finish_content(self.metrics.list_item_gap)

    def emit_thematic_break(self) -> None:
        self._sync()
        self._gap(self.metrics.rule_gap)
        y = self.state.cursor_y
        self.surface.draw_line(
            self.geometry.content_left,
            y,
            self.geometry.content_right,
            y,
            color=self.metrics.rule_color,
            width=self.metrics.rule_width,
        )
        self._finish_content(self.metrics.rule_gap)

    def emit_inline_code(self, code: str) -> None:
        if not code:
            return
        self._sync()
        self.surface.draw_text_box(
            code,
            self.fonts.code_font,
            self.metrics.line_height,
            fill=self.metrics.inline_code_fill,
            padding=self.metrics.inline_code_padding,
            inline=True,
        )
        self.state.clear_heading()
        self.blocks_emitted += 1

    def emit_image(self, source: Optional[str], title: str = "") -> None:
        if not source:
            return
        try:
            natural = image_size_mm(source)
        except MediaError as exc:
            logger.warning(f"Skipping image {source}: {exc}")
            return

        width, height = natural.width, natural.height
        max_width = self.geometry.content_width
        max_height = self.geometry.content_bottom - self.geometry.content_top
        scale = min(1.0, max_width / width if width else 1.0, max_height / height if height else 1.0)
        width, height = width * scale, height * scale

        self._sync()
        self._break_if_needed(Block.image(source, title, height))
        available = self.geometry.content_bottom - self.state.cursor_y
        if height > available > 0:
            width, height = width * available / height, available
        drawn = self.surface.draw_image(source, self.geometry.content_left, self.state.cursor_y, width, height)
        self.surface.set_cursor(self.geometry.content_left, self.state.cursor_y + drawn)
        self._finish_content(self.metrics.image_gap)

    # ------------------------------------------------------------------
    # Cursor bookkeeping
    # ------------------------------------------------------------------
    def _sync(self) -> None:
        _, y = self.surface.get_cursor()
        self.state.cursor_y = y
        self.state.current_page = self.surface.page_number

    def _remaining_space(self) -> float:
        return self.state.remaining_space(self.geometry.size.height, self.geometry.margins.bottom)

    def _should_break(self, block: Block) -> bool:
        return self.policy.should_break(self.state, block, self._remaining_space(), self.geometry.size.height)

    def _break_if_needed(self, block: Block) -> None:
        if self._should_break(block):
            self._break_page(block)

    def _break_page(self, block: Optional[Block] = None) -> None:
        kind = block.kind.value if block is not None else "content"
        logger.debug(
            f"Page break before {kind} at y={self.state.cursor_y:.1f} on page {self.state.current_page}"
        )
        self.surface.new_page()
        self.state.start_page(self.geometry.content_top)
        self.surface.set_cursor(self.geometry.content_left, self.state.cursor_y)
        self.page_breaks += 1

    def _gap(self, amount: float) -> None:
        # Gaps never push the cursor below the bottom margin.
        y = min(self.state.cursor_y + amount, self.geometry.content_bottom)
        self.surface.set_cursor(self.geometry.content_left, y)
        self.state.cursor_y = y

    def _finish_content(self, gap: float) -> None:
        self._sync()
        self._gap(gap)
        self.state.clear_heading()
        self.blocks_emitted += 1

    def _prepare_code(self, code: str) -> str:
        if not code:
            return ""
        return code.rstrip("\n").expandtabs(self.metrics.tab_size)

    # ------------------------------------------------------------------
    # Highlighted code helpers
    # ------------------------------------------------------------------
    def _code_newline(self) -> None:
        y = self.state.cursor_y + self.metrics.line_height
        if y > self.geometry.content_bottom:
            # Runs of blank lines can walk off the page without drawing anything.
            self._break_page()
            return
        self.state.cursor_y = y
        self.surface.set_cursor(self.geometry.content_left, y)

    def _ensure_line_fits(self) -> None:
        if self.state.cursor_y + self.metrics.line_height > self.geometry.content_bottom:
            x, _ = self.surface.get_cursor()
            self._break_page()
            self.surface.set_cursor(x, self.state.cursor_y)

    def _write_run(self, text: str, font: FontSpec, color: RGB) -> None:
        left = self.geometry.content_left
        right = self.geometry.content_right
        while text:
            self._ensure_line_fits()
            x, _ = self.surface.get_cursor()
            available = right - x
            if self.surface.measure_text(text, font) <= available:
                self._draw_run(text, font, color)
                return
            cut = self._fitting_prefix(text, font, available)
            if cut == 0 and x > left:
                self._code_newline()
                continue
            cut = max(cut, 1)
            self._draw_run(text[:cut], font, color)
            text = text[cut:]
            self._code_newline()

    def _draw_run(self, text: str, font: FontSpec, color: RGB) -> None:
        x, _ = self.surface.get_cursor()
        self.surface.set_cursor(x, self.state.cursor_y)
        self.surface.draw_text_box(text, font, self.metrics.line_height, color=color, inline=True)

    def _fitting_prefix(self, text: str, font: FontSpec, available: float) -> int:
        count = 0
        for index in range(1, len(text) + 1):
            if self.surface.measure_text(text[:index], font) > available:
                break
            count = index
        return count
