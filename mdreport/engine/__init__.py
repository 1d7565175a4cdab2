"""Layout engine: block model, page-break policy and the layout flow."""

from .blocks import Block, BlockKind
from .geometry import DEFAULT_MARGINS, PAGE_SIZES, Margins, PageGeometry, Size
from .layout_flow import FlowFonts, FlowMetrics, LayoutFlow, list_prefix
from .layout_state import HeadingMark, LayoutState
from .page_break_policy import BreakRule, PageBreakPolicy, should_break
from .surface import DrawingSurface, FontSpec

__all__ = [
    "Block",
    "BlockKind",
    "BreakRule",
    "DEFAULT_MARGINS",
    "DrawingSurface",
    "FlowFonts",
    "FlowMetrics",
    "FontSpec",
    "HeadingMark",
    "LayoutFlow",
    "LayoutState",
    "Margins",
    "PAGE_SIZES",
    "PageBreakPolicy",
    "PageGeometry",
    "Size",
    "list_prefix",
    "should_break",
]
