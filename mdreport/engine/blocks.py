"""Block model handed from the Markdown extractor to the layout flow."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BlockKind(Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    CODE = "code"
    HIGHLIGHTED_CODE = "highlighted_code"
    LIST_ITEM = "list_item"
    THEMATIC_BREAK = "thematic_break"
    INLINE_CODE = "inline_code"
    IMAGE = "image"


@dataclass(slots=True)
class Block:
    """One structural unit of content to render.

    Only the fields relevant to ``kind`` are populated: ``level`` for
    headings, ``marker``/``ordinal`` for list items, ``language`` for code,
    ``source`` and ``height`` for images.
    """

    kind: BlockKind
    text: str = ""
    level: int = 0
    marker: Optional[str] = None
    ordinal: Optional[int] = None
    language: Optional[str] = None
    source: Optional[str] = None
    height: float = 0.0

    @classmethod
    def heading(cls, level: int, text: str) -> "Block":
        return cls(BlockKind.HEADING, text=text, level=level)

    @classmethod
    def paragraph(cls, text: str) -> "Block":
        return cls(BlockKind.PARAGRAPH, text=text)

    @classmethod
    def code(cls, text: str) -> "Block":
        return cls(BlockKind.CODE, text=text)

    @classmethod
    def highlighted_code(cls, text: str, language: Optional[str]) -> "Block":
        return cls(BlockKind.HIGHLIGHTED_CODE, text=text, language=language)

    @classmethod
    def list_item(cls, text: str, marker: str, ordinal: Optional[int] = None) -> "Block":
        return cls(BlockKind.LIST_ITEM, text=text, marker=marker, ordinal=ordinal)

    @classmethod
    def thematic_break(cls) -> "Block":
        return cls(BlockKind.THEMATIC_BREAK)

    @classmethod
    def inline_code(cls, text: str) -> "Block":
        return cls(BlockKind.INLINE_CODE, text=text)

    @classmethod
    def image(cls, source: str, title: str = "", height: float = 0.0) -> "Block":
        return cls(BlockKind.IMAGE, text=title, source=source, height=height)
