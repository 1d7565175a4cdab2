"""Turn Markdown source into the flat block sequence the layout flow emits."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from markdown_it import MarkdownIt
from markdown_it.token import Token

from ..engine.blocks import Block

logger = logging.getLogger(__name__)

_MARKDOWN_PARSER: Optional[MarkdownIt] = None


def _markdown_parser() -> MarkdownIt:
    global _MARKDOWN_PARSER
    if _MARKDOWN_PARSER is None:
        _MARKDOWN_PARSER = MarkdownIt("commonmark").enable("strikethrough")
    return _MARKDOWN_PARSER


def parse_blocks(source: str, *, highlight: bool = True) -> List[Block]:
    """Parse ``source`` and return its blocks in document order."""
    tokens = _markdown_parser().parse(source or "")
    blocks = list(BlockExtractor(highlight=highlight).extract(tokens))
    logger.debug(f"Extracted {len(blocks)} blocks from {len(tokens)} tokens")
    return blocks


def inline_text(token: Optional[Token]) -> str:
    """Flatten an inline token: emphasis, links, code spans and image alt text."""
    if token is None:
        return ""
    if not token.children:
        return (token.content or "").strip()

    parts: List[str] = []
    for child in token.children:
        if child.type in ("text", "code_inline"):
            parts.append(child.content)
        elif child.type == "image":
            parts.append(child.content or "")
        elif child.type == "softbreak":
            parts.append(" ")
        elif child.type == "hardbreak":
            parts.append("\n")
    return "".join(parts).strip()


def sole_image(token: Optional[Token]) -> Optional[Tuple[str, str]]:
    """Return (src, alt) when an inline token holds nothing but one image."""
    if token is None or not token.children:
        return None
    meaningful = [
        child
        for child in token.children
        if child.type not in ("softbreak", "hardbreak") and not (child.type == "text" and not child.content.strip())
    ]
    if len(meaningful) != 1 or meaningful[0].type != "image":
        return None
    image = meaningful[0]
    src = image.attrGet("src")
    if not src:
        return None
    return str(src), image.content or ""


class BlockExtractor:
    """Walks the markdown-it token stream.

    Lists are consumed whole: every item becomes one LIST_ITEM with the text
    of its nested blocks flattened into it.
    """

    def __init__(self, highlight: bool = True) -> None:
        self.highlight = highlight

    def extract(self, tokens: Sequence[Token]) -> Iterator[Block]:
        index = 0
        while index < len(tokens):
            token = tokens[index]
            kind = token.type

            if kind == "heading_open":
                text = inline_text(self._inline_after(tokens, index))
                if text:
                    yield Block.heading(int(token.tag[1:]), text)
                index = self._skip_to_close(tokens, index)
            elif kind == "paragraph_open":
                inline = self._inline_after(tokens, index)
                image = sole_image(inline)
                if image is not None:
                    yield Block.image(image[0], image[1])
                else:
                    text = inline_text(inline)
                    if text:
                        yield Block.paragraph(text)
                index = self._skip_to_close(tokens, index)
            elif kind == "fence":
                block = self._fence(token)
                if block is not None:
                    yield block
                index += 1
            elif kind == "code_block":
                if token.content:
                    yield Block.code(token.content)
                index += 1
            elif kind == "hr":
                yield Block.thematic_break()
                index += 1
            elif kind in ("bullet_list_open", "ordered_list_open"):
                end = self._skip_to_close(tokens, index)
                yield from self._list_items(token, tokens[index + 1:end])
                index = end
            else:
                # Blockquotes are transparent; raw HTML is dropped.
                index += 1

    def _fence(self, token: Token) -> Optional[Block]:
        if not token.content:
            return None
        info = (token.info or "").strip()
        language = info.split()[0] if info else None
        if language and self.highlight:
            return Block.highlighted_code(token.content, language)
        return Block.code(token.content)

    def _list_items(self, list_token: Token, body: Sequence[Token]) -> Iterator[Block]:
        marker = list_token.markup or "-"
        ordered = list_token.type == "ordered_list_open"
        ordinal: Optional[int] = None
        if ordered:
            start = list_token.attrGet("start")
            try:
                ordinal = int(start) if start is not None else 1
            except (TypeError, ValueError):
                ordinal = 1

        item_level = list_token.level + 1
        parts: List[str] = []
        inside = False
        for token in body:
            if token.type == "list_item_open" and token.level == item_level:
                parts = []
                inside = True
            elif token.type == "list_item_close" and token.level == item_level:
                inside = False
                text = " ".join(part for part in parts if part)
                if text:
                    yield Block.list_item(text, marker, ordinal)
                    if ordinal is not None:
                        ordinal += 1
            elif inside and token.type == "inline":
                parts.append(inline_text(token))

    @staticmethod
    def _inline_after(tokens: Sequence[Token], index: int) -> Optional[Token]:
        following = index + 1
        if following < len(tokens) and tokens[following].type == "inline":
            return tokens[following]
        return None

    @staticmethod
    def _skip_to_close(tokens: Sequence[Token], index: int) -> int:
        """Index just past the close token matching ``tokens[index]``."""
        opener = tokens[index]
        close_type = opener.type.replace("_open", "_close")
        for position in range(index + 1, len(tokens)):
            candidate = tokens[position]
            if candidate.type == close_type and candidate.level == opener.level:
                return position + 1
        return len(tokens)
