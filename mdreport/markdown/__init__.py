"""Markdown front end built on markdown-it-py."""

from .parser import BlockExtractor, inline_text, parse_blocks

__all__ = ["BlockExtractor", "inline_text", "parse_blocks"]
