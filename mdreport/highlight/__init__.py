"""Syntax highlighting for code blocks."""

from .palette import DEFAULT_COLOR, DEFAULT_PALETTE, color_for
from .tokenizer import category_for, resolve_lexer, tokenize

__all__ = [
    "DEFAULT_COLOR",
    "DEFAULT_PALETTE",
    "color_for",
    "category_for",
    "resolve_lexer",
    "tokenize",
]
