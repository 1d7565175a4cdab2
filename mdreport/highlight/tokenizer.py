"""Tokenize code into ``(text, category)`` pairs using Pygments."""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple

from pygments import lex
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.lexers.special import TextLexer
from pygments.token import Comment, Keyword, Literal, Name, Number, String, _TokenType
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

# Order matters: String and Number are subtypes of Literal.
_CATEGORY_TYPES = (
    (Keyword, "keyword"),
    (String, "string"),
    (Number, "number"),
    (Comment, "comment"),
    (Name.Function, "function"),
    (Name.Class, "class"),
    (Name.Variable, "variable"),
    (Name.Builtin, "builtin"),
    (Literal, "literal"),
)


def resolve_lexer(code: str, language: Optional[str] = None) -> Lexer:
    """Pick a lexer by name, then by content, then plain text."""
    if language:
        try:
            return get_lexer_by_name(language, stripnl=False, ensurenl=False)
        except ClassNotFound:
            logger.debug(f"No lexer named {language!r}, guessing from content")
    try:
        return guess_lexer(code, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False, ensurenl=False)


def category_for(token_type: _TokenType) -> str:
    for parent, category in _CATEGORY_TYPES:
        if token_type in parent:
            return category
    return "text"


def tokenize(code: str, language: Optional[str] = None) -> Iterator[Tuple[str, str]]:
    """Yield ``(text, category)`` pairs lazily.

    Newlines always come out as separate ``"\\n"`` tokens so consumers can
    advance line by line.
    """
    if not code:
        return
    lexer = resolve_lexer(code, language)
    for token_type, value in lex(code, lexer):
        category = category_for(token_type)
        parts = value.split("\n")
        for index, part in enumerate(parts):
            if index:
                yield "\n", "text"
            if part:
                yield part, category
