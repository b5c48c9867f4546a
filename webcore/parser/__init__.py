"""Lexer and parser for WebCore sources."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from webcore.ast import Document, merge_documents

from .lexer import Lexer, Token, TokenType, tokenize
from .parser import DEFAULT_PAGE_NAME, Parser, parse_source
from .text import split_interpolated_text


def parse_sources(sources: Iterable[Tuple[Optional[str], str]]) -> Document:
    """Parse ``(path, text)`` pairs in order and merge them; later files win.

    A syntax error in any file aborts the whole call.
    """
    return merge_documents(parse_source(text, path=path) for path, text in sources)


__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "Parser",
    "parse_source",
    "parse_sources",
    "split_interpolated_text",
    "DEFAULT_PAGE_NAME",
]
