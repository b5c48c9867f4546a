"""Lexical analyzer (tokenizer) for the WebCore language.

Converts ``.webc`` source text into a list of tokens terminated by ``EOF``.
The tokenizer is permissive: characters it does not recognise are dropped
instead of raising, and an unterminated string runs to the end of input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types for the WebCore language."""

    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    LBRACE = auto()
    RBRACE = auto()
    LPAREN = auto()
    RPAREN = auto()
    COLON = auto()
    EQUALS = auto()
    COMMA = auto()
    DOT = auto()
    ARROW = auto()
    PLUS = auto()
    MINUS = auto()

    EOF = auto()


@dataclass
class Token:
    """A single token with position information."""

    type: TokenType
    value: str
    line: int
    column: int

    def describe(self) -> str:
        if self.type in (TokenType.IDENTIFIER, TokenType.STRING, TokenType.NUMBER):
            return f"{self.type.name}({self.value!r})"
        return self.type.name

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


PUNCTUATION = {
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    ':': TokenType.COLON,
    '=': TokenType.EQUALS,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
}

IDENTIFIER_EXTRA_CHARS = ('_', '-', ':')


class Lexer:
    """Tokenizer for WebCore source code."""

    def __init__(self, source: str, path: str = ""):
        self.source = source
        self.path = path
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.dropped = 0

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character without consuming."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        char = self.source[self.pos]
        self.pos += 1

        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def read_string(self) -> str:
        """Read a double-quoted string. No escapes: the next quote always ends it."""
        self.advance()  # opening quote
        chars = []
        while True:
            char = self.advance()
            if char is None or char == '"':
                break
            chars.append(char)
        return ''.join(chars)

    def read_number(self) -> str:
        chars = []
        while self.peek() is not None and (self.peek().isdigit() or self.peek() == '.'):
            chars.append(self.advance())
        return ''.join(chars)

    def read_identifier(self) -> str:
        chars = [self.advance()]
        while self.peek() is not None and (self.peek().isalnum() or self.peek() in IDENTIFIER_EXTRA_CHARS):
            chars.append(self.advance())
        return ''.join(chars)

    def add_token(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        self.tokens.append(Token(type=token_type, value=value, line=line, column=column))

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source."""
        while self.pos < len(self.source):
            char = self.peek()
            line, column = self.line, self.column

            if char.isspace():
                self.advance()
                continue

            if char == '"':
                self.add_token(TokenType.STRING, self.read_string(), line, column)
                continue

            if char.isalpha() or char == '_':
                self.add_token(TokenType.IDENTIFIER, self.read_identifier(), line, column)
                continue

            if char.isdigit():
                self.add_token(TokenType.NUMBER, self.read_number(), line, column)
                continue

            if char == '=' and self.peek(1) == '>':
                self.advance()
                self.advance()
                self.add_token(TokenType.ARROW, '=>', line, column)
                continue

            token_type = PUNCTUATION.get(char)
            self.advance()
            if token_type is not None:
                self.add_token(token_type, char, line, column)
            else:
                self.dropped += 1
                logger.debug(
                    "Dropped unrecognized character %r at %s%d:%d",
                    char, f"{self.path}:" if self.path else "", line, column,
                )

        self.add_token(TokenType.EOF, '', self.line, self.column)
        return self.tokens


def tokenize(source: str, path: str = "") -> List[Token]:
    """Tokenize ``source`` into a list ending with an ``EOF`` token."""
    return Lexer(source, path=path).tokenize()


__all__ = ["TokenType", "Token", "Lexer", "tokenize"]
