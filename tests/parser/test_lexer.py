from __future__ import annotations

import logging

from webcore.parser import Lexer, TokenType, tokenize


def _types(source: str):
    return [token.type for token in tokenize(source)]


def test_punctuation_and_arrow() -> None:
    assert _types("{ } ( ) : = , . => + -") == [
        TokenType.LBRACE,
        TokenType.RBRACE,
        TokenType.LPAREN,
        TokenType.RPAREN,
        TokenType.COLON,
        TokenType.EQUALS,
        TokenType.COMMA,
        TokenType.DOT,
        TokenType.ARROW,
        TokenType.PLUS,
        TokenType.MINUS,
        TokenType.EOF,
    ]


def test_identifiers_allow_dash_colon_and_underscore() -> None:
    tokens = tokenize("on:click data-id _private x1")
    assert [t.value for t in tokens[:-1]] == ["on:click", "data-id", "_private", "x1"]
    assert all(t.type is TokenType.IDENTIFIER for t in tokens[:-1])


def test_strings_have_no_escapes_and_run_to_end_of_input() -> None:
    tokens = tokenize('"hello world" "unterminated')
    assert tokens[0].type is TokenType.STRING
    assert tokens[0].value == "hello world"
    assert tokens[1].value == "unterminated"
    assert tokens[2].type is TokenType.EOF


def test_numbers_keep_their_text() -> None:
    tokens = tokenize("42 3.14")
    assert [(t.type, t.value) for t in tokens[:-1]] == [
        (TokenType.NUMBER, "42"),
        (TokenType.NUMBER, "3.14"),
    ]


def test_unknown_characters_are_dropped() -> None:
    lexer = Lexer("a ; b @ # c")
    tokens = lexer.tokenize()
    assert [t.value for t in tokens[:-1]] == ["a", "b", "c"]
    assert lexer.dropped == 3


def test_positions_track_lines_and_columns() -> None:
    tokens = tokenize('page "x" {\n  p "hi"\n}')
    p_token = tokens[3]
    assert p_token.value == "p"
    assert (p_token.line, p_token.column) == (2, 3)


def test_empty_source_yields_only_eof() -> None:
    tokens = tokenize("")
    assert len(tokens) == 1
    assert tokens[0].type is TokenType.EOF


def test_dropped_characters_are_logged_with_path(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="webcore.parser.lexer")
    Lexer("a ; b", path="pages/home.webc").tokenize()
    assert "Dropped unrecognized character ';' at pages/home.webc:1:3" in caplog.text
