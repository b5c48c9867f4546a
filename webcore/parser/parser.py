"""Recursive-descent parser for ``.webc`` sources.

The parser walks the token list produced by :mod:`webcore.parser.lexer` with
a single lookahead slot. Each call to :meth:`Parser.parse` yields one partial
:class:`~webcore.ast.Document`; documents from several files are combined with
:func:`~webcore.ast.merge_documents`.

Grammar overview::

    document  := ( app | layout | page | component | element )*
    app       := "app" IDENT "{" ( "theme" ":" STRING
                                 | "layout" ":" IDENT
                                 | "routes" "{" ( STRING ":" IDENT )* "}" )* "}"
    layout    := "layout" IDENT "{" element* "}"
    page      := "page" STRING "{" element* "}"
    component := "component" IDENT "{" ( props | state | view | style | element )* "}"
    element   := STRING
               | "slot" IDENT?
               | IDENT attribute* ( STRING | "{" element* "}" )?
    attribute := IDENT ( "=" ( STRING | "{" tokens "}" ) )?
"""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional

from webcore.ast import (
    App,
    Attribute,
    BooleanValue,
    Component,
    ComponentRef,
    Document,
    Element,
    ExpressionValue,
    Layout,
    Page,
    Prop,
    Slot,
    StateVar,
    StringValue,
    StyleProperty,
    StyleRule,
    Tag,
)
from webcore.errors import ExpectedTokenError, InvalidSyntaxError, UnexpectedTokenError

from .lexer import Token, TokenType, tokenize
from .text import bare_string_elements, split_interpolated_text

logger = logging.getLogger(__name__)

DEFAULT_PAGE_NAME = "default"

# How tokens inside an attribute expression are written back out.
EXPRESSION_TOKEN_TEXT = {
    TokenType.PLUS: '+',
    TokenType.MINUS: '-',
    TokenType.EQUALS: '=',
    TokenType.LPAREN: '(',
    TokenType.RPAREN: ')',
    TokenType.COMMA: ',',
    TokenType.DOT: '.',
    TokenType.ARROW: '=>',
}


class Parser:
    """Parse one WebCore source text into a partial document."""

    def __init__(self, source: str, path: Optional[str] = None):
        self.source = source
        self.path = path
        self.tokens: List[Token] = tokenize(source, path=path or "")
        self.pos = 0

    # ------------------------------------------------------------------
    # Token primitives
    # ------------------------------------------------------------------

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 1) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def check(self, token_type: TokenType) -> bool:
        return self.current.type is token_type

    def check_keyword(self, word: str) -> bool:
        return self.current.type is TokenType.IDENTIFIER and self.current.value == word

    def advance(self) -> Token:
        """Consume the current token. Never moves past ``EOF``."""
        token = self.current
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return token

    def expect(self, token_type: TokenType) -> Token:
        """Consume a token of ``token_type``; only the kind is compared."""
        if self.current.type is not token_type:
            raise self._expected(token_type.name)
        return self.advance()

    def expect_value(self, token_type: TokenType, what: str) -> str:
        """Consume a token of ``token_type`` and return its text."""
        if self.current.type is not token_type:
            raise self._expected(what)
        return self.advance().value

    def _expected(self, what: str) -> ExpectedTokenError:
        return ExpectedTokenError(what, path=self.path, line=self.current.line, column=self.current.column)

    def _unexpected(self) -> UnexpectedTokenError:
        return UnexpectedTokenError(
            self.current.describe(), path=self.path, line=self.current.line, column=self.current.column
        )

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    def parse(self) -> Document:
        document = Document()

        while not self.check(TokenType.EOF):
            if self.check_keyword("app"):
                document.app = self.parse_app()
            elif self.check_keyword("layout"):
                layout = self.parse_layout()
                document.layouts[layout.name] = layout
            elif self.check_keyword("page"):
                page = self.parse_page()
                document.pages[page.name] = page
            elif self.check_keyword("component"):
                component = self.parse_component()
                document.components[component.name] = component
            else:
                # A stray element replaces the implicit default page.
                content = self.parse_nodes()
                document.pages[DEFAULT_PAGE_NAME] = Page(name=DEFAULT_PAGE_NAME, content=content)

        logger.debug(
            "Parsed %s: %d layouts, %d pages, %d components",
            self.path or "<source>",
            len(document.layouts),
            len(document.pages),
            len(document.components),
        )
        return document

    def parse_app(self) -> App:
        self.advance()  # app
        name = self.expect_value(TokenType.IDENTIFIER, "app name")
        self.expect(TokenType.LBRACE)

        app = App(name=name)
        while not self.check(TokenType.RBRACE):
            if not self.check(TokenType.IDENTIFIER):
                raise self._unexpected()
            key = self.advance().value
            if key == "theme":
                self.expect(TokenType.COLON)
                app.theme = self.expect_value(TokenType.STRING, "theme name")
            elif key == "layout":
                self.expect(TokenType.COLON)
                app.layout = self.expect_value(TokenType.IDENTIFIER, "layout name")
            elif key == "routes":
                app.routes = self.parse_routes()
            else:
                logger.debug("Ignoring unknown app key '%s'", key)

        self.expect(TokenType.RBRACE)
        return app

    def parse_routes(self) -> Dict[str, str]:
        routes: Dict[str, str] = {}
        self.expect(TokenType.LBRACE)
        while not self.check(TokenType.RBRACE):
            path = self.expect_value(TokenType.STRING, "route path")
            self.expect(TokenType.COLON)
            routes[path] = self.expect_value(TokenType.IDENTIFIER, "component name")
        self.expect(TokenType.RBRACE)
        return routes

    def parse_layout(self) -> Layout:
        self.advance()  # layout
        name = self.expect_value(TokenType.IDENTIFIER, "layout name")
        return Layout(name=name, content=self.parse_block())

    def parse_page(self) -> Page:
        self.advance()  # page
        name = self.expect_value(TokenType.STRING, "page name")
        return Page(name=name, content=self.parse_block())

    def parse_block(self) -> List[Element]:
        """``{ element* }``"""
        self.expect(TokenType.LBRACE)
        elements: List[Element] = []
        while not self.check(TokenType.RBRACE):
            elements.extend(self.parse_nodes())
        self.expect(TokenType.RBRACE)
        return elements

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def parse_component(self) -> Component:
        self.advance()  # component
        name = self.expect_value(TokenType.IDENTIFIER, "component name")
        self.expect(TokenType.LBRACE)

        component = Component(name=name)
        while not self.check(TokenType.RBRACE):
            section = self.current.value if self.check(TokenType.IDENTIFIER) else None
            if section == "props" and self.peek().type is TokenType.LBRACE:
                self.advance()
                component.props.extend(self.parse_props())
            elif section == "state" and self.peek().type is TokenType.LBRACE:
                self.advance()
                component.state.extend(self.parse_state())
            elif section == "view" and self.peek().type is TokenType.LBRACE:
                self.advance()
                component.view.extend(self.parse_block())
            elif section == "style" and self.peek().type is TokenType.LBRACE:
                self.advance()
                component.style.extend(self.parse_style())
            else:
                component.view.extend(self.parse_nodes())

        self.expect(TokenType.RBRACE)
        return component

    def parse_props(self) -> List[Prop]:
        props: List[Prop] = []
        self.expect(TokenType.LBRACE)
        while not self.check(TokenType.RBRACE):
            prop = Prop(name=self.expect_value(TokenType.IDENTIFIER, "prop name"))
            if self.check(TokenType.COLON):
                self.advance()
                prop.type = self.expect_value(TokenType.IDENTIFIER, "prop type")
            props.append(prop)
        self.expect(TokenType.RBRACE)
        return props

    def parse_state(self) -> List[StateVar]:
        variables: List[StateVar] = []
        self.expect(TokenType.LBRACE)
        while not self.check(TokenType.RBRACE):
            name = self.expect_value(TokenType.IDENTIFIER, "state name")
            self.expect(TokenType.COLON)
            type_name = self.expect_value(TokenType.IDENTIFIER, "state type")
            default_value = None
            if self.check(TokenType.EQUALS):
                self.advance()
                if self.check(TokenType.NUMBER):
                    default_value = self.advance().value
                elif self.check(TokenType.STRING):
                    default_value = json.dumps(self.advance().value, ensure_ascii=False)
                else:
                    raise self._expected("default value")
            variables.append(StateVar(name=name, type=type_name, default_value=default_value))
        self.expect(TokenType.RBRACE)
        return variables

    def parse_style(self) -> List[StyleRule]:
        rules: List[StyleRule] = []
        self.expect(TokenType.LBRACE)
        while not self.check(TokenType.RBRACE):
            rules.append(self.parse_style_rule())
        self.expect(TokenType.RBRACE)
        return rules

    def parse_style_rule(self) -> StyleRule:
        rule = StyleRule(selector=self.expect_value(TokenType.IDENTIFIER, "style selector"))
        self.expect(TokenType.LBRACE)
        while not self.check(TokenType.RBRACE):
            prop_name = self.expect_value(TokenType.IDENTIFIER, "property name")
            self.expect(TokenType.COLON)
            if self.current.type in (TokenType.STRING, TokenType.IDENTIFIER):
                value = self.advance().value
            else:
                raise self._expected("property value")
            rule.properties.append(StyleProperty(name=prop_name, value=value))
        self.expect(TokenType.RBRACE)
        return rule

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def parse_nodes(self) -> List[Element]:
        """One element, or the text and interpolation run of a bare string."""
        if self.check(TokenType.STRING):
            return bare_string_elements(self.advance().value)
        return [self.parse_element()]

    def parse_element(self) -> Element:
        if not self.check(TokenType.IDENTIFIER):
            raise self._unexpected()

        name = self.advance().value
        if name == "slot":
            if self.check(TokenType.IDENTIFIER):
                return Slot(self.advance().value)
            return Slot("content")

        attributes = self.parse_attributes()

        if self.check(TokenType.STRING):
            children = split_interpolated_text(self.advance().value)
        elif self.check(TokenType.LBRACE):
            children = self.parse_block()
        else:
            children = []

        if name[0].isupper():
            return ComponentRef(name=name, attributes=attributes, children=children)
        return Tag(name=name, attributes=attributes, children=children)

    def parse_attributes(self) -> List[Attribute]:
        attributes: List[Attribute] = []
        while self.check(TokenType.IDENTIFIER):
            # An identifier that opens a block starts a sibling element.
            if self.peek().type is TokenType.LBRACE:
                break
            attr_name = self.advance().value
            if not self.check(TokenType.EQUALS):
                attributes.append(Attribute(attr_name, BooleanValue(True)))
                continue
            self.advance()  # =
            if self.check(TokenType.STRING):
                attributes.append(Attribute(attr_name, StringValue(self.advance().value)))
            elif self.check(TokenType.LBRACE):
                attributes.append(Attribute(attr_name, ExpressionValue(self.parse_attribute_expression())))
            else:
                attributes.append(Attribute(attr_name, BooleanValue(True)))
        return attributes

    def parse_attribute_expression(self) -> str:
        """Re-serialize the tokens between ``{`` and ``}`` into expression text.

        This is lossy on purpose: whitespace is not preserved and tokens with
        no textual mapping collapse to a single space.
        """
        opening = self.advance()  # {
        parts: List[str] = []
        while not self.check(TokenType.RBRACE):
            token = self.current
            if token.type is TokenType.EOF:
                raise InvalidSyntaxError(
                    "Unterminated attribute expression",
                    path=self.path,
                    line=opening.line,
                    column=opening.column,
                    hint="Close the expression with '}'.",
                )
            if token.type in (TokenType.IDENTIFIER, TokenType.NUMBER):
                parts.append(token.value)
            else:
                parts.append(EXPRESSION_TOKEN_TEXT.get(token.type, ' '))
            self.advance()
        self.advance()  # }
        return ''.join(parts)


def parse_source(source: str, path: Optional[str] = None) -> Document:
    """Parse a single source text into a partial document."""
    return Parser(source, path=path).parse()


__all__ = ["Parser", "parse_source", "DEFAULT_PAGE_NAME", "EXPRESSION_TOKEN_TEXT"]
