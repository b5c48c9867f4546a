"""HTML page generation.

A page is rendered by walking the selected layout and substituting the page
content for its ``slot content``. Component references are inlined from the
document's component map, and every ``on:EVENT`` attribute is turned into an
element id plus a native event attribute that calls into the generated
runtime. The handler records collected on the way are returned next to the
HTML so the site builder can compile the dispatch table.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from webcore.ast import (
    Attribute,
    BooleanValue,
    ComponentRef,
    Document,
    Element,
    ExpressionValue,
    Interpolation,
    Slot,
    StringValue,
    Tag,
    Text,
)
from webcore.errors import ComponentCycleError, LayoutNotFoundError, PageNotFoundError

logger = logging.getLogger(__name__)

LAYOUT_CANDIDATES = ("MainLayout", "default")
CONTENT_SLOT = "content"
NATIVE_EVENTS = ("click", "submit", "change", "input")
HANDLER_ID_PREFIX = "btn"


@dataclass
class HtmlPageOptions:
    lang: str = "fr"
    title: str = "WebCore App"


@dataclass
class HandlerMapping:
    """Binding between a generated element id and a compiled event expression."""

    id: str
    event_type: str
    expression: str


@dataclass
class HtmlGenerationResult:
    html: str
    handlers: List[HandlerMapping] = field(default_factory=list)
    # Last handler number allocated; feed it back as ``start_id`` for the next page.
    last_id: int = 0


def html_escape(text: str) -> str:
    """Escape ``& < > " '`` for use in text and double-quoted attributes."""
    return html.escape(text, quote=True)


class _ElementResolver:
    """Renders view trees for one page, tracking handler ids and the component chain."""

    def __init__(self, document: Document, start_id: int = 0):
        self.document = document
        self.counter = start_id
        self.handlers: List[HandlerMapping] = []
        self.chain: List[str] = []

    def resolve_layout(self, layout_content: Sequence[Element], page_content: Sequence[Element]) -> str:
        return self._render_all(layout_content, page_content)

    def _render_all(self, elements: Sequence[Element], slot_content: Optional[Sequence[Element]]) -> str:
        return "".join(self._render(element, slot_content) for element in elements)

    def _render(self, element: Element, slot_content: Optional[Sequence[Element]]) -> str:
        if isinstance(element, Text):
            return html_escape(element.text)
        if isinstance(element, Interpolation):
            return self._render_interpolation(element.expression)
        if isinstance(element, Slot):
            if element.name == CONTENT_SLOT and slot_content is not None:
                return self._render_all(slot_content, None)
            return f"<!-- Slot: {element.name} -->"
        if isinstance(element, ComponentRef):
            return self._render_component(element, slot_content)
        if isinstance(element, Tag):
            return self._render_tag(element, slot_content)
        raise TypeError(f"Unsupported element type: {type(element).__name__}")

    def _render_tag(self, tag: Tag, slot_content: Optional[Sequence[Element]]) -> str:
        if tag.name == "text":
            return self._render_all(tag.children, slot_content)

        name = "a" if tag.name == "link" else tag.name
        is_link = name == "a"
        href: Optional[str] = None
        parts = [f"<{name}"]
        for attr in tag.attributes:
            if is_link and attr.name == "to" and isinstance(attr.value, StringValue):
                href = attr.value.value
                continue
            parts.append(self._render_attribute(attr))
        if is_link:
            if href is not None:
                parts.append(f' href="{html_escape(href)}"')
            elif tag.attribute("href") is None:
                parts.append(' href="#"')
        parts.append(">")
        parts.append(self._render_all(tag.children, slot_content))
        parts.append(f"</{name}>")
        return "".join(parts)

    def _render_component(self, ref: ComponentRef, slot_content: Optional[Sequence[Element]]) -> str:
        component = self.document.components.get(ref.name)
        if component is None:
            logger.debug("Component '%s' is not defined; emitting it as a plain tag", ref.name)
            parts = [f"<{ref.name}"]
            parts.extend(self._render_attribute(attr) for attr in ref.attributes)
            parts.append(">")
            parts.append(self._render_all(ref.children, slot_content))
            parts.append(f"</{ref.name}>")
            return "".join(parts)

        if ref.name in self.chain:
            cycle = self.chain[self.chain.index(ref.name):] + [ref.name]
            raise ComponentCycleError(cycle)
        self.chain.append(ref.name)
        try:
            # A component body is outside the layout tree: its slots are never filled.
            return self._render_all(component.view, None)
        finally:
            self.chain.pop()

    def _render_attribute(self, attr: Attribute) -> str:
        value = attr.value
        if isinstance(value, StringValue):
            return f' {attr.name}="{html_escape(value.value)}"'
        if isinstance(value, BooleanValue):
            return f" {attr.name}" if value.value else ""
        if isinstance(value, ExpressionValue) and attr.is_event:
            return self._bind_event(attr.name[len("on:"):], value.source)
        return f' {attr.name}="{{}}"'

    def _bind_event(self, event_type: str, expression: str) -> str:
        self.counter += 1
        handler_id = f"{HANDLER_ID_PREFIX}{self.counter}"
        self.handlers.append(HandlerMapping(id=handler_id, event_type=event_type, expression=expression))
        if event_type in NATIVE_EVENTS:
            call = f"webcore_handle_{event_type}('{handler_id}')"
        else:
            call = f"webcore_handle_event('{event_type}','{handler_id}')"
        return f' id="{handler_id}" on{event_type}="{call}"'

    @staticmethod
    def _render_interpolation(expression: str) -> str:
        start = expression.find("{")
        end = expression.find("}")
        if start != -1 and end > start:
            prefix = html_escape(expression[:start])
            name = html_escape(expression[start + 1:end].strip())
            suffix = html_escape(expression[end + 1:])
            return f'{prefix}<span data-webcore-interpolation="{name}">0</span>{suffix}'
        return f'<span data-webcore-interpolation="{html_escape(expression)}">0</span>'


def select_layout(document: Document):
    for name in LAYOUT_CANDIDATES:
        layout = document.layouts.get(name)
        if layout is not None:
            return layout
    raise LayoutNotFoundError(LAYOUT_CANDIDATES)


def generate_html(
    document: Document,
    page_name: str,
    options: Optional[HtmlPageOptions] = None,
    *,
    start_id: int = 0,
) -> HtmlGenerationResult:
    """Render the page called ``page_name`` inside ``MainLayout`` (or ``default``).

    Handler ids continue from ``start_id``; the last id used is reported in
    :attr:`HtmlGenerationResult.last_id`.
    """
    options = options or HtmlPageOptions()
    page = document.pages.get(page_name)
    if page is None:
        raise PageNotFoundError(page_name)
    layout = select_layout(document)

    resolver = _ElementResolver(document, start_id=start_id)
    body = resolver.resolve_layout(layout.content, page.content)
    logger.debug(
        "Rendered page '%s' with layout '%s' (%d handlers)",
        page_name,
        layout.name,
        len(resolver.handlers),
    )

    html_parts = [
        "<!DOCTYPE html>",
        f'<html lang="{html_escape(options.lang)}">',
        "<head>",
        '  <meta charset="UTF-8">',
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"  <title>{html_escape(options.title)}</title>",
        '  <link rel="stylesheet" href="theme.css">',
        "</head>",
        "<body>",
        body,
        '  <script src="webcore.js"></script>',
        "</body>",
        "</html>",
    ]
    return HtmlGenerationResult(
        html="\n".join(html_parts),
        handlers=resolver.handlers,
        last_id=resolver.counter,
    )


__all__ = [
    "HtmlPageOptions",
    "HandlerMapping",
    "HtmlGenerationResult",
    "html_escape",
    "select_layout",
    "generate_html",
]
