"""Document-level AST nodes: app, layouts, pages and components."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional

from .elements import Element

logger = logging.getLogger(__name__)


@dataclass
class App:
    """Informational app declaration; generation does not depend on it."""

    name: str
    theme: Optional[str] = None
    layout: Optional[str] = None
    routes: Dict[str, str] = field(default_factory=dict)


@dataclass
class Layout:
    name: str
    content: List[Element] = field(default_factory=list)


@dataclass
class Page:
    name: str
    content: List[Element] = field(default_factory=list)


@dataclass
class Prop:
    name: str
    type: Optional[str] = None


@dataclass
class StateVar:
    name: str
    type: str
    # JavaScript literal text: numbers verbatim, strings quoted.
    default_value: Optional[str] = None


@dataclass
class StyleProperty:
    name: str
    value: str


@dataclass
class StyleRule:
    selector: str
    properties: List[StyleProperty] = field(default_factory=list)


@dataclass
class Component:
    name: str
    props: List[Prop] = field(default_factory=list)
    state: List[StateVar] = field(default_factory=list)
    view: List[Element] = field(default_factory=list)
    style: List[StyleRule] = field(default_factory=list)

    @property
    def is_page(self) -> bool:
        return self.name.endswith("Page")


@dataclass
class Document:
    app: Optional[App] = None
    layouts: Dict[str, Layout] = field(default_factory=dict)
    pages: Dict[str, Page] = field(default_factory=dict)
    components: Dict[str, Component] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return self.app is None and not (self.layouts or self.pages or self.components)

    def page_components(self) -> List[Component]:
        """Components rendered as standalone pages (name ends with ``Page``)."""
        return [self.components[name] for name in sorted(self.components) if self.components[name].is_page]

    def with_page(self, page: Page) -> "Document":
        """Return a new document that also contains ``page``."""
        pages = dict(self.pages)
        pages[page.name] = page
        return replace(self, pages=pages)

    def with_layout(self, layout: Layout) -> "Document":
        layouts = dict(self.layouts)
        layouts[layout.name] = layout
        return replace(self, layouts=layouts)


def _merge_named(target: Dict[str, object], incoming: Dict[str, object], kind: str) -> None:
    for name, value in incoming.items():
        if name in target:
            logger.debug("%s '%s' redefined; later definition wins", kind, name)
        target[name] = value


def merge_documents(documents: Iterable[Document]) -> Document:
    """Combine partial documents; on a name collision the later one wins."""
    merged = Document()
    for document in documents:
        if document.app is not None:
            merged.app = document.app
        _merge_named(merged.layouts, document.layouts, "Layout")
        _merge_named(merged.pages, document.pages, "Page")
        _merge_named(merged.components, document.components, "Component")
    return merged


__all__ = [
    "App",
    "Layout",
    "Page",
    "Prop",
    "StateVar",
    "StyleProperty",
    "StyleRule",
    "Component",
    "Document",
    "merge_documents",
]
