"""Whole-site assembly: every page, the index listing, ``theme.css`` and ``webcore.js``.

:func:`generate_site` is pure and returns a :class:`SiteBuild`;
:func:`write_site` puts a build on disk.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from webcore.ast import Document, Layout, Page, Slot, Tag, Text
from webcore.errors import LayoutNotFoundError
from webcore.theme import Theme

from .css import generate_component_css, generate_theme_css
from .css_processor import process_css
from .html import HandlerMapping, HtmlPageOptions, generate_html, html_escape, select_layout
from .js import generate_runtime_js

logger = logging.getLogger(__name__)

DEFAULT_PAGE_NAME = "index"
INDEX_FILE = "index.html"
INDEX_FALLBACK_FILE = "pages.html"
CSS_FILE = "theme.css"
JS_FILE = "webcore.js"
BUILD_MODES = ("dev", "prod")


@dataclass
class SiteOptions:
    lang: str = "fr"
    title: str = "WebCore App"
    mode: str = "dev"

    @property
    def minify(self) -> bool:
        return self.mode == "prod"

    def page_options(self) -> HtmlPageOptions:
        return HtmlPageOptions(lang=self.lang, title=self.title)


@dataclass
class SiteBuild:
    """Every artifact of one build, keyed by output file name."""

    pages: Dict[str, str] = field(default_factory=dict)
    css: str = ""
    js: str = ""
    index_file: str = INDEX_FILE
    index_html: str = ""
    handlers: List[HandlerMapping] = field(default_factory=list)

    def files(self) -> Dict[str, str]:
        files = {f"{name}.html": html for name, html in self.pages.items()}
        files[CSS_FILE] = self.css
        files[JS_FILE] = self.js
        files[self.index_file] = self.index_html
        return files


def default_page() -> Page:
    return Page(
        name=DEFAULT_PAGE_NAME,
        content=[
            Tag("h1", children=[Text("Welcome to WebCore")]),
            Tag("p", children=[Text("This is a default page.")]),
        ],
    )


def _page_targets(document: Document) -> Tuple[Document, List[str]]:
    """The document to render from and the page names to render, in order."""
    for component in document.page_components():
        document = document.with_page(Page(name=component.name, content=list(component.view)))
    targets = sorted(document.pages)

    if not targets:
        logger.info("No pages or *Page components found; generating the default page")
        document = document.with_page(default_page())
        try:
            select_layout(document)
        except LayoutNotFoundError:
            document = document.with_layout(Layout(name="default", content=[Slot("content")]))
        targets = [DEFAULT_PAGE_NAME]
    return document, targets


def render_index(page_names: List[str], lang: str = "fr") -> str:
    """Listing of every generated page, sorted by name."""
    html_parts = [
        "<!DOCTYPE html>",
        f'<html lang="{html_escape(lang)}">',
        "<head>",
        '  <meta charset="UTF-8">',
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">',
        "  <title>Index</title>",
        f'  <link rel="stylesheet" href="{CSS_FILE}">',
        "</head>",
        "<body>",
        "<h1>Pages</h1>",
        "<ul>",
    ]
    for name in sorted(page_names):
        label = html_escape(name)
        html_parts.append(f'  <li><a href="{label}.html">{label}</a></li>')
    html_parts.extend(["</ul>", f'<script src="{JS_FILE}"></script>', "</body>", "</html>"])
    return "\n".join(html_parts) + "\n"


def generate_css(document: Document, theme: Optional[Theme], *, minify: bool) -> str:
    chunks: List[str] = []
    if theme is not None:
        chunks.append(generate_theme_css(theme))
    component_css = generate_component_css(document.components[name] for name in sorted(document.components))
    if component_css:
        chunks.append(component_css)
    return process_css("\n".join(chunks), minify)


def generate_site(
    document: Document,
    theme: Optional[Theme] = None,
    options: Optional[SiteOptions] = None,
) -> SiteBuild:
    """Compile ``document`` into a :class:`SiteBuild`.

    Pages are rendered in name order and share one handler-id sequence, so
    ids never collide across pages and repeated builds are identical.
    """
    options = options or SiteOptions()
    render_doc, targets = _page_targets(document)
    build = SiteBuild()

    next_id = 0
    for name in targets:
        result = generate_html(render_doc, name, options.page_options(), start_id=next_id)
        next_id = result.last_id
        build.pages[name] = result.html
        build.handlers.extend(result.handlers)
        logger.info("Generated %s.html", name)

    build.css = generate_css(document, theme, minify=options.minify)
    components = [document.components[name] for name in sorted(document.components)]
    build.js = generate_runtime_js(build.handlers, components)

    if DEFAULT_PAGE_NAME in build.pages:
        build.index_file = INDEX_FALLBACK_FILE
    build.index_html = render_index(list(build.pages), lang=options.lang)
    return build


def copy_public_assets(public_dir: Path, out_dir: Path) -> int:
    copied = 0
    for source in sorted(public_dir.rglob("*")):
        if source.is_dir():
            continue
        target = out_dir / source.relative_to(public_dir)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)
        copied += 1
    return copied


def write_site(build: SiteBuild, out_dir: Path, public_dir: Optional[Path] = None) -> List[Path]:
    """Recreate ``out_dir`` from scratch and write ``build`` (plus public assets) into it."""
    out_dir = Path(out_dir)
    if out_dir.exists():
        shutil.rmtree(out_dir)
    out_dir.mkdir(parents=True)

    written: List[Path] = []
    for filename, content in build.files().items():
        path = out_dir / filename
        path.write_text(content, encoding="utf-8")
        written.append(path)

    if public_dir is not None and Path(public_dir).is_dir():
        count = copy_public_assets(Path(public_dir), out_dir)
        logger.info("Copied %d public asset(s) from %s", count, public_dir)
    return written


__all__ = [
    "SiteOptions",
    "SiteBuild",
    "BUILD_MODES",
    "default_page",
    "render_index",
    "generate_css",
    "generate_site",
    "copy_public_assets",
    "write_site",
]
