"""Code generators turning a parsed WebCore document into HTML, CSS and JavaScript."""

from .css import generate_component_css, generate_theme_css
from .css_processor import format_css, minify_css, process_css
from .expressions import compile_expression
from .html import HandlerMapping, HtmlGenerationResult, HtmlPageOptions, generate_html, html_escape
from .js import generate_runtime_js
from .site import SiteBuild, SiteOptions, generate_site, write_site

__all__ = [
    "HandlerMapping",
    "HtmlGenerationResult",
    "HtmlPageOptions",
    "generate_html",
    "html_escape",
    "compile_expression",
    "generate_runtime_js",
    "generate_theme_css",
    "generate_component_css",
    "process_css",
    "minify_css",
    "format_css",
    "SiteOptions",
    "SiteBuild",
    "generate_site",
    "write_site",
]
