"""CSS post-processing: validation, pretty-printing and minification.

``tinycss2`` parses the stylesheet (every parse error is fatal) and drives the
pretty printer used for development builds. Production builds are minified
with ``rcssmin`` once the stylesheet has been validated.
"""

from __future__ import annotations

import logging
from typing import List

import rcssmin
import tinycss2

from webcore.errors import CSSProcessingError

logger = logging.getLogger(__name__)

# At-rules whose block holds nested rules rather than declarations.
NESTED_AT_RULES = frozenset({"media", "supports", "document", "layer", "container", "scope"})
INDENT = "  "


def _raise_parse_error(error) -> None:
    raise CSSProcessingError(
        f"Failed to parse CSS: {error.message}",
        line=error.source_line,
        column=error.source_column,
    )


def _format_declarations(content, depth: int) -> List[str]:
    pad = INDENT * depth
    lines: List[str] = []
    for node in tinycss2.parse_blocks_contents(content, skip_comments=True, skip_whitespace=True):
        if node.type == "error":
            _raise_parse_error(node)
        if node.type == "declaration":
            value = tinycss2.serialize(node.value).strip()
            if node.important:
                value += " !important"
            lines.append(f"{pad}{node.name}: {value};")
        else:
            lines.extend(_format_rule(node, depth))
    return lines


def _format_rule(node, depth: int) -> List[str]:
    pad = INDENT * depth
    if node.type == "error":
        _raise_parse_error(node)
    if node.type == "qualified-rule":
        selector = " ".join(tinycss2.serialize(node.prelude).split())
        return [f"{pad}{selector} {{", *_format_declarations(node.content, depth + 1), f"{pad}}}"]
    if node.type == "at-rule":
        prelude = " ".join(tinycss2.serialize(node.prelude).split())
        head = f"@{node.at_keyword} {prelude}".rstrip()
        if node.content is None:
            return [f"{pad}{head};"]
        if node.lower_at_keyword in NESTED_AT_RULES:
            body: List[str] = []
            nested = tinycss2.parse_rule_list(node.content, skip_comments=True, skip_whitespace=True)
            for child in nested:
                body.extend(_format_rule(child, depth + 1))
            return [f"{pad}{head} {{", *body, f"{pad}}}"]
        return [f"{pad}{head} {{", *_format_declarations(node.content, depth + 1), f"{pad}}}"]
    return []


def _parse(css: str):
    rules = tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True)
    for node in rules:
        if node.type == "error":
            _raise_parse_error(node)
    return rules


def format_css(css: str) -> str:
    """Validate and pretty-print ``css`` with two-space indentation."""
    blocks = ["\n".join(_format_rule(node, 0)) for node in _parse(css)]
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"


def minify_css(css: str) -> str:
    """Validate ``css`` and return its minified form."""
    format_css(css)
    return rcssmin.cssmin(css)


def process_css(css: str, minify: bool) -> str:
    result = minify_css(css) if minify else format_css(css)
    logger.debug("Processed stylesheet (%d -> %d bytes, minify=%s)", len(css), len(result), minify)
    return result


__all__ = ["process_css", "minify_css", "format_css"]
