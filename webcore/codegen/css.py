"""Stylesheet text for ``theme.css``: theme custom properties and component rules."""

from __future__ import annotations

from typing import Iterable, List

from webcore.ast import Component
from webcore.theme import Theme

THEME_PREFIXES = (
    ("colors", "color"),
    ("fonts", "font"),
    ("radius", "radius"),
    ("breakpoints", "breakpoint"),
)


def generate_theme_css(theme: Theme) -> str:
    """Render every theme entry as a ``--prefix-key`` custom property on ``:root``."""
    lines = [":root {"]
    for section, prefix in THEME_PREFIXES:
        for key, value in getattr(theme, section).items():
            lines.append(f"  --{prefix}-{key}: {value};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def generate_component_css(components: Iterable[Component]) -> str:
    blocks: List[str] = []
    for component in components:
        for rule in component.style:
            body = "".join(f"  {prop.name}: {prop.value};\n" for prop in rule.properties)
            blocks.append(f"{rule.selector} {{\n{body}}}\n")
    return "\n".join(blocks)


__all__ = ["generate_theme_css", "generate_component_css", "THEME_PREFIXES"]
