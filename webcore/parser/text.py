"""Splitting of string content into text and interpolation nodes."""

from __future__ import annotations

from typing import List

from webcore.ast import Element, Interpolation, Text


def split_interpolated_text(text: str) -> List[Element]:
    """Split ``"Count: {n} now"`` into ``Text``/``Interpolation`` elements.

    Pairs are matched left to right without nesting. An opening brace with no
    closing brace after it is kept as literal text from that point on.
    """
    elements: List[Element] = []
    pos = 0
    while pos < len(text):
        start = text.find('{', pos)
        if start == -1:
            elements.append(Text(text[pos:]))
            break
        if start > pos:
            elements.append(Text(text[pos:start]))
        end = text.find('}', start)
        if end == -1:
            elements.append(Text(text[start:]))
            break
        elements.append(Interpolation(text[start + 1:end].strip()))
        pos = end + 1

    if not elements:
        elements.append(Text(text))
    return elements


def bare_string_elements(text: str) -> List[Element]:
    """A string standing on its own.

    ``"{name}"`` is a single interpolation and a string without braces at both
    ends is plain text. ``"{a} and {b}"`` is split like tag content.
    """
    if len(text) >= 2 and text.startswith('{') and text.endswith('}'):
        inner = text[1:-1]
        if '{' not in inner and '}' not in inner:
            return [Interpolation(inner)]
        return split_interpolated_text(text)
    return [Text(text)]


__all__ = ["split_interpolated_text", "bare_string_elements"]
