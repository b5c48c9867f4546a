"""Theme records and ``theme.toml`` loading."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Dict, Mapping

from .errors import WebCoreConfigError

THEME_SECTIONS = ("colors", "fonts", "radius", "breakpoints")


@dataclass
class Theme:
    name: str
    colors: Dict[str, str] = field(default_factory=dict)
    fonts: Dict[str, str] = field(default_factory=dict)
    radius: Dict[str, str] = field(default_factory=dict)
    breakpoints: Dict[str, str] = field(default_factory=dict)


def _string_map(raw: Any, section: str, source: str) -> Dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise WebCoreConfigError(f"theme.{section} must be a table", path=source)
    return {str(key): str(value) for key, value in raw.items()}


def theme_from_mapping(data: Mapping[str, Any], *, source: str = "theme.toml") -> Theme:
    """Build a :class:`Theme` from the parsed ``[theme]`` table."""
    section = data.get("theme")
    if not isinstance(section, Mapping):
        raise WebCoreConfigError("Missing [theme] table", path=source)
    name = section.get("name")
    if not isinstance(name, str) or not name:
        raise WebCoreConfigError("theme.name must be a non-empty string", path=source)
    maps = {key: _string_map(section.get(key), key, source) for key in THEME_SECTIONS}
    return Theme(name=name, **maps)


def load_theme(theme_path: str | PathLike[str]) -> Theme:
    path = Path(theme_path)
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except OSError as exc:
        raise WebCoreConfigError(f"Failed to read theme file: {exc}", path=str(path)) from exc
    except tomllib.TOMLDecodeError as exc:
        raise WebCoreConfigError(f"Failed to parse theme file: {exc}", path=str(path)) from exc
    return theme_from_mapping(data, source=str(path))


__all__ = ["Theme", "THEME_SECTIONS", "theme_from_mapping", "load_theme"]
