from __future__ import annotations

from pathlib import Path

import pytest

from webcore.errors import WebCoreConfigError
from webcore.theme import Theme, load_theme, theme_from_mapping


def test_load_theme(tmp_path: Path) -> None:
    path = tmp_path / "theme.toml"
    path.write_text(
        '[theme]\nname = "light"\n\n[theme.colors]\nprimary = "#3366ff"\n\n[theme.radius]\nmd = "8px"\n',
        encoding="utf-8",
    )
    theme = load_theme(path)
    assert theme == Theme(name="light", colors={"primary": "#3366ff"}, radius={"md": "8px"})
    assert theme.fonts == {}
    assert theme.breakpoints == {}


def test_missing_theme_table() -> None:
    with pytest.raises(WebCoreConfigError):
        theme_from_mapping({"colors": {}})


def test_theme_name_required() -> None:
    with pytest.raises(WebCoreConfigError):
        theme_from_mapping({"theme": {"colors": {"a": "b"}}})


def test_sections_must_be_tables() -> None:
    with pytest.raises(WebCoreConfigError):
        theme_from_mapping({"theme": {"name": "x", "colors": "red"}})


def test_unreadable_and_malformed_files(tmp_path: Path) -> None:
    with pytest.raises(WebCoreConfigError):
        load_theme(tmp_path / "missing.toml")
    bad = tmp_path / "theme.toml"
    bad.write_text("[theme\n", encoding="utf-8")
    with pytest.raises(WebCoreConfigError):
        load_theme(bad)
