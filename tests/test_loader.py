from __future__ import annotations

import pytest

from webcore.ast import Tag, Text
from webcore.errors import ExpectedTokenError
from webcore.loader import load_document, load_project

PROJECT = {
    "webc.toml": '[app]\ntitle = "Demo"\n',
    "theme.toml": '[theme]\nname = "light"\n[theme.colors]\nprimary = "#000"\n',
    "src/app.webc": "app Demo { layout: MainLayout }\n",
    "src/layouts/main.webc": "layout MainLayout { main { slot content } }\n",
    "src/components/card.webc": 'component Card { view { p "card" } }\n',
    "src/pages/a_home.webc": 'page "home" { p "first" }\n',
    "src/pages/b_home.webc": 'page "home" { p "second" }\n',
    "src/pages/notes.txt": "ignored",
}


def test_load_project(write_project) -> None:
    project = load_project(write_project(PROJECT), env={})
    assert project.config.title == "Demo"
    assert project.theme.name == "light"
    document = project.document
    assert document.app.layout == "MainLayout"
    assert set(document.layouts) == {"MainLayout"}
    assert set(document.components) == {"Card"}
    # Files are merged in name order; the later definition wins.
    assert document.pages["home"].content == [Tag("p", children=[Text("second")])]


def test_theme_is_optional(write_project) -> None:
    files = dict(PROJECT)
    del files["theme.toml"]
    assert load_project(write_project(files), env={}).theme is None


def test_pages_directory_overrides_components(write_project) -> None:
    root = write_project(
        {
            "src/components/card.webc": 'component Card { view { p "component dir" } }',
            "src/pages/card.webc": 'component Card { view { p "pages dir" } }',
        }
    )
    document = load_document(root / "src")
    assert document.components["Card"].view == [Tag("p", children=[Text("pages dir")])]


def test_syntax_error_carries_file_path(write_project) -> None:
    root = write_project({"src/pages/broken.webc": 'page "x" p'})
    with pytest.raises(ExpectedTokenError) as excinfo:
        load_document(root / "src")
    assert excinfo.value.path.endswith("broken.webc")
    assert "broken.webc" in excinfo.value.format()


def test_missing_source_directory_gives_empty_document(tmp_path) -> None:
    assert load_document(tmp_path / "src").is_empty()
