import textwrap
from pathlib import Path
from typing import Callable, Dict

import pytest

from webcore.ast import Document, Layout, Page, Slot
from webcore.parser import parse_source


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture
def parse() -> Callable[[str], Document]:
    """Parse dedented source text into a document."""

    def _parse(source: str) -> Document:
        return parse_source(textwrap.dedent(source), path="test.webc")

    return _parse


@pytest.fixture
def page_document() -> Callable[..., Document]:
    """Document with a bare ``slot content`` layout and one page named ``home``."""

    def _build(*content, components=None) -> Document:
        return Document(
            layouts={"MainLayout": Layout("MainLayout", [Slot("content")])},
            pages={"home": Page("home", list(content))},
            components=dict(components or {}),
        )

    return _build


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """Write ``{relative path: text}`` under a fresh project root and return it."""

    def _write(files: Dict[str, str]) -> Path:
        root = tmp_path / "site"
        for relative, text in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(text), encoding="utf-8")
        return root

    return _write
