"""Loading of WebCore project trees into a merged :class:`Document`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Dict, List, Optional

from webcore.ast import Document, merge_documents
from webcore.config import ProjectConfig, load_project_config
from webcore.errors import WebCoreError
from webcore.parser import Parser
from webcore.theme import Theme, load_theme

logger = logging.getLogger(__name__)

SOURCE_EXTENSION = ".webc"
APP_FILENAME = "app.webc"
# Merge order; later directories override earlier ones on a name collision.
SOURCE_DIRECTORIES = ("layouts", "components", "pages")


@dataclass
class Project:
    config: ProjectConfig
    document: Document
    theme: Optional[Theme] = None


def _discover_source_files(src_dir: Path) -> List[Path]:
    """``app.webc`` first, then each source directory with its files sorted by name."""
    paths: List[Path] = []
    app_path = src_dir / APP_FILENAME
    if app_path.is_file():
        paths.append(app_path)
    for directory in SOURCE_DIRECTORIES:
        folder = src_dir / directory
        if not folder.is_dir():
            continue
        paths.extend(
            sorted(path for path in folder.iterdir() if path.is_file() and path.suffix == SOURCE_EXTENSION)
        )
    return paths


def _parse_file(source_path: Path) -> Document:
    text = source_path.read_text(encoding="utf-8")
    try:
        return Parser(text, path=str(source_path)).parse()
    except WebCoreError as exc:
        if exc.path is None:
            exc.with_path(str(source_path))
        raise


def load_document(src_dir: str | PathLike[str]) -> Document:
    """Parse every source file under ``src_dir`` and merge them into one document.

    A syntax error in any file aborts the load; the error carries the file path.
    """
    src = Path(src_dir)
    paths = _discover_source_files(src)
    if not paths:
        logger.warning("No %s files found under %s", SOURCE_EXTENSION, src)
    documents = []
    for path in paths:
        logger.debug("Parsing %s", path)
        documents.append(_parse_file(path))
    return merge_documents(documents)


def load_project(root_path: str | PathLike[str], *, env: Optional[Dict[str, str]] = None) -> Project:
    """Read ``webc.toml``, the optional ``theme.toml`` and all sources of a project."""
    config = load_project_config(Path(root_path), env=env)
    theme: Optional[Theme] = None
    if config.theme_path.is_file():
        theme = load_theme(config.theme_path)
        logger.debug("Loaded theme '%s'", theme.name)
    document = load_document(config.src_dir)
    logger.info(
        "Loaded %d page(s), %d layout(s), %d component(s) from %s",
        len(document.pages),
        len(document.layouts),
        len(document.components),
        config.src_dir,
    )
    return Project(config=config, document=document, theme=theme)


__all__ = ["Project", "SOURCE_EXTENSION", "load_document", "load_project"]
