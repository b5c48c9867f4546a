"""Console output helpers for CLI commands."""

import json
from dataclasses import asdict
from typing import Iterable

from webcore.ast import Document


def print_success(message: str) -> None:
    """
    Print success message with checkmark prefix.

    Examples:
        >>> print_success("Build completed successfully")
        ✓ Build completed successfully
    """
    print(f"✓ {message}")


def print_written_files(paths: Iterable, root) -> None:
    for path in paths:
        try:
            label = path.relative_to(root)
        except ValueError:
            label = path
        print(f"  {label}")


def document_to_json(document: Document) -> str:
    """Serialize a merged document for ``--print-ast``."""
    return json.dumps(asdict(document), indent=2, ensure_ascii=False)
