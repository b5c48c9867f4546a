"""Unified error model for WebCore."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        if self.path and self.line is not None and self.column is not None:
            return f"{self.path}:{self.line}:{self.column}"
        if self.path and self.line is not None:
            return f"{self.path}:{self.line}"
        if self.line is not None and self.column is not None:
            return f"line {self.line}, column {self.column}"
        if self.path:
            return self.path
        return "unknown location"


class WebCoreError(Exception):
    """Base class for all compiler errors surfaced to users."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line, column=column)
        self.path = path
        self.line = line
        self.column = column
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def with_path(self, path: str) -> "WebCoreError":
        """Attach the source file path once the failing file is known."""
        self.path = path
        self.location.path = path
        return self

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        location_desc = self.location.describe()
        if location_desc != "unknown location":
            meta_parts.append(location_desc)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class WebCoreSyntaxError(WebCoreError):
    """Raised when a source file cannot be parsed."""

    code = "SYNTAX_ERROR"


class UnexpectedTokenError(WebCoreSyntaxError):
    """The current token matches no grammar alternative."""

    code = "UNEXPECTED_TOKEN"

    def __init__(self, found: str, **kwargs) -> None:
        self.found = found
        super().__init__(f"Unexpected token {found}", **kwargs)


class ExpectedTokenError(WebCoreSyntaxError):
    """An ``expect`` check failed; the message names the expected kind."""

    code = "EXPECTED_TOKEN"

    def __init__(self, expected: str, **kwargs) -> None:
        self.expected = expected
        super().__init__(f"Expected {expected}", **kwargs)


class InvalidSyntaxError(WebCoreSyntaxError):
    """Structural violation that is not tied to a single token kind."""

    code = "INVALID_SYNTAX"


class GenerationError(WebCoreError):
    """Raised when HTML generation for a page cannot proceed."""

    code = "GENERATION_ERROR"


class PageNotFoundError(GenerationError):
    code = "PAGE_NOT_FOUND"

    def __init__(self, page_name: str) -> None:
        self.page_name = page_name
        super().__init__(f"Page '{page_name}' not found")


class LayoutNotFoundError(GenerationError):
    code = "LAYOUT_NOT_FOUND"

    def __init__(self, tried: Sequence[str]) -> None:
        self.tried = tuple(tried)
        super().__init__(
            f"No layout found (tried {' and '.join(self.tried)})",
            hint="Declare a layout named MainLayout containing 'slot content'.",
        )


class ComponentCycleError(GenerationError):
    """A component expands, directly or through others, into itself."""

    code = "COMPONENT_CYCLE"

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__(f"Component cycle detected: {' -> '.join(self.chain)}")


class CSSProcessingError(WebCoreError):
    """Raised when the CSS library rejects a stylesheet."""

    code = "CSS_ERROR"


class WebCoreConfigError(WebCoreError):
    """Raised when ``webc.toml`` or ``theme.toml`` is missing or malformed."""

    code = "CONFIG_ERROR"


__all__ = [
    "ErrorLocation",
    "WebCoreError",
    "WebCoreSyntaxError",
    "UnexpectedTokenError",
    "ExpectedTokenError",
    "InvalidSyntaxError",
    "GenerationError",
    "PageNotFoundError",
    "LayoutNotFoundError",
    "ComponentCycleError",
    "CSSProcessingError",
    "WebCoreConfigError",
]
