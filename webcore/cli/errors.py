"""
Error handling for the WebCore CLI.

Compiler errors (:class:`webcore.errors.WebCoreError`) already know how to
format themselves; this module adds the CLI-level error family and the
top-level handler that prints an error and exits.
"""

import os
import sys
import traceback
from typing import Any, Dict, Optional


# Maximum length for traceback output in CLI
_CLI_TRACE_LIMIT = 4000


class CLIError(Exception):
    """
    Base exception for all CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code
        hint: Optional suggestion for resolving the error
        context: Additional metadata about the error
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIConfigError(CLIError):
    """Invalid command-line configuration (for example an unknown build mode)."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_CONFIG_ERROR')
        super().__init__(message, **kwargs)


class CLIBuildError(CLIError):
    """The build could not write its output."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_BUILD_ERROR')
        super().__init__(message, **kwargs)


class CLIFileNotFoundError(CLIError):
    """The project directory or a required file does not exist."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_FILE_NOT_FOUND')
        super().__init__(message, **kwargs)


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False
) -> str:
    """
    Format an exception for CLI display.

    Exceptions exposing a ``format()`` method (all compiler errors) are
    rendered with it; CLI errors show their code, hint and, in verbose mode,
    their context.

    Examples:
        >>> print(format_cli_error(CLIConfigError("Bad mode", hint="Use dev or prod")))
        Error [CLI_CONFIG_ERROR]: Bad mode
        Hint: Use dev or prod
    """
    lines = []
    formatter = getattr(exc, "format", None)
    if callable(formatter) and not isinstance(exc, CLIError):
        lines.append(f"Error: {formatter()}")
    elif isinstance(exc, CLIError):
        lines.append(f"Error [{exc.code}]: {exc.message}")
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("\nContext:")
            for key, value in exc.context.items():
                lines.append(f"  {key}: {value}")
    else:
        lines.append(f"Error: {exc.__class__.__name__}: {exc}")

    if include_traceback:
        lines.append("\nTraceback:")
        lines.append(format_traceback_excerpt())

    return "\n".join(lines)


def format_traceback_excerpt() -> str:
    """Current exception traceback, truncated to a readable size."""
    trace = traceback.format_exc().strip()
    if len(trace) <= _CLI_TRACE_LIMIT:
        return trace
    return f"{trace[:_CLI_TRACE_LIMIT - 3]}..."


def _env_flag(name: str) -> bool:
    val = os.getenv(name)
    if val is None:
        return False
    return val.strip().lower() in {"1", "true", "yes", "on"}


def cli_verbose_enabled(verbose_flag: bool = False) -> bool:
    """Verbose output from ``--verbose`` or WEBCORE_VERBOSE/WEBCORE_DEBUG."""
    return verbose_flag or _env_flag("WEBCORE_VERBOSE") or _env_flag("WEBCORE_DEBUG")


def cli_reraise_enabled() -> bool:
    """Re-raise instead of exiting when WEBCORE_RERAISE or WEBCORE_DEBUG is set."""
    return _env_flag("WEBCORE_RERAISE") or _env_flag("WEBCORE_DEBUG")


def handle_cli_exception(
    exc: BaseException,
    *,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """
    Print ``exc`` to stderr and exit with ``exit_code``.

    Note:
        This function calls sys.exit() and does not return.
    """
    verbose_effective = cli_verbose_enabled(verbose)
    if cli_reraise_enabled():
        raise exc

    error_message = format_cli_error(
        exc,
        verbose=verbose_effective,
        include_traceback=verbose_effective
    )
    print(error_message, file=sys.stderr)
    sys.exit(exit_code)
