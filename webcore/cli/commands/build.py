"""
Build command implementation.

Loads a WebCore project (``webc.toml``, ``theme.toml`` and the ``.webc``
sources), compiles it and writes the static site into the output directory.
"""

import argparse
import logging
from pathlib import Path

from webcore.codegen import SiteOptions, generate_site, write_site
from webcore.config import validate_mode
from webcore.errors import WebCoreConfigError
from webcore.loader import load_project

from ..errors import CLIBuildError, CLIConfigError, CLIFileNotFoundError, handle_cli_exception
from ..output import document_to_json, print_success, print_written_files

logger = logging.getLogger(__name__)


def _check_output_dir(out_dir: Path, root: Path, *inputs: Path) -> None:
    """Refuse output directories whose cleanup would delete project files."""
    protected = [Path.cwd(), root] + [path.resolve() for path in inputs]
    for path in protected:
        if path.is_relative_to(out_dir):
            raise CLIBuildError(
                f"Refusing to use {out_dir} as the output directory: it contains {path}",
                hint="The output directory is deleted on every build; pick a directory such as dist.",
                context={"out_dir": str(out_dir)},
            )


def cmd_build(args: argparse.Namespace) -> None:
    """
    Handle the 'build' subcommand.

    This command:
    1. Reads the project configuration and theme
    2. Parses and merges every source file
    3. Generates pages, the index listing, theme.css and webcore.js
    4. Recreates the output directory and copies public assets into it

    Args:
        args: Parsed command-line arguments containing:
            - project: Project root directory (default: current directory)
            - out: Output directory override (optional)
            - mode: Build mode override, ``dev`` or ``prod`` (optional)
            - print_ast: Print the merged document and exit (optional)
    """
    try:
        root = Path(getattr(args, "project", None) or ".").resolve()
        if not root.is_dir():
            raise CLIFileNotFoundError(
                f"Project directory not found: {root}",
                hint="Pass the directory that contains webc.toml.",
            )

        project = load_project(root)
        config = project.config

        mode_override = getattr(args, "mode", None)
        if mode_override:
            try:
                config.mode = validate_mode(mode_override)
            except WebCoreConfigError as exc:
                raise CLIConfigError(exc.message, hint=exc.hint) from exc

        if getattr(args, "print_ast", False):
            print(document_to_json(project.document))
            return

        # --out is taken relative to the working directory, [build] out to the project.
        out_override = getattr(args, "out", None)
        out_dir = Path(out_override).resolve() if out_override else config.out_dir.resolve()
        _check_output_dir(out_dir, root, config.src_dir, config.public_dir)

        build = generate_site(
            project.document,
            project.theme,
            SiteOptions(lang=config.lang, title=config.title, mode=config.mode),
        )
        try:
            written = write_site(build, out_dir, config.public_dir)
        except OSError as exc:
            raise CLIBuildError(
                f"Failed to write build output: {exc}",
                context={"out_dir": str(out_dir)},
            ) from exc

        logger.debug("Wrote %d file(s) to %s", len(written), out_dir)
        if getattr(args, "verbose", False):
            print_written_files(written, out_dir)
        print_success(f"Built {len(build.pages)} page(s) in {out_dir} [{config.mode}]")

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))
