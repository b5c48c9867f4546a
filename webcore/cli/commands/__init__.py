"""Subcommand implementations."""

from .build import cmd_build

__all__ = ["cmd_build"]
