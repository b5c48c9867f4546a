"""
Main entry point for the WebCore CLI when run as a module.

This allows the CLI to be executed using:
    python -m webcore.cli

or the equivalent ``webcore`` console script.
"""

from . import main

if __name__ == '__main__':
    main()
