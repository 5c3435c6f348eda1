#!/usr/bin/env python3
"""
claude-setup CLI - scaffold the assistant configuration for a project.

Usage:
    claude-setup                        - run the wizard in the current directory
    claude-setup --project-dir ~/code/app
    claude-setup -v                     - debug logging on stderr

Config: CLAUDE_SETUP_* environment variables (see core/config.py).
        The editor falls back to $EDITOR, then nano.
"""

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from core.config import get_settings
from core.logging import setup_logging
from wizard.setup import run_setup_wizard


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="claude-setup",
        description="Set up Claude Code configuration for a project"
    )
    parser.add_argument(
        "--project-dir", type=Path, default=None,
        help="Project root to set up (default: current directory)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output")

    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"ERROR: invalid CLAUDE_SETUP_* setting\n{e}", file=sys.stderr)
        return 1
    if args.no_color:
        settings.no_color = True
    if args.verbose:
        settings.verbose = True

    setup_logging(verbose=settings.verbose, log_file=settings.log_file)

    project_dir = args.project_dir or Path.cwd()
    if not project_dir.is_dir():
        print(f"ERROR: {project_dir} is not a directory", file=sys.stderr)
        return 1

    return run_setup_wizard(project_dir, settings=settings)


if __name__ == "__main__":
    sys.exit(main())
