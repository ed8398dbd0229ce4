"""Flags shared by several commands."""
from __future__ import annotations

import argparse
from pathlib import Path


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", help="Print a single JSON document on stdout")


def add_project_dir_flag(parser: argparse.ArgumentParser) -> None:
    """Register ``--project-dir``/``-C``, the repository a command works on."""
    parser.add_argument(
        "--project-dir",
        "-C",
        dest="project_dir",
        metavar="DIR",
        default=".",
        help="Project root (default: current directory)",
    )


def add_force_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--force", "-f", action="store_true", help="Overwrite existing files")


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug messages to stderr")


def resolve_project_dir(args: argparse.Namespace) -> Path:
    """Return the absolute project directory selected on the command line.

    Raises:
        NotADirectoryError: The path is missing or is not a directory.
    """
    raw = getattr(args, "project_dir", None) or "."
    path = Path(raw).expanduser()
    if not path.is_dir():
        raise NotADirectoryError(f"Not a directory: {raw}")
    return path.resolve()


__all__ = [
    "add_json_flag",
    "add_project_dir_flag",
    "add_force_flag",
    "add_verbose_flag",
    "resolve_project_dir",
]
