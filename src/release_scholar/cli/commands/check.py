"""
Release readiness check command.

SUMMARY: Check whether the project is ready to be released

Exit codes: 0 when no check failed, 1 when at least one did, 2 when the
project directory or its configuration is unusable.
"""

from __future__ import annotations

import argparse
import os
import sys

from release_scholar.cli import (
    OutputFormatter,
    add_json_flag,
    add_project_dir_flag,
    add_verbose_flag,
    resolve_project_dir,
)
from release_scholar.core.check import run_check
from release_scholar.core.config import load_config
from release_scholar.core.exceptions import ConfigError
from release_scholar.core.stdlib_logging import configure_logging

SUMMARY = "Check whether the project is ready to be released"

EXIT_NOT_READY = 1
EXIT_USAGE = 2


def register_args(parser: argparse.ArgumentParser) -> None:
    add_project_dir_flag(parser)
    add_json_flag(parser)
    add_verbose_flag(parser)


def _use_color() -> bool:
    return sys.stdout.isatty() and "NO_COLOR" not in os.environ


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        project_dir = resolve_project_dir(args)
    except NotADirectoryError as exc:
        formatter.error(exc, error_code="invalid_project_dir")
        return EXIT_USAGE

    try:
        config = load_config(project_dir)
    except ConfigError as exc:
        formatter.error(exc, error_code="invalid_config")
        return EXIT_USAGE

    configure_logging("DEBUG" if getattr(args, "verbose", False) else config.log_level)

    outcome = run_check(project_dir, config)

    if formatter.json_mode:
        formatter.json_output({"project_dir": str(project_dir), **outcome.to_dict()})
    else:
        formatter.text(outcome.report.render(color=_use_color()))

    return EXIT_NOT_READY if outcome.report.has_failures() else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
