"""
Release Scholar config command.

SUMMARY: Show the effective configuration

Displays the configuration merged from bundled defaults, the user-global
file and the project file, followed by the files that were merged.
"""

from __future__ import annotations

import argparse
import sys

import yaml

from release_scholar.cli import (
    OutputFormatter,
    add_json_flag,
    add_project_dir_flag,
    resolve_project_dir,
)
from release_scholar.core.config import load_config
from release_scholar.core.exceptions import ConfigError

SUMMARY = "Show the effective configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_project_dir_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        project_dir = resolve_project_dir(args)
        config = load_config(project_dir)
    except (NotADirectoryError, ConfigError) as exc:
        formatter.error(exc, error_code="config_error")
        return 2

    data = config.to_dict()
    sources = [str(p) for p in config.sources]

    if formatter.json_mode:
        formatter.json_output({"config": data, "sources": sources})
        return 0

    formatter.text(yaml.safe_dump(data, sort_keys=False, default_flow_style=False).rstrip())
    formatter.text("")
    if sources:
        formatter.text("# merged from:")
        for source in sources:
            formatter.text(f"#   {source}")
    else:
        formatter.text("# bundled defaults only")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
