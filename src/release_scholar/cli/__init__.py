"""
Release Scholar CLI package.

Commands are auto-discovered from ``cli/commands/*.py``; each module
exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.
Shared pieces live in ``_output`` (text/JSON writers) and ``_args``
(flags used by more than one command).
"""
from ._output import OutputFormatter, format_json
from ._args import (
    add_json_flag,
    add_project_dir_flag,
    add_force_flag,
    add_verbose_flag,
    resolve_project_dir,
)

__all__ = [
    "OutputFormatter",
    "format_json",
    "add_json_flag",
    "add_project_dir_flag",
    "add_force_flag",
    "add_verbose_flag",
    "resolve_project_dir",
]
