"""Entry point of the ``release-scholar`` command.

Every public module in ``release_scholar.cli.commands`` becomes a
subcommand named after the module (underscores shown as dashes).
"""

from __future__ import annotations

import argparse
import importlib
import logging
import pkgutil
import sys
from functools import lru_cache
from types import ModuleType
from typing import Callable, Dict, List, NamedTuple, Optional

from release_scholar import __version__

COMMANDS_PACKAGE = "release_scholar.cli.commands"

logger = logging.getLogger(__name__)


class Command(NamedTuple):
    name: str
    module: ModuleType
    summary: str
    register_args: Optional[Callable[[argparse.ArgumentParser], None]]
    handler: Optional[Callable[[argparse.Namespace], int]]


@lru_cache(maxsize=1)
def discover_commands() -> Dict[str, Command]:
    """Import the command modules and index them by module name."""
    package = importlib.import_module(COMMANDS_PACKAGE)
    found: Dict[str, Command] = {}
    for info in sorted(pkgutil.iter_modules(package.__path__), key=lambda m: m.name):
        if info.name.startswith("_") or info.ispkg:
            continue
        try:
            module = importlib.import_module(f"{COMMANDS_PACKAGE}.{info.name}")
        except ImportError as exc:
            logger.warning("skipping command %s: %s", info.name, exc)
            continue
        found[info.name] = Command(
            name=info.name,
            module=module,
            summary=getattr(module, "SUMMARY", info.name),
            register_args=getattr(module, "register_args", None),
            handler=getattr(module, "main", None),
        )
    return found


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="release-scholar",
        description="Release readiness checks for scholarly software",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", title="commands", metavar="<command>")

    for name, command in discover_commands().items():
        shown = name.replace("_", "-")
        child = sub.add_parser(shown, aliases=[name] if shown != name else [], help=command.summary)
        if command.register_args is not None:
            command.register_args(child)
        child.set_defaults(handler=command.handler)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse ``argv`` and run the selected command.

    Returns:
        The command's exit status; 130 when interrupted, 1 on an
        unexpected error.
    """
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else list(argv))

    if args.command is None:
        parser.print_help()
        return 0
    if args.handler is None:
        parser.error(f"command {args.command!r} has no handler")

    try:
        return args.handler(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as exc:
        logger.debug("command %s crashed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
