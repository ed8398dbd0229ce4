from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_PACKAGE_LOGGER = "release_scholar"
_STDERR_HANDLER: logging.Handler | None = None
_FILE_HANDLER: logging.Handler | None = None
_CONFIGURED_LOG_PATH: str | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: str = "WARNING", *, log_path: Optional[Path] = None) -> None:
    """Configure logging for the ``release_scholar`` logger tree.

    Installs one stderr handler and, when ``log_path`` is given, one file
    handler. Stdout is never written to, so ``--json`` output stays clean.

    Idempotent per-process: calling again only adjusts levels and swaps the
    file handler when the path changes.
    """
    global _STDERR_HANDLER, _FILE_HANDLER, _CONFIGURED_LOG_PATH

    numeric = _level_from_name(level)
    pkg = logging.getLogger(_PACKAGE_LOGGER)
    pkg.setLevel(numeric)

    if _STDERR_HANDLER is None:
        _STDERR_HANDLER = logging.StreamHandler(sys.stderr)
        _STDERR_HANDLER.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        pkg.addHandler(_STDERR_HANDLER)
    _STDERR_HANDLER.setLevel(numeric)

    if log_path is None:
        return

    resolved = str(Path(log_path).resolve())
    if _CONFIGURED_LOG_PATH == resolved and _FILE_HANDLER is not None:
        _FILE_HANDLER.setLevel(numeric)
        return

    # Replace the installed file handler when switching paths.
    if _FILE_HANDLER is not None:
        pkg.removeHandler(_FILE_HANDLER)
        _FILE_HANDLER.close()

    Path(resolved).parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(numeric)
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    pkg.addHandler(fh)

    _FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def reset_logging_for_tests() -> None:
    """Test-only: remove handlers installed by :func:`configure_logging`."""
    global _STDERR_HANDLER, _FILE_HANDLER, _CONFIGURED_LOG_PATH
    pkg = logging.getLogger(_PACKAGE_LOGGER)
    for handler in (_STDERR_HANDLER, _FILE_HANDLER):
        if handler is not None:
            pkg.removeHandler(handler)
            handler.close()
    pkg.setLevel(logging.NOTSET)
    _STDERR_HANDLER = None
    _FILE_HANDLER = None
    _CONFIGURED_LOG_PATH = None


__all__ = ["configure_logging", "reset_logging_for_tests"]
