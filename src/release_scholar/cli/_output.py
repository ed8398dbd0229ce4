"""Text and JSON output for CLI commands.

In JSON mode stdout carries exactly one JSON document per invocation;
diagnostics go to stderr.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional, TextIO

from release_scholar.core.exceptions import ReleaseScholarError


def format_json(data: Any, indent: int = 2) -> str:
    return json.dumps(data, indent=indent, default=str)


class OutputFormatter:
    """Writes command results in the mode selected by ``--json``."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    @staticmethod
    def _write(message: str, stream: Optional[TextIO] = None) -> None:
        print(message, file=stream or sys.stdout)

    def json_output(self, data: Any) -> None:
        self._write(format_json(data, self.indent))

    def text(self, message: str) -> None:
        """Write a line of human output; ignored in JSON mode."""
        if not self.json_mode:
            self._write(message)

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        """Report a completed command: ``data`` in JSON mode, ``message`` otherwise."""
        if self.json_mode:
            self.json_output({"status": status, **data})
        else:
            self._write(message)

    def error(self, error: Exception, message: Optional[str] = None, *, error_code: str = "error") -> None:
        """Report a command failure on stderr.

        Args:
            error: The exception that stopped the command
            message: Text to show instead of ``str(error)``
            error_code: Machine-readable code for JSON mode
        """
        msg = message or str(error)
        if not self.json_mode:
            self._write(f"Error: {msg}", sys.stderr)
            return
        payload: Dict[str, Any] = {"error": error_code, "message": msg}
        if isinstance(error, ReleaseScholarError) and error.context:
            payload["context"] = error.context
        self._write(format_json(payload, self.indent), sys.stderr)


__all__ = ["OutputFormatter", "format_json"]
