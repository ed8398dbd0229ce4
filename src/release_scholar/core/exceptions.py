"""Exception hierarchy.

Every error carries a ``context`` mapping of plain values (paths, commands,
schema names) that the CLI includes in its JSON error output.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class ReleaseScholarError(Exception):
    """Base class for errors raised by Release Scholar."""

    def __init__(self, message: str = "", *, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.context: Dict[str, Any] = dict(context or {})

    def to_json_error(self) -> Dict[str, Any]:
        return {"message": str(self), "code": type(self).__name__, "context": self.context}


class RepositoryError(ReleaseScholarError, RuntimeError):
    """A repository could not be opened, or git failed while reading it."""

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        command: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        extra = {key: value for key, value in (("path", path), ("command", command)) if value}
        super().__init__(message, context={**(context or {}), **extra})


class CitationParseError(ReleaseScholarError, ValueError):
    """CITATION.cff is not a YAML mapping."""


class ConfigError(ReleaseScholarError, ValueError):
    """A configuration layer is unreadable or fails its schema."""


class SchemaValidationError(ReleaseScholarError, ValueError):
    """A payload does not satisfy its JSON Schema."""


__all__ = [
    "ReleaseScholarError",
    "RepositoryError",
    "CitationParseError",
    "ConfigError",
    "SchemaValidationError",
]
