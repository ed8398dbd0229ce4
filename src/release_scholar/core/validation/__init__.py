"""Release readiness validators.

Each module exposes ``validate(...)`` which writes its findings into a
shared :class:`~release_scholar.core.report.Report`. Validators never call
each other; the orchestrator in :mod:`release_scholar.core.check` runs them
in order and passes the resolved tag to the citation check.
"""
from __future__ import annotations

from . import citation, files, git, security, size
from .git import RepositoryTagInfo

__all__ = [
    "RepositoryTagInfo",
    "citation",
    "files",
    "git",
    "security",
    "size",
]
