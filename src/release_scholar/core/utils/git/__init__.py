"""Git utilities for Release Scholar.

Read-only access to a repository through the ``git`` executable:
- Repository: detection, opening and HEAD resolution
- Status: working tree entries
- Tags: listing and peeling to commits
- Index: tracked files
- History: bounded ancestor walks and line diffs
"""
from __future__ import annotations

from .history import (
    DiffLine,
    DiffOrigin,
    diff_lines,
    first_parent,
    walk_ancestors,
)
from .index import list_tracked_files
from .repository import (
    Repo,
    get_git_root,
    head_commit,
    is_git_repository,
    open_repository,
)
from .status import StatusEntry, working_tree_status
from .tags import list_tags, resolve_ref

__all__ = [
    # repository
    "Repo",
    "is_git_repository",
    "get_git_root",
    "open_repository",
    "head_commit",
    # status
    "StatusEntry",
    "working_tree_status",
    # tags
    "list_tags",
    "resolve_ref",
    # index
    "list_tracked_files",
    # history
    "DiffOrigin",
    "DiffLine",
    "walk_ancestors",
    "first_parent",
    "diff_lines",
]
