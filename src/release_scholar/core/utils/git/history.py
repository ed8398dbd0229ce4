"""Commit history traversal and line-level diffs."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from .repository import Repo, git_output


class DiffOrigin(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


@dataclass(frozen=True)
class DiffLine:
    origin: DiffOrigin
    text: str


_ORIGINS = {
    "+": DiffOrigin.ADDED,
    "-": DiffOrigin.REMOVED,
    " ": DiffOrigin.CONTEXT,
}


def walk_ancestors(repo: Repo, start: str = "HEAD", bound: int = 100) -> Iterator[str]:
    """Yield at most ``bound`` commit ids reachable from ``start``.

    Commits come newest first. git is asked for no more than ``bound``
    commits and the counter below holds the cap even if it returns more.

    Raises:
        RepositoryError: On first iteration, when ``start`` cannot be walked.
    """
    if bound <= 0:
        return
    output = str(git_output(repo, ["rev-list", f"--max-count={int(bound)}", start, "--"]))
    visited = 0
    for line in output.splitlines():
        commit = line.strip()
        if not commit:
            continue
        if visited >= bound:
            break
        visited += 1
        yield commit


def first_parent(repo: Repo, commit: str) -> Optional[str]:
    """Return the first parent of ``commit``, or None for a root commit."""
    output = str(git_output(repo, ["rev-list", "--parents", "-n", "1", commit, "--"])).split()
    return output[1] if len(output) > 1 else None


def diff_lines(repo: Repo, parent: Optional[str], commit: str) -> Iterator[DiffLine]:
    """Yield the hunk lines of ``commit`` compared to ``parent``.

    With no parent the commit is compared to the empty tree. Binary
    deltas carry no hunks and so yield nothing. Content is decoded as
    UTF-8 with replacement characters.
    """
    args = ["diff-tree", "-p", "-r", "--no-commit-id", "--no-color", "--no-ext-diff", "--no-renames"]
    if parent is None:
        args += ["--root", commit]
    else:
        args += [parent, commit]
    raw = bytes(git_output(repo, args, text=False))

    in_hunk = False
    for chunk in raw.split(b"\n"):
        line = chunk.decode("utf-8", errors="replace")
        if line.startswith("diff --git "):
            in_hunk = False
            continue
        if line.startswith("@@"):
            in_hunk = True
            continue
        if not in_hunk or not line:
            continue
        origin = _ORIGINS.get(line[0])
        if origin is None:
            # "\ No newline at end of file"
            continue
        yield DiffLine(origin=origin, text=line[1:])


__all__ = [
    "DiffOrigin",
    "DiffLine",
    "walk_ancestors",
    "first_parent",
    "diff_lines",
]
