"""Working tree status."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .repository import Repo, git_output


@dataclass(frozen=True)
class StatusEntry:
    path: str
    is_ignored: bool


def _parse_porcelain_z(output: str) -> List[StatusEntry]:
    entries: List[StatusEntry] = []
    fields = output.split("\0")
    i = 0
    while i < len(fields):
        field = fields[i]
        i += 1
        if len(field) < 4:
            continue
        # Porcelain v1: XY<space><path>; renames/copies carry the source path
        # as the following NUL-separated field.
        xy = field[:2]
        path = field[3:]
        if xy[0] in ("R", "C"):
            i += 1
        entries.append(StatusEntry(path=path, is_ignored=(xy == "!!")))
    return entries


def working_tree_status(repo: Repo) -> List[StatusEntry]:
    """Return every working tree entry git reports, ignored ones included.

    Untracked files are listed individually (never collapsed to their
    directory) so callers can name them.
    """
    output = str(
        git_output(
            repo,
            ["status", "--porcelain=v1", "-z", "--untracked-files=all", "--ignored"],
        )
    )
    return _parse_porcelain_z(output)


__all__ = ["StatusEntry", "working_tree_status"]
