"""Tracked file enumeration from the index."""
from __future__ import annotations

from typing import List

from .repository import Repo, git_output


def list_tracked_files(repo: Repo) -> List[str]:
    """Return paths recorded in the index, relative to the repository root.

    Reflects the staged snapshot, not the working tree: a file deleted on
    disk but still staged is listed, an untracked file is not. Conflict
    stages of the same path are collapsed to one entry.
    """
    output = str(git_output(repo, ["ls-files", "-z", "--cached"]))
    seen: set[str] = set()
    paths: List[str] = []
    for path in output.split("\0"):
        if not path or path in seen:
            continue
        seen.add(path)
        paths.append(path)
    return paths


__all__ = ["list_tracked_files"]
