"""Git repository detection, opening and HEAD resolution."""
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from release_scholar.core.exceptions import RepositoryError
from release_scholar.core.utils.subprocess import run_git_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repo:
    """An opened repository: the top level of a git work tree."""

    root: Path


def get_git_root(path: Path) -> Optional[Path]:
    """Return the nearest directory at or above ``path`` holding a ``.git`` entry.

    Only the filesystem is inspected; git itself is not run. ``.git`` may
    be a directory or, for worktrees and submodules, a file.
    """
    start = Path(path).resolve()
    if start.is_file():
        start = start.parent
    return next((d for d in (start, *start.parents) if (d / ".git").exists()), None)


def is_git_repository(path: Path) -> bool:
    return get_git_root(path) is not None


def git_output(repo: Repo, args: Sequence[str], *, text: bool = True) -> str | bytes:
    """Run ``git <args>`` inside ``repo`` and return stdout.

    Raises:
        RepositoryError: If git cannot be run, times out, or exits non-zero.
    """
    cmd = ["git", *args]
    try:
        result = run_git_command(cmd, cwd=repo.root, text=text)
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise RepositoryError(
            f"git {args[0]} failed: {exc}", path=str(repo.root), command=" ".join(cmd)
        ) from exc
    if result.returncode != 0:
        stderr = result.stderr if isinstance(result.stderr, str) else (result.stderr or b"").decode("utf-8", "replace")
        detail = stderr.strip() or f"exit code {result.returncode}"
        raise RepositoryError(
            f"git {args[0]} failed: {detail}", path=str(repo.root), command=" ".join(cmd)
        )
    return result.stdout


def open_repository(path: Path | str) -> Repo:
    """Open the repository whose work tree top level is ``path``.

    A subdirectory of a work tree is not accepted: the project root must be
    the repository root, so tracked paths and on-disk paths line up.

    Raises:
        RepositoryError: If ``path`` is missing, not a work tree top level,
            or git is unavailable.
    """
    root = Path(path).expanduser().resolve()
    if not root.is_dir():
        raise RepositoryError(f"not a directory: {root}", path=str(root))

    repo = Repo(root=root)
    toplevel = str(git_output(repo, ["rev-parse", "--show-toplevel"])).strip()
    if not toplevel:
        raise RepositoryError(f"not a git work tree: {root}", path=str(root))
    if Path(toplevel).resolve() != root:
        raise RepositoryError(
            f"{root} is inside the repository at {toplevel}, not its root",
            path=str(root),
        )
    logger.debug("opened repository at %s", root)
    return repo


def head_commit(repo: Repo) -> str:
    """Return the commit id HEAD points at.

    Raises:
        RepositoryError: On an unborn branch or detached/corrupt HEAD.
    """
    out = str(git_output(repo, ["rev-parse", "--verify", "--quiet", "HEAD^{commit}"])).strip()
    if not out:
        raise RepositoryError("HEAD does not point at a commit", path=str(repo.root))
    return out


__all__ = [
    "Repo",
    "is_git_repository",
    "get_git_root",
    "git_output",
    "open_repository",
    "head_commit",
]
