"""Tag listing and resolution."""
from __future__ import annotations

from typing import List

from release_scholar.core.exceptions import RepositoryError

from .repository import Repo, git_output


def list_tags(repo: Repo) -> List[str]:
    """Return tag names in git's enumeration order.

    No ordering is promised to callers; git currently lists by refname.
    """
    output = str(git_output(repo, ["tag", "--list"]))
    return [line.strip() for line in output.splitlines() if line.strip()]


def resolve_ref(repo: Repo, tag_name: str) -> str:
    """Resolve ``tag_name`` to the commit it ultimately points at.

    Annotated tags are peeled down to their commit.

    Raises:
        RepositoryError: If the tag does not exist or does not reach a commit.
    """
    out = str(
        git_output(repo, ["rev-parse", "--verify", "--quiet", f"refs/tags/{tag_name}^{{commit}}"])
    ).strip()
    if not out:
        raise RepositoryError(f"tag {tag_name} does not resolve to a commit", path=str(repo.root))
    return out


__all__ = ["list_tags", "resolve_ref"]
