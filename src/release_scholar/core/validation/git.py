"""Working tree cleanliness and release tag resolution."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from release_scholar.core.exceptions import RepositoryError
from release_scholar.core.report import Report
from release_scholar.core.utils.git import (
    Repo,
    head_commit,
    list_tags,
    open_repository,
    resolve_ref,
    working_tree_status,
)

logger = logging.getLogger(__name__)

CATEGORY = "Git"
SEMVER_TAG_RE = re.compile(r"^v(\d+\.\d+\.\d+)$")
MAX_LISTED_DIRTY_PATHS = 5


@dataclass(frozen=True)
class RepositoryTagInfo:
    """The semver tag found on HEAD.

    Attributes:
        version: Version without the ``v`` prefix (``1.2.3``)
        tag: Full tag name (``v1.2.3``)
    """

    version: str
    tag: str

    def to_dict(self) -> dict[str, str]:
        return {"version": self.version, "tag": self.tag}


def _check_clean(repo: Repo, report: Report) -> None:
    try:
        entries = working_tree_status(repo)
    except RepositoryError as exc:
        report.fail(CATEGORY, f"Cannot check status: {exc}")
        return

    dirty = [entry.path for entry in entries if not entry.is_ignored]
    if not dirty:
        report.pass_(CATEGORY, "Working directory is clean")
        return
    shown = ", ".join(dirty[:MAX_LISTED_DIRTY_PATHS])
    report.warn(
        CATEGORY,
        f"Working directory has {len(dirty)} uncommitted change(s): {shown}",
    )


def find_head_tag(repo: Repo, head: str) -> Optional[RepositoryTagInfo]:
    """Return the first semver tag, in git's listing order, that points at ``head``.

    Tags that fail to resolve are skipped.

    Raises:
        RepositoryError: If tags cannot be listed.
    """
    for name in list_tags(repo):
        match = SEMVER_TAG_RE.match(name)
        if match is None:
            continue
        try:
            target = resolve_ref(repo, name)
        except RepositoryError:
            logger.debug("skipping tag %s: does not resolve to a commit", name)
            continue
        if target == head:
            return RepositoryTagInfo(version=match.group(1), tag=name)
    return None


def validate(project_dir: Path, report: Report) -> Optional[RepositoryTagInfo]:
    """Check the working tree and resolve the release tag on HEAD.

    Args:
        project_dir: Repository root
        report: Report to append results to

    Returns:
        Optional[RepositoryTagInfo]: The tag on HEAD, or None when HEAD is
        untagged or the repository cannot be read.
    """
    try:
        repo = open_repository(project_dir)
    except RepositoryError as exc:
        logger.warning("cannot open repository at %s: %s", project_dir, exc)
        report.fail(CATEGORY, f"Cannot open repository: {exc}")
        return None

    _check_clean(repo, report)

    try:
        head = head_commit(repo)
    except RepositoryError as exc:
        report.fail(CATEGORY, f"Cannot read HEAD: {exc}")
        return None

    try:
        info = find_head_tag(repo, head)
    except RepositoryError as exc:
        report.fail(CATEGORY, f"Cannot list tags: {exc}")
        return None

    if info is None:
        report.fail(CATEGORY, "HEAD has no semver tag (expected vX.Y.Z)")
        return None

    report.pass_(CATEGORY, f"HEAD is tagged: {info.tag} (version {info.version})")
    return info


__all__ = ["RepositoryTagInfo", "SEMVER_TAG_RE", "find_head_tag", "validate"]
