"""Release readiness orchestration.

Runs every validator, in a fixed order, against one shared report:

1. git (cleanliness + release tag)
2. required files
3. citation metadata (receives the tag version, when one was found)
4. security audit
5. size audit
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from release_scholar.core.config import ReleaseScholarConfig, load_config
from release_scholar.core.report import Report
from release_scholar.core.validation import citation, files, git, security, size
from release_scholar.core.validation.git import RepositoryTagInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckOutcome:
    report: Report
    tag_info: Optional[RepositoryTagInfo]

    @property
    def ready(self) -> bool:
        return not self.report.has_failures()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tag": self.tag_info.to_dict() if self.tag_info is not None else None,
            **self.report.to_dict(),
        }


def run_check(project_dir: Path, config: Optional[ReleaseScholarConfig] = None) -> CheckOutcome:
    """Validate ``project_dir`` for release.

    Args:
        project_dir: Canonical project root (the repository root)
        config: Effective configuration; loaded from ``project_dir`` if None

    Returns:
        CheckOutcome: The complete report and the resolved release tag, if any.

    Raises:
        ConfigError: Only when ``config`` is None and loading it fails.
    """
    project_dir = Path(project_dir)
    cfg = config if config is not None else load_config(project_dir)
    report = Report()

    logger.info("checking %s", project_dir)
    tag_info = git.validate(project_dir, report)
    files.validate(project_dir, cfg.required_files, report)
    citation.validate(project_dir, tag_info.version if tag_info is not None else None, report)
    security.validate(
        project_dir,
        report,
        archive_dir=cfg.archive_dir,
        max_history_commits=cfg.history_max_commits,
    )
    size.validate(project_dir, report)

    counts = report.counts()
    logger.info(
        "check finished: %s (%d results)",
        report.verdict.value,
        sum(counts.values()),
    )
    return CheckOutcome(report=report, tag_info=tag_info)


__all__ = ["CheckOutcome", "run_check"]
