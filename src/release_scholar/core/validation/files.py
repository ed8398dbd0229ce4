"""Required file presence."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

from release_scholar.core.report import Report

CATEGORY = "Files"


def validate(project_dir: Path, required_files: Iterable[str], report: Report) -> None:
    """Record one Pass or Fail per required path, in the configured order."""
    for name in required_files:
        if (Path(project_dir) / name).exists():
            report.pass_(CATEGORY, f"{name} exists")
        else:
            report.fail(CATEGORY, f"{name} is missing")


__all__ = ["validate"]
