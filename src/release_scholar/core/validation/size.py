"""Tracked content size audit."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

from release_scholar.core.exceptions import RepositoryError
from release_scholar.core.report import Report
from release_scholar.core.utils.git import list_tracked_files, open_repository

logger = logging.getLogger(__name__)

CATEGORY = "Size"

LARGE_FILE_THRESHOLD = 1_000_000  # 1 MB
VERY_LARGE_FILE_THRESHOLD = 10_000_000  # 10 MB
REPO_SIZE_WARN_THRESHOLD = 50_000_000  # 50 MB
REPO_SIZE_FAIL_THRESHOLD = 200_000_000  # 200 MB

BINARY_EXTENSIONS = (
    ".zip", ".tar", ".gz", ".bz2", ".xz", ".7z", ".rar", ".jar", ".war", ".ear", ".exe", ".dll",
    ".so", ".dylib", ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tiff", ".ico", ".svg", ".mp3",
    ".mp4", ".avi", ".mov", ".wav", ".flac", ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt",
    ".pptx", ".woff", ".woff2", ".ttf", ".eot", ".sqlite", ".db", ".min.js", ".min.css", ".map",
)


def _mb(size: int) -> str:
    return f"{size / 1_000_000:.1f} MB"


def is_binary_name(path: str) -> bool:
    return path.lower().endswith(BINARY_EXTENSIONS)


def validate(project_dir: Path, report: Report) -> None:
    """Measure tracked files against the per-file and repository thresholds.

    Files whose size cannot be read (deleted but still staged) are skipped.
    A binary-looking large file is reported twice: once as a large file and
    once with the large-file storage recommendation.
    """
    try:
        repo = open_repository(project_dir)
        tracked = list_tracked_files(repo)
    except RepositoryError as exc:
        logger.warning("size audit skipped: %s", exc)
        return

    total_size = 0
    file_count = 0
    large_files: List[Tuple[str, int]] = []
    binary_files: List[Tuple[str, int]] = []

    for rel_path in tracked:
        try:
            size = (repo.root / rel_path).stat().st_size
        except OSError:
            continue

        total_size += size
        file_count += 1

        if size >= LARGE_FILE_THRESHOLD:
            large_files.append((rel_path, size))
            if is_binary_name(rel_path):
                binary_files.append((rel_path, size))

    if total_size >= REPO_SIZE_FAIL_THRESHOLD:
        report.fail(CATEGORY, f"Tracked files total {_mb(total_size)}, too large for a code repository")
    elif total_size >= REPO_SIZE_WARN_THRESHOLD:
        report.warn(CATEGORY, f"Tracked files total {_mb(total_size)}, consider reducing")
    else:
        report.pass_(CATEGORY, f"Tracked files total {_mb(total_size)} ({file_count} files)")

    if not large_files:
        report.pass_(CATEGORY, f"No large files detected (>= {_mb(LARGE_FILE_THRESHOLD)})")
    for rel_path, size in large_files:
        if size >= VERY_LARGE_FILE_THRESHOLD:
            report.fail(CATEGORY, f"{rel_path} is {_mb(size)}, consider removing or using Git LFS")
        else:
            report.warn(CATEGORY, f"{rel_path} is {_mb(size)}")

    for rel_path, size in binary_files:
        report.warn(
            CATEGORY,
            f"Binary/vendor file tracked: {rel_path} ({_mb(size)}), consider .gitignore or Git LFS",
        )


__all__ = [
    "LARGE_FILE_THRESHOLD",
    "VERY_LARGE_FILE_THRESHOLD",
    "REPO_SIZE_WARN_THRESHOLD",
    "REPO_SIZE_FAIL_THRESHOLD",
    "BINARY_EXTENSIONS",
    "is_binary_name",
    "validate",
]
