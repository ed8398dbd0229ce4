"""Security audit: embedded secrets, sensitive files, history, .gitignore.

Four independent scans share one opened repository and one report:

- tracked file contents against every secret rule
- tracked file basenames against the sensitive filename list
- a bounded walk over recent history, high-confidence rules only
- the root ``.gitignore`` against security and build-artifact patterns
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, List, Tuple

from release_scholar.core.config import MAX_HISTORY_COMMITS
from release_scholar.core.exceptions import RepositoryError
from release_scholar.core.report import Report
from release_scholar.core.utils.git import (
    DiffOrigin,
    Repo,
    diff_lines,
    first_parent,
    list_tracked_files,
    open_repository,
    walk_ancestors,
)

from .secret_rules import (
    HIGH_CONFIDENCE_RULES,
    RECOMMENDED_GITIGNORE_PATTERNS,
    Confidence,
    matching_rules,
    sensitive_filename_match,
)

logger = logging.getLogger(__name__)

CATEGORY = "Security"
GITIGNORE_CATEGORY = "Gitignore"
GITIGNORE_FILE = ".gitignore"

_SCANNED_ORIGINS = (DiffOrigin.ADDED, DiffOrigin.CONTEXT)


@dataclass(frozen=True)
class HistoryScanResult:
    commits_scanned: int
    secrets_found: bool


def scan_tracked_files_for_secrets(repo: Repo, tracked: List[str], report: Report) -> None:
    found = False
    for rel_path in tracked:
        try:
            content = (repo.root / rel_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            # Binary, deleted-but-staged, or unreadable: not scanned.
            logger.debug("skipping non-text tracked file %s", rel_path)
            continue
        for rule in matching_rules(content):
            message = f"Possible {rule.label} found in tracked file: {rel_path}"
            if rule.confidence is Confidence.HIGH:
                report.fail(CATEGORY, message)
            else:
                report.warn(CATEGORY, message)
            found = True

    if not found:
        report.pass_(CATEGORY, "No secrets detected in tracked files")


def scan_sensitive_files(tracked: List[str], report: Report) -> None:
    found = False
    for rel_path in tracked:
        if sensitive_filename_match(PurePosixPath(rel_path).name):
            report.warn(CATEGORY, f"Sensitive file tracked: {rel_path}")
            found = True

    if not found:
        report.pass_(CATEGORY, "No sensitive files tracked")


def scan_history(repo: Repo, *, max_commits: int = MAX_HISTORY_COMMITS) -> HistoryScanResult:
    """Look for high-confidence secrets in recent commits.

    Walks at most ``max_commits`` (never more than 100) commits from HEAD,
    diffing each against its first parent, and stops at the first hit.
    Added and context lines are inspected; removed lines are not.
    """
    bound = max(0, min(int(max_commits), MAX_HISTORY_COMMITS))
    scanned = 0
    try:
        for commit in walk_ancestors(repo, bound=bound):
            scanned += 1
            try:
                parent = first_parent(repo, commit)
                for line in diff_lines(repo, parent, commit):
                    if line.origin in _SCANNED_ORIGINS and matching_rules(line.text, HIGH_CONFIDENCE_RULES):
                        logger.debug("history scan hit in commit %s", commit)
                        return HistoryScanResult(commits_scanned=scanned, secrets_found=True)
            except RepositoryError as exc:
                logger.debug("skipping commit %s: %s", commit, exc)
    except RepositoryError as exc:
        # Unborn HEAD or unreadable history: nothing to walk.
        logger.warning("cannot walk history of %s: %s", repo.root, exc)
    return HistoryScanResult(commits_scanned=scanned, secrets_found=False)


def _report_history(result: HistoryScanResult, report: Report) -> None:
    if result.secrets_found:
        report.warn(CATEGORY, "Potential secrets found in git history (review recommended)")
    else:
        report.pass_(
            CATEGORY,
            f"No secrets found in git history ({result.commits_scanned} commits scanned)",
        )


def _normalize_ignore_entry(entry: str) -> str:
    for prefix in ("**/", "/"):
        if entry.startswith(prefix):
            entry = entry[len(prefix):]
    return entry.rstrip("/")


def gitignore_contains(content: str, pattern: str) -> bool:
    """Return True when a non-comment line of ``content`` covers ``pattern``.

    ``target``, ``target/``, ``/target/`` and ``**/target`` all cover
    ``target/``; no glob expansion beyond that is attempted.
    """
    wanted = _normalize_ignore_entry(pattern)
    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        if trimmed == pattern or _normalize_ignore_entry(trimmed) == wanted:
            return True
    return False


def _has_files_with_extension(directory: Path, ext: str) -> bool:
    try:
        return any(entry.name.endswith(ext) for entry in directory.iterdir())
    except OSError:
        return False


def detect_relevant_artifacts(project_dir: Path, *, archive_dir: str = "release") -> List[Tuple[str, str]]:
    """Return ``(pattern, description)`` build-artifact entries for detected ecosystems.

    Always includes the tool's own output directory and macOS metadata.
    Deduplicated by pattern and sorted by pattern.
    """
    root = Path(project_dir)
    relevant: List[Tuple[str, str]] = [(f"{archive_dir.strip('/')}/", "release-scholar build artifacts")]

    if (root / "pom.xml").exists() or (root / "build.gradle").exists():
        relevant.append(("target/", "Java/Maven build output"))
        relevant.append(("*.class", "Java compiled classes"))

    python_markers = ("setup.py", "pyproject.toml", "requirements.txt")
    if any((root / marker).exists() for marker in python_markers) or _has_files_with_extension(root, ".py"):
        relevant.append(("__pycache__/", "Python bytecode cache"))
        relevant.append(("*.pyc", "Python compiled files"))
        relevant.append(("*.egg-info", "Python package metadata"))
        relevant.append(("dist/", "Python distribution output"))

    if (root / "Cargo.toml").exists():
        relevant.append(("target/", "Rust/Cargo build output"))

    if (root / "package.json").exists():
        relevant.append(("node_modules/", "Node.js dependencies"))

    relevant.append((".DS_Store", "macOS metadata files"))

    unique: Dict[str, str] = {}
    for pattern, description in relevant:
        unique.setdefault(pattern, description)
    return sorted(unique.items())


def audit_gitignore(project_dir: Path, report: Report, *, archive_dir: str = "release") -> None:
    path = Path(project_dir) / GITIGNORE_FILE
    if not path.exists():
        report.warn(GITIGNORE_CATEGORY, f"{GITIGNORE_FILE} not found")
        return

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("cannot read %s: %s", path, exc)
        return

    missing_security = [p for p in RECOMMENDED_GITIGNORE_PATTERNS if not gitignore_contains(content, p)]
    if missing_security:
        report.warn(GITIGNORE_CATEGORY, f"Missing security patterns: {', '.join(missing_security)}")
    else:
        report.pass_(GITIGNORE_CATEGORY, "Covers common sensitive file patterns")

    missing_artifacts = [
        f"{pattern} ({description})"
        for pattern, description in detect_relevant_artifacts(project_dir, archive_dir=archive_dir)
        if not gitignore_contains(content, pattern)
    ]
    if not missing_artifacts:
        report.pass_(GITIGNORE_CATEGORY, "Covers build artifact patterns for detected languages")
        return
    for missing in missing_artifacts:
        report.warn(GITIGNORE_CATEGORY, f"Missing build artifact pattern: {missing}")


def validate(
    project_dir: Path,
    report: Report,
    *,
    archive_dir: str = "release",
    max_history_commits: int = MAX_HISTORY_COMMITS,
) -> None:
    """Run all security scans against the repository at ``project_dir``."""
    try:
        repo = open_repository(project_dir)
    except RepositoryError as exc:
        logger.warning("cannot open repository at %s: %s", project_dir, exc)
        report.fail(CATEGORY, "Cannot open repository for security scan")
        return

    try:
        tracked = list_tracked_files(repo)
    except RepositoryError as exc:
        logger.warning("cannot list tracked files: %s", exc)
    else:
        scan_tracked_files_for_secrets(repo, tracked, report)
        scan_sensitive_files(tracked, report)

    _report_history(scan_history(repo, max_commits=max_history_commits), report)
    audit_gitignore(project_dir, report, archive_dir=archive_dir)


__all__ = [
    "HistoryScanResult",
    "scan_tracked_files_for_secrets",
    "scan_sensitive_files",
    "scan_history",
    "gitignore_contains",
    "detect_relevant_artifacts",
    "audit_gitignore",
    "validate",
]
