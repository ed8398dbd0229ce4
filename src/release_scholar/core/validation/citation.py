"""Citation metadata validation.

Checks ``CITATION.cff`` for the fields a deposit needs and, when the
orchestrator resolved a release tag, that the declared version matches it.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from release_scholar.core.citation import CITATION_FILE, is_valid_orcid, load_citation
from release_scholar.core.exceptions import CitationParseError
from release_scholar.core.report import Report

logger = logging.getLogger(__name__)

CATEGORY = "Citation"


def _field(doc: Any, key: str) -> Any:
    return doc.get(key) if isinstance(doc, dict) else None


def _text(value: Any) -> Optional[str]:
    """Return scalar field values as text; absent, lists and maps give None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def _check_present(doc: Any, key: str, report: Report) -> None:
    if _text(_field(doc, key)) is not None:
        report.pass_(CATEGORY, f"{key} present")
    else:
        report.fail(CATEGORY, f"{key} missing")


def _check_authors(doc: Any, report: Report) -> None:
    authors = _field(doc, "authors")
    if not isinstance(authors, list) or not authors:
        report.fail(CATEGORY, "No authors listed")
        return

    report.pass_(CATEGORY, f"{len(authors)} author(s) found")
    for number, author in enumerate(authors, start=1):
        if _text(_field(author, "family-names")) is None:
            report.fail(CATEGORY, f"Author {number} missing family-names")
        orcid = _field(author, "orcid")
        if orcid is None:
            continue
        if isinstance(orcid, str) and is_valid_orcid(orcid):
            report.pass_(CATEGORY, f"Author {number} ORCID valid")
        else:
            report.fail(CATEGORY, f"Author {number} ORCID invalid: '{orcid}'")


def _check_version(doc: Any, expected_version: str, report: Report) -> None:
    raw = _field(doc, "version")
    declared = _text(raw)
    if declared is None:
        report.fail(CATEGORY, "version missing")
    elif declared == expected_version:
        report.pass_(CATEGORY, f"version matches git tag ({declared})")
    else:
        message = f"version '{declared}' does not match git tag '{expected_version}'"
        if not isinstance(raw, str):
            # YAML reads an unquoted 1.10 as the number 1.1.
            message += " (version was parsed as a number, quote it in CITATION.cff)"
        report.fail(CATEGORY, message)


def validate(project_dir: Path, expected_version: Optional[str], report: Report) -> None:
    """Validate the project's citation metadata.

    Args:
        project_dir: Project root holding ``CITATION.cff``
        expected_version: Version from the release tag, or None to skip the
            version consistency check
        report: Report to append results to
    """
    path = Path(project_dir) / CITATION_FILE
    if not path.exists():
        report.fail(CATEGORY, f"{CITATION_FILE} not found")
        return

    try:
        doc = load_citation(path)
    except (OSError, UnicodeDecodeError) as exc:
        report.fail(CATEGORY, f"Cannot read {CITATION_FILE}: {exc}")
        return
    except CitationParseError as exc:
        logger.debug("citation parse error in %s: %s", path, exc)
        report.fail(CATEGORY, f"Invalid YAML: {exc}")
        return

    _check_present(doc, "cff-version", report)
    _check_present(doc, "title", report)
    _check_authors(doc, report)
    if expected_version is not None:
        _check_version(doc, expected_version, report)
    _check_present(doc, "license", report)

    # YAML turns an unquoted date into a date object, so only presence counts.
    if _field(doc, "date-released") is not None:
        report.pass_(CATEGORY, "date-released present")
    else:
        report.fail(CATEGORY, "date-released missing")


__all__ = ["validate"]
