"""Result model shared by every validator.

A ``Report`` is an ordered, append-only sequence of ``CheckResult`` values.
Validators write into one shared instance in invocation order; rendering
and aggregation (counts, readiness verdict) happen only here.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Tuple


class Severity(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    WARN = "warn"


class Verdict(str, Enum):
    READY = "ready"
    READY_WITH_WARNINGS = "ready_with_warnings"
    NOT_READY = "not_ready"


@dataclass(frozen=True)
class CheckResult:
    """A single finding.

    Attributes:
        category: Short tag naming the check family (e.g. ``Git``, ``Security``)
        message: Human-readable description of the finding
        severity: Pass, Fail or Warn
    """

    category: str
    message: str
    severity: Severity

    def to_dict(self) -> Dict[str, str]:
        return {
            "category": self.category,
            "message": self.message,
            "severity": self.severity.value,
        }


_TAGS = {
    Severity.PASS: "[PASS]",
    Severity.FAIL: "[FAIL]",
    Severity.WARN: "[WARN]",
}

_COLORS = {
    Severity.PASS: "\033[1;32m",
    Severity.FAIL: "\033[1;31m",
    Severity.WARN: "\033[1;33m",
}
_BOLD = "\033[1m"
_RESET = "\033[0m"

_VERDICT_TEXT = {
    Verdict.READY: ("Release is ready!", Severity.PASS),
    Verdict.READY_WITH_WARNINGS: ("Release is ready (with warnings).", Severity.WARN),
    Verdict.NOT_READY: ("Release is NOT ready.", Severity.FAIL),
}


class Report:
    """Ordered collection of check results for one invocation."""

    def __init__(self) -> None:
        self._results: List[CheckResult] = []

    @property
    def results(self) -> Tuple[CheckResult, ...]:
        return tuple(self._results)

    def add(self, category: str, message: str, severity: Severity) -> CheckResult:
        result = CheckResult(category=category, message=message, severity=severity)
        self._results.append(result)
        return result

    def pass_(self, category: str, message: str) -> CheckResult:
        return self.add(category, message, Severity.PASS)

    def fail(self, category: str, message: str) -> CheckResult:
        return self.add(category, message, Severity.FAIL)

    def warn(self, category: str, message: str) -> CheckResult:
        return self.add(category, message, Severity.WARN)

    def has_failures(self) -> bool:
        return any(r.severity is Severity.FAIL for r in self._results)

    def counts(self) -> Dict[Severity, int]:
        totals = {severity: 0 for severity in Severity}
        for result in self._results:
            totals[result.severity] += 1
        return totals

    @property
    def verdict(self) -> Verdict:
        totals = self.counts()
        if totals[Severity.FAIL] > 0:
            return Verdict.NOT_READY
        if totals[Severity.WARN] > 0:
            return Verdict.READY_WITH_WARNINGS
        return Verdict.READY

    def by_category(self) -> Dict[str, List[CheckResult]]:
        grouped: Dict[str, List[CheckResult]] = {}
        for result in self._results:
            grouped.setdefault(result.category, []).append(result)
        return grouped

    def render(self, *, color: bool = False) -> str:
        """Format the report as text.

        Args:
            color: Wrap status tags and the verdict in ANSI color codes.

        Returns:
            str: Multi-line report ending with the readiness verdict.
        """

        def paint(text: str, code: str) -> str:
            return f"{code}{text}{_RESET}" if color else text

        lines: List[str] = ["", paint("=== Release Scholar Report ===", _BOLD), ""]
        for result in self._results:
            tag = paint(_TAGS[result.severity], _COLORS[result.severity])
            lines.append(f"  {tag} {paint(result.category, _BOLD)}: {result.message}")

        totals = self.counts()
        lines.append("")
        lines.append(
            f"  {totals[Severity.PASS]} passed, "
            f"{totals[Severity.FAIL]} failed, "
            f"{totals[Severity.WARN]} warnings"
        )
        text, severity = _VERDICT_TEXT[self.verdict]
        lines.append("")
        lines.append(f"  {paint(text, _COLORS[severity])}")
        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        totals = self.counts()
        return {
            "results": [r.to_dict() for r in self._results],
            "counts": {severity.value: totals[severity] for severity in Severity},
            "verdict": self.verdict.value,
            "has_failures": self.has_failures(),
        }


__all__ = [
    "Severity",
    "Verdict",
    "CheckResult",
    "Report",
]
