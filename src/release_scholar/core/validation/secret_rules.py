"""Fixed detection tables for the security audit.

These are data, not a rule engine: scans iterate the tables and the
confidence column alone decides Fail vs. Warn. The history scan uses only
the high-confidence rows.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Confidence(str, Enum):
    HIGH = "high"
    LOW = "low"


@dataclass(frozen=True)
class SecretRule:
    pattern: re.Pattern[str]
    label: str
    confidence: Confidence


def _rules(table: Dict[str, Tuple[str, Confidence]]) -> Tuple[SecretRule, ...]:
    return tuple(
        SecretRule(pattern=re.compile(pattern), label=label, confidence=confidence)
        for pattern, (label, confidence) in table.items()
    )


SECRET_PATTERNS: Dict[str, Tuple[str, Confidence]] = {
    r"-----BEGIN\s+(RSA |DSA |EC |OPENSSH )?PRIVATE KEY-----": ("Private key", Confidence.HIGH),
    r"(?i)(api[_-]?key|api[_-]?secret|access[_-]?token)\s*[:=]\s*['\"]?\w{16,}": (
        "API key/token",
        Confidence.HIGH,
    ),
    # Matches config examples and test fixtures too often to block on.
    r"(?i)(password|passwd|pwd)\s*[:=]\s*['\"]?.{8,}": ("Password assignment", Confidence.LOW),
    r"AKIA[0-9A-Z]{16}": ("AWS Access Key", Confidence.HIGH),
    r"ghp_[A-Za-z0-9_]{36}": ("GitHub Personal Access Token", Confidence.HIGH),
    r"glpat-[A-Za-z0-9_\-]{20}": ("GitLab Personal Access Token", Confidence.HIGH),
}

SECRET_RULES: Tuple[SecretRule, ...] = _rules(SECRET_PATTERNS)

HIGH_CONFIDENCE_RULES: Tuple[SecretRule, ...] = tuple(
    rule for rule in SECRET_RULES if rule.confidence is Confidence.HIGH
)

# Compared against tracked file basenames: exact name or suffix.
SENSITIVE_FILE_PATTERNS: Tuple[str, ...] = (
    ".env",
    ".pem",
    ".key",
    "id_rsa",
    "id_dsa",
    "id_ed25519",
    "credentials.json",
    ".sqlite",
    ".DS_Store",
    ".p12",
    ".pfx",
)

RECOMMENDED_GITIGNORE_PATTERNS: Tuple[str, ...] = (".env", ".DS_Store", "*.pem", "*.key", "id_rsa")


def matching_rules(text: str, rules: Tuple[SecretRule, ...] = SECRET_RULES) -> Tuple[SecretRule, ...]:
    return tuple(rule for rule in rules if rule.pattern.search(text))


def sensitive_filename_match(basename: str) -> bool:
    return any(basename == p or basename.endswith(p) for p in SENSITIVE_FILE_PATTERNS)


__all__ = [
    "Confidence",
    "SecretRule",
    "SECRET_PATTERNS",
    "SECRET_RULES",
    "HIGH_CONFIDENCE_RULES",
    "SENSITIVE_FILE_PATTERNS",
    "RECOMMENDED_GITIGNORE_PATTERNS",
    "matching_rules",
    "sensitive_filename_match",
]
