"""CITATION.cff parsing and scaffolding."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from release_scholar.core.config import AuthorConfig
from release_scholar.core.exceptions import CitationParseError

CITATION_FILE = "CITATION.cff"
CFF_VERSION = "1.2.0"

ORCID_RE = re.compile(r"^https://orcid\.org/[0-9]{4}-[0-9]{4}-[0-9]{4}-[0-9]{3}[0-9X]$")


def is_valid_orcid(value: str) -> bool:
    return ORCID_RE.fullmatch(value) is not None


def parse_citation(text: str) -> Any:
    """Parse citation YAML into a loosely typed tree.

    Missing fields are not errors here; only documents that are not
    well-formed YAML raise.

    Raises:
        CitationParseError: If ``text`` is not valid YAML.
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise CitationParseError(str(exc)) from exc


def load_citation(path: Path) -> Any:
    """Read and parse a citation file.

    Raises:
        OSError: If the file cannot be read.
        CitationParseError: If the file is not valid YAML.
    """
    return parse_citation(Path(path).read_text(encoding="utf-8"))


@dataclass
class CitationAuthor:
    family_names: str
    given_names: str = ""
    orcid: Optional[str] = None
    email: Optional[str] = None
    affiliation: Optional[str] = None

    @classmethod
    def from_config(cls, author: AuthorConfig) -> "CitationAuthor":
        # "Ada Lovelace" -> given "Ada", family "Lovelace"
        name = (author.name or "").strip()
        given, _, family = name.rpartition(" ")
        return cls(
            family_names=family or "Unknown",
            given_names=given,
            orcid=author.orcid,
            email=author.email,
        )

    def to_dict(self) -> Dict[str, str]:
        data = {"family-names": self.family_names, "given-names": self.given_names}
        if self.orcid:
            data["orcid"] = self.orcid
        if self.email:
            data["email"] = self.email
        if self.affiliation:
            data["affiliation"] = self.affiliation
        return data


@dataclass
class CitationCff:
    title: str
    authors: List[CitationAuthor] = field(default_factory=list)
    version: Optional[str] = None
    license: Optional[str] = None
    date_released: Optional[str] = None
    repository_code: Optional[str] = None
    abstract: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    cff_type: str = "software"
    message: str = "If you use this software, please cite it using the metadata from this file."

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "cff-version": CFF_VERSION,
            "message": self.message,
            "type": self.cff_type,
            "title": self.title,
            "authors": [a.to_dict() for a in self.authors],
        }
        optional = (
            ("version", self.version),
            ("license", self.license),
            ("date-released", self.date_released),
            ("repository-code", self.repository_code),
            ("abstract", self.abstract),
        )
        for key, value in optional:
            if value:
                data[key] = value
        if self.keywords:
            data["keywords"] = list(self.keywords)
        return data

    def dump(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True, default_flow_style=False)


def scaffold_citation(
    title: str,
    *,
    author: Optional[AuthorConfig] = None,
    version: Optional[str] = None,
    license_id: str = "CHANGE-ME",
    released: Optional[date] = None,
) -> CitationCff:
    """Build a starting CITATION.cff for a project."""
    authors = [CitationAuthor.from_config(author)] if author and author.name else [
        CitationAuthor(family_names="Lastname", given_names="Firstname")
    ]
    return CitationCff(
        title=title,
        authors=authors,
        version=version,
        license=license_id,
        date_released=(released or date.today()).isoformat(),
    )


__all__ = [
    "CITATION_FILE",
    "ORCID_RE",
    "is_valid_orcid",
    "parse_citation",
    "load_citation",
    "CitationAuthor",
    "CitationCff",
    "scaffold_citation",
]
