from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
import yaml

from release_scholar.core.citation import (
    CitationAuthor,
    is_valid_orcid,
    load_citation,
    parse_citation,
    scaffold_citation,
)
from release_scholar.core.config import AuthorConfig
from release_scholar.core.exceptions import CitationParseError


@pytest.mark.parametrize(
    "value, expected",
    [
        ("https://orcid.org/0000-0002-1825-0097", True),
        ("https://orcid.org/0000-0002-1694-233X", True),
        ("0000-0002-1825-0097", False),
        ("http://orcid.org/0000-0002-1825-0097", False),
        ("https://orcid.org/0000-0002-1825-009", False),
        ("https://orcid.org/0000-0002-1825-0097\n", False),
        ("https://orcid.org/0000-0002-1825-009x", False),
        ("", False),
    ],
)
def test_orcid_format(value: str, expected: bool) -> None:
    assert is_valid_orcid(value) is expected


def test_parse_citation_accepts_partial_documents() -> None:
    assert parse_citation("title: Only a title\n") == {"title": "Only a title"}
    assert parse_citation("") is None


def test_parse_citation_rejects_malformed_yaml() -> None:
    with pytest.raises(CitationParseError):
        parse_citation("title: [unclosed\n")


def test_load_citation_missing_file(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        load_citation(tmp_path / "CITATION.cff")


def test_author_from_config_splits_on_last_space() -> None:
    author = CitationAuthor.from_config(
        AuthorConfig(name="Mary Ann Evans", orcid="https://orcid.org/0000-0002-1825-0097")
    )

    assert author.given_names == "Mary Ann"
    assert author.family_names == "Evans"
    assert author.to_dict() == {
        "family-names": "Evans",
        "given-names": "Mary Ann",
        "orcid": "https://orcid.org/0000-0002-1825-0097",
    }


def test_author_single_name_is_family_name() -> None:
    author = CitationAuthor.from_config(AuthorConfig(name="Plato"))
    assert author.family_names == "Plato"
    assert author.given_names == ""


def test_scaffold_without_author_uses_placeholder() -> None:
    cff = scaffold_citation("demo", released=date(2024, 3, 1))
    data = cff.to_dict()

    assert data["cff-version"] == "1.2.0"
    assert data["type"] == "software"
    assert data["title"] == "demo"
    assert data["authors"] == [{"family-names": "Lastname", "given-names": "Firstname"}]
    assert data["license"] == "CHANGE-ME"
    assert data["date-released"] == "2024-03-01"
    assert "version" not in data


def test_scaffold_dump_is_valid_citation_yaml() -> None:
    cff = scaffold_citation(
        "demo",
        author=AuthorConfig(name="Ada Lovelace"),
        version="1.0.0",
        released=date(2024, 3, 1),
    )

    loaded = yaml.safe_load(cff.dump())

    assert list(loaded)[:2] == ["cff-version", "message"]
    assert loaded["version"] == "1.0.0"
    assert loaded["authors"][0]["family-names"] == "Lovelace"
