from __future__ import annotations

from pathlib import Path

import pytest

from release_scholar.core.report import Report, Severity
from release_scholar.core.validation import git as git_validation
from release_scholar.core.validation.git import RepositoryTagInfo
from tests.helpers.env import TestGitRepo


def _git_results(report: Report):
    return [(r.severity, r.message) for r in report.results if r.category == "Git"]


@pytest.mark.requires_git
class TestTagResolution:
    def test_semver_tag_on_head(self, git_repo: TestGitRepo) -> None:
        git_repo.tag("v1.2.3")
        report = Report()

        info = git_validation.validate(git_repo.repo_path, report)

        assert info == RepositoryTagInfo(version="1.2.3", tag="v1.2.3")
        assert _git_results(report) == [
            (Severity.PASS, "Working directory is clean"),
            (Severity.PASS, "HEAD is tagged: v1.2.3 (version 1.2.3)"),
        ]

    def test_annotated_tag_is_peeled(self, git_repo: TestGitRepo) -> None:
        git_repo.tag("v2.0.0", annotated=True)

        info = git_validation.validate(git_repo.repo_path, Report())

        assert info is not None
        assert info.version == "2.0.0"

    def test_untagged_head_fails(self, git_repo: TestGitRepo) -> None:
        git_repo.tag("v1.0.0")
        git_repo.commit("after the release")
        report = Report()

        info = git_validation.validate(git_repo.repo_path, report)

        assert info is None
        assert (Severity.FAIL, "HEAD has no semver tag (expected vX.Y.Z)") in _git_results(report)
        assert sum(1 for r in report.results if r.severity is Severity.FAIL) == 1

    @pytest.mark.parametrize("name", ["1.2.3", "v1.2", "v1.2.3-rc1", "release-1.2.3", "v1.2.3.4"])
    def test_non_semver_tags_are_ignored(self, git_repo: TestGitRepo, name: str) -> None:
        git_repo.tag(name)

        assert git_validation.validate(git_repo.repo_path, Report()) is None

    def test_first_listed_semver_tag_wins(self, git_repo: TestGitRepo) -> None:
        git_repo.tag("v1.10.0")
        git_repo.tag("v1.9.0")

        info = git_validation.validate(git_repo.repo_path, Report())

        # git lists tags by refname, so "v1.10.0" sorts before "v1.9.0".
        assert info is not None
        assert info.tag == "v1.10.0"

    def test_tag_on_other_commit_is_ignored(self, git_repo: TestGitRepo) -> None:
        first = git_repo.head()
        git_repo.commit("second")
        git_repo.tag("v0.1.0", ref=first)

        assert git_validation.validate(git_repo.repo_path, Report()) is None


@pytest.mark.requires_git
class TestCleanliness:
    def test_dirty_tree_warns_with_paths(self, git_repo: TestGitRepo) -> None:
        git_repo.tag("v1.0.0")
        git_repo.write("README.md", "# edited\n")
        git_repo.write("scratch.txt", "x\n")
        report = Report()

        info = git_validation.validate(git_repo.repo_path, report)

        warns = [m for s, m in _git_results(report) if s is Severity.WARN]
        assert warns == ["Working directory has 2 uncommitted change(s): README.md, scratch.txt"]
        # A dirty tree does not prevent tag resolution.
        assert info is not None

    def test_dirty_listing_is_truncated(self, git_repo: TestGitRepo) -> None:
        for i in range(7):
            git_repo.write(f"file{i}.txt", "x\n")
        report = Report()

        git_validation.validate(git_repo.repo_path, report)

        warn = next(m for s, m in _git_results(report) if s is Severity.WARN)
        assert warn.startswith("Working directory has 7 uncommitted change(s): ")
        assert len(warn.split(": ", 1)[1].split(", ")) == git_validation.MAX_LISTED_DIRTY_PATHS

    def test_ignored_files_do_not_dirty_the_tree(self, git_repo: TestGitRepo) -> None:
        git_repo.write(".gitignore", "build/\n")
        git_repo.commit("ignore build")
        git_repo.write("build/out.o", "x\n")
        report = Report()

        git_validation.validate(git_repo.repo_path, report)

        assert (Severity.PASS, "Working directory is clean") in _git_results(report)


@pytest.mark.requires_git
class TestStructuralErrors:
    def test_not_a_repository(self, tmp_path: Path) -> None:
        report = Report()

        info = git_validation.validate(tmp_path, report)

        assert info is None
        assert len(report.results) == 1
        assert report.results[0].severity is Severity.FAIL
        assert report.results[0].message.startswith("Cannot open repository: ")

    def test_unborn_head(self, tmp_path: Path) -> None:
        empty = TestGitRepo(tmp_path / "empty", initial_commit=False)
        report = Report()

        info = git_validation.validate(empty.repo_path, report)

        assert info is None
        messages = [m for _, m in _git_results(report)]
        assert messages[0] == "Working directory is clean"
        assert messages[1].startswith("Cannot read HEAD: ")
