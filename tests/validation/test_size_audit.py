from __future__ import annotations

from pathlib import Path

import pytest

from release_scholar.core.report import Report, Severity
from release_scholar.core.utils.git import list_tracked_files, open_repository
from release_scholar.core.validation import size
from tests.helpers.env import TestGitRepo


def _pairs(report: Report):
    return [(r.severity, r.message) for r in report.results if r.category == "Size"]


@pytest.fixture
def small_thresholds(monkeypatch: pytest.MonkeyPatch) -> None:
    """Scale the thresholds down to byte counts a test can write quickly."""
    monkeypatch.setattr(size, "LARGE_FILE_THRESHOLD", 100)
    monkeypatch.setattr(size, "VERY_LARGE_FILE_THRESHOLD", 1_000)
    monkeypatch.setattr(size, "REPO_SIZE_WARN_THRESHOLD", 5_000)
    monkeypatch.setattr(size, "REPO_SIZE_FAIL_THRESHOLD", 20_000)


@pytest.mark.requires_git
class TestSizeAudit:
    def test_small_repository_passes(self, git_repo: TestGitRepo) -> None:
        report = Report()

        size.validate(git_repo.repo_path, report)

        assert _pairs(report) == [
            (Severity.PASS, "Tracked files total 0.0 MB (1 files)"),
            (Severity.PASS, "No large files detected (>= 1.0 MB)"),
        ]

    @pytest.mark.usefixtures("small_thresholds")
    @pytest.mark.parametrize(
        "file_size, expected",
        [
            (99, None),
            (100, Severity.WARN),
            (999, Severity.WARN),
            (1_000, Severity.FAIL),
        ],
    )
    def test_per_file_thresholds(self, git_repo: TestGitRepo, file_size: int, expected) -> None:
        git_repo.write_sized("data/blob.dat", file_size)
        git_repo.commit("data")
        report = Report()

        size.validate(git_repo.repo_path, report)

        per_file = [(s, m) for s, m in _pairs(report) if m.startswith("data/blob.dat is ")]
        if expected is None:
            assert per_file == []
        else:
            assert [s for s, _ in per_file] == [expected]

    @pytest.mark.usefixtures("small_thresholds")
    def test_very_large_file_message(self, git_repo: TestGitRepo) -> None:
        git_repo.write_sized("model.dat", 1_500)
        git_repo.commit("model")
        report = Report()

        size.validate(git_repo.repo_path, report)

        assert (Severity.FAIL, "model.dat is 0.0 MB, consider removing or using Git LFS") in _pairs(report)

    @pytest.mark.usefixtures("small_thresholds")
    def test_large_binary_gets_both_warnings(self, git_repo: TestGitRepo) -> None:
        git_repo.write_sized("assets/logo.png", 200)
        git_repo.commit("logo")
        report = Report()

        size.validate(git_repo.repo_path, report)

        pairs = _pairs(report)
        assert (Severity.WARN, "assets/logo.png is 0.0 MB") in pairs
        assert (
            Severity.WARN,
            "Binary/vendor file tracked: assets/logo.png (0.0 MB), consider .gitignore or Git LFS",
        ) in pairs

    @pytest.mark.usefixtures("small_thresholds")
    def test_small_binary_is_not_flagged(self, git_repo: TestGitRepo) -> None:
        git_repo.write_sized("icon.png", 50)
        git_repo.commit("icon")
        report = Report()

        size.validate(git_repo.repo_path, report)

        assert not any(m.startswith("Binary/vendor") for _, m in _pairs(report))

    @pytest.mark.usefixtures("small_thresholds")
    @pytest.mark.parametrize(
        "sizes, expected",
        [
            ([990] * 6, Severity.WARN),
            ([990] * 21, Severity.FAIL),
        ],
    )
    def test_aggregate_thresholds(self, git_repo: TestGitRepo, sizes, expected) -> None:
        for i, file_size in enumerate(sizes):
            git_repo.write_sized(f"chunks/{i}.dat", file_size)
        git_repo.commit("chunks")
        report = Report()

        size.validate(git_repo.repo_path, report)

        aggregate = _pairs(report)[0]
        assert aggregate[0] is expected
        assert aggregate[1].startswith("Tracked files total ")

    @pytest.mark.usefixtures("small_thresholds")
    @pytest.mark.parametrize("offset, expected", [(0, Severity.FAIL), (-1, Severity.WARN)])
    def test_aggregate_fail_boundary_is_inclusive(self, git_repo: TestGitRepo, offset, expected) -> None:
        for i in range(19):
            git_repo.write_sized(f"chunks/{i}.dat", 990)
        git_repo.commit("chunks")
        repo = open_repository(git_repo.repo_path)
        current = sum((repo.root / p).stat().st_size for p in list_tracked_files(repo))
        padding = size.REPO_SIZE_FAIL_THRESHOLD + offset - current
        assert padding > 0
        git_repo.write_sized("chunks/padding.dat", padding)
        git_repo.commit("padding")
        report = Report()

        size.validate(git_repo.repo_path, report)

        assert _pairs(report)[0][0] is expected

    @pytest.mark.usefixtures("small_thresholds")
    def test_staged_file_missing_on_disk_is_skipped(self, git_repo: TestGitRepo) -> None:
        git_repo.write_sized("gone.dat", 500)
        git_repo.commit("gone")
        (git_repo.repo_path / "gone.dat").unlink()
        report = Report()

        size.validate(git_repo.repo_path, report)

        assert _pairs(report)[0] == (Severity.PASS, "Tracked files total 0.0 MB (1 files)")

    def test_not_a_repository_records_nothing(self, tmp_path: Path) -> None:
        report = Report()
        size.validate(tmp_path, report)
        assert report.results == ()


@pytest.mark.parametrize(
    "name, expected",
    [
        ("dist/app.ZIP", True),
        ("static/app.min.js", True),
        ("static/app.js", False),
        ("docs/paper.pdf", True),
        ("src/main.rs", False),
    ],
)
def test_binary_names(name: str, expected: bool) -> None:
    assert size.is_binary_name(name) is expected
