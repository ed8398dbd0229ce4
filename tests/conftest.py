import shutil
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'release_scholar' and tests/ importable for helpers.
for p in (SRC_ROOT, REPO_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from release_scholar.core.config import CONFIG_HOME_ENV, clear_config_cache
from release_scholar.core.stdlib_logging import reset_logging_for_tests
from tests.helpers.env import TestGitRepo


def pytest_collection_modifyitems(config, items):  # type: ignore[no-untyped-def]
    """Skip git-backed tests when no git executable is available."""
    if shutil.which("git") is not None:
        return
    skip_git = pytest.mark.skip(reason="git executable not found")
    for item in items:
        if "requires_git" in item.keywords:
            item.add_marker(skip_git)


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user-global config home at an empty directory for every test."""
    home = tmp_path_factory.mktemp("config-home")
    monkeypatch.setenv(CONFIG_HOME_ENV, str(home))
    monkeypatch.delenv("NO_COLOR", raising=False)
    clear_config_cache()
    yield home
    clear_config_cache()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging_for_tests()


@pytest.fixture
def user_config_file(isolated_config_home: Path) -> Path:
    """Path of the user-global config file inside the isolated config home."""
    target = isolated_config_home / "release-scholar" / "config.yml"
    target.parent.mkdir(parents=True, exist_ok=True)
    return target


@pytest.fixture
def git_repo(tmp_path: Path) -> TestGitRepo:
    """A fresh repository with one commit containing README.md."""
    return TestGitRepo(tmp_path / "project")


@pytest.fixture
def release_ready_repo(git_repo: TestGitRepo) -> TestGitRepo:
    """A clean repository tagged v1.2.3 with every required file in place."""
    git_repo.make_release_ready(version="1.2.3")
    return git_repo
