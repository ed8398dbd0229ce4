"""
Project initialization command.

SUMMARY: Scaffold CITATION.cff and project configuration
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from release_scholar.cli import (
    OutputFormatter,
    add_force_flag,
    add_json_flag,
    add_project_dir_flag,
    resolve_project_dir,
)
from release_scholar.core.citation import CITATION_FILE, scaffold_citation
from release_scholar.core.config import (
    PROJECT_CONFIG_NAMES,
    ReleaseScholarConfig,
    load_config,
    project_config_path,
)
from release_scholar.core.exceptions import ConfigError, RepositoryError
from release_scholar.core.utils.git import head_commit, open_repository
from release_scholar.core.validation.git import find_head_tag

logger = logging.getLogger(__name__)

SUMMARY = "Scaffold CITATION.cff and project configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_project_dir_flag(parser)
    add_force_flag(parser)
    add_json_flag(parser)


def _head_version(project_dir: Path) -> Optional[str]:
    """Return the version of the semver tag on HEAD, if the project has one."""
    try:
        repo = open_repository(project_dir)
        info = find_head_tag(repo, head_commit(repo))
    except RepositoryError as exc:
        logger.debug("no tag version for scaffold: %s", exc)
        return None
    return info.version if info is not None else None


def _project_config_text(config: ReleaseScholarConfig) -> str:
    payload = {
        "required_files": list(config.required_files),
        "archive_dir": config.archive_dir,
    }
    return yaml.safe_dump(payload, sort_keys=False, default_flow_style=False)


def _config_target(project_dir: Path) -> Path:
    """The existing project config file (either extension), else ``.release-scholar.yml``."""
    return project_config_path(project_dir) or project_dir / PROJECT_CONFIG_NAMES[0]


def _write(path: Path, content: str, *, force: bool) -> bool:
    if path.exists() and not force:
        return False
    path.write_text(content, encoding="utf-8")
    return True


def main(args: argparse.Namespace) -> int:
    """Write the scaffold files, leaving existing ones alone unless --force."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        project_dir = resolve_project_dir(args)
        config = load_config(project_dir)
    except (NotADirectoryError, ConfigError) as exc:
        formatter.error(exc, error_code="init_error")
        return 2

    force = bool(getattr(args, "force", False))
    citation = scaffold_citation(
        project_dir.name,
        author=config.author,
        version=_head_version(project_dir),
    )

    targets: Dict[Path, str] = {
        project_dir / CITATION_FILE: citation.dump(),
        _config_target(project_dir): _project_config_text(config),
    }

    written: List[str] = []
    skipped: List[str] = []
    for path, content in targets.items():
        (written if _write(path, content, force=force) else skipped).append(path.name)

    lines = [f"Created {name}" for name in written]
    lines += [f"Skipped {name} (already exists, use --force to overwrite)" for name in skipped]
    formatter.success(
        {"project_dir": str(project_dir), "written": written, "skipped": skipped},
        "\n".join(lines),
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
