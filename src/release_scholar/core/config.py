"""Layered YAML configuration.

Layers, lowest to highest priority:

1. Bundled defaults (``release_scholar/data/config/defaults.yaml``)
2. User-global ``<config-home>/release-scholar/config.yml``
3. Project ``.release-scholar.yml`` (or ``.yaml``) at the project root

``<config-home>`` is ``$RELEASE_SCHOLAR_CONFIG_HOME`` when set, otherwise
``$XDG_CONFIG_HOME``, otherwise ``~/.config``. Each file layer is validated
against ``config.schema.yaml`` before it is merged.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from release_scholar.core.exceptions import ConfigError
from release_scholar.core.schemas import validate_payload_safe
from release_scholar.core.utils.merge import merge_layers
from release_scholar.data import read_yaml

logger = logging.getLogger(__name__)

CONFIG_HOME_ENV = "RELEASE_SCHOLAR_CONFIG_HOME"
PROJECT_CONFIG_NAMES = (".release-scholar.yml", ".release-scholar.yaml")
USER_CONFIG_NAME = "config.yml"

# The history scan never walks further than this, whatever is configured.
MAX_HISTORY_COMMITS = 100


@dataclass
class AuthorConfig:
    name: Optional[str] = None
    orcid: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        return {k: v for k, v in (("name", self.name), ("orcid", self.orcid), ("email", self.email)) if v}


@dataclass
class ReleaseScholarConfig:
    """Effective configuration for one project.

    Attributes:
        required_files: Paths, relative to the project root, that must exist
        archive_dir: Output directory of the build step
        language: ISO 639-2 language code for deposit metadata
        author: Default author used when scaffolding citation metadata
        history_max_commits: Commit cap for the history secret scan
        git_timeout_seconds: Timeout applied to every git invocation
        log_level: Default logging level name
        sources: Configuration files merged into this config, in order
    """

    required_files: List[str] = field(default_factory=list)
    archive_dir: str = "release"
    language: str = "eng"
    author: Optional[AuthorConfig] = None
    history_max_commits: int = MAX_HISTORY_COMMITS
    git_timeout_seconds: float = 60.0
    log_level: str = "WARNING"
    sources: List[Path] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, sources: Optional[List[Path]] = None) -> "ReleaseScholarConfig":
        author_data = data.get("author") or {}
        author = AuthorConfig(
            name=author_data.get("name"),
            orcid=author_data.get("orcid"),
            email=author_data.get("email"),
        ) if author_data else None
        history = data.get("history_scan") or {}
        timeouts = data.get("timeouts") or {}
        log_cfg = data.get("logging") or {}
        return cls(
            required_files=[str(f) for f in data.get("required_files") or []],
            archive_dir=str(data.get("archive_dir") or "release").strip("/") or "release",
            language=str(data.get("language") or "eng"),
            author=author,
            history_max_commits=min(int(history.get("max_commits", MAX_HISTORY_COMMITS)), MAX_HISTORY_COMMITS),
            git_timeout_seconds=float(timeouts.get("git_operations_seconds", 60.0)),
            log_level=str(log_cfg.get("level", "WARNING")).upper(),
            sources=list(sources or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "required_files": list(self.required_files),
            "archive_dir": self.archive_dir,
            "language": self.language,
            "history_scan": {"max_commits": self.history_max_commits},
            "timeouts": {"git_operations_seconds": self.git_timeout_seconds},
            "logging": {"level": self.log_level},
        }
        if self.author is not None and self.author.to_dict():
            data["author"] = self.author.to_dict()
        return data


def user_config_dir() -> Path:
    """Return the directory holding the user-global configuration file."""
    override = os.environ.get(CONFIG_HOME_ENV, "").strip()
    if override:
        return Path(override).expanduser() / "release-scholar"
    xdg = os.environ.get("XDG_CONFIG_HOME", "").strip()
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / "release-scholar"


def user_config_path() -> Path:
    return user_config_dir() / USER_CONFIG_NAME


def project_config_path(project_dir: Path) -> Optional[Path]:
    """Return the project configuration file, preferring ``.yml``."""
    for name in PROJECT_CONFIG_NAMES:
        candidate = Path(project_dir) / name
        if candidate.is_file():
            return candidate
    return None


def _read_layer(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}", context={"path": str(path)}) from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"{path} must contain a YAML mapping, got {type(data).__name__}",
            context={"path": str(path)},
        )

    errors = validate_payload_safe(data, "config")
    if errors:
        raise ConfigError(
            f"Invalid configuration in {path}: {'; '.join(errors)}",
            context={"path": str(path), "errors": errors},
        )
    return data


def load_config(project_dir: Optional[Path | str] = None) -> ReleaseScholarConfig:
    """Load the effective configuration for ``project_dir``.

    Args:
        project_dir: Project root. Defaults to the current directory.

    Returns:
        ReleaseScholarConfig: Defaults merged with user and project layers.

    Raises:
        ConfigError: If a present layer is unreadable, not a mapping, or
            violates the configuration schema.
    """
    root = Path(project_dir) if project_dir is not None else Path.cwd()
    layers: List[Dict[str, Any]] = [read_yaml("config", "defaults.yaml")]
    sources: List[Path] = []

    for path in (user_config_path(), project_config_path(root)):
        if path is None or not path.is_file():
            continue
        layers.append(_read_layer(path))
        sources.append(path)
        logger.debug("merging configuration layer %s", path)

    return ReleaseScholarConfig.from_dict(merge_layers(layers), sources=sources)


_config_cache: Dict[Tuple[Any, ...], ReleaseScholarConfig] = {}


def _cache_key(root: Path) -> Tuple[Any, ...]:
    # The key changes whenever a layer file is edited.
    stamps: List[Tuple[str, int]] = []
    for path in (user_config_path(), project_config_path(root)):
        if path is not None and path.is_file():
            stamps.append((str(path), path.stat().st_mtime_ns))
    return (str(root), os.environ.get(CONFIG_HOME_ENV, ""), tuple(stamps))


def get_cached_config(project_dir: Optional[Path] = None) -> ReleaseScholarConfig:
    """Return :func:`load_config` output, cached per project and file state."""
    root = (Path(project_dir) if project_dir is not None else Path.cwd()).resolve()
    key = _cache_key(root)
    cached = _config_cache.get(key)
    if cached is None:
        cached = load_config(root)
        _config_cache[key] = cached
    return cached


def clear_config_cache() -> None:
    _config_cache.clear()


__all__ = [
    "MAX_HISTORY_COMMITS",
    "AuthorConfig",
    "ReleaseScholarConfig",
    "user_config_dir",
    "user_config_path",
    "project_config_path",
    "load_config",
    "get_cached_config",
    "clear_config_cache",
]
