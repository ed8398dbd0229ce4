"""Bundled data files.

``config/defaults.yaml`` holds the lowest configuration layer and
``schemas/*.schema.yaml`` the JSON Schemas (written as YAML) that every
configuration layer is checked against.
"""

from __future__ import annotations

import copy
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

DATA_PACKAGE = "release_scholar.data"


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Return the filesystem path of a bundled file (or of its directory).

    Example:
        >>> get_data_path("schemas", "config.schema.yaml").name
        'config.schema.yaml'
    """
    root = Path(str(resources.files(DATA_PACKAGE) / subpackage))
    return root / filename if filename else root


@lru_cache(maxsize=None)
def _load_yaml(subpackage: str, filename: str) -> Any:
    text = get_data_path(subpackage, filename).read_text(encoding="utf-8")
    return yaml.safe_load(text)


def read_yaml(subpackage: str, filename: str) -> Any:
    """Parse a bundled YAML file.

    Files are parsed once per process; callers get their own copy and may
    modify it freely.
    """
    return copy.deepcopy(_load_yaml(subpackage, filename))


__all__ = ["DATA_PACKAGE", "get_data_path", "read_yaml"]
