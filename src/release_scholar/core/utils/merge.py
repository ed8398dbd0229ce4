"""Configuration layer merging.

A higher layer wins key by key. Mappings merge recursively, scalars replace.
Lists replace too, unless their first element is a directive:

- ``"+"``: append the remaining items to the lower layer's list, skipping
  items it already holds (``required_files: ["+", NOTICE]``)
- ``"="``: replace with the remaining items (same as no directive)
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

APPEND = "+"
REPLACE = "="


def merge_lists(lower: List[Any], higher: List[Any]) -> List[Any]:
    """Combine two list values according to the directive in ``higher``.

    >>> merge_lists(["LICENSE"], ["+", "NOTICE", "LICENSE"])
    ['LICENSE', 'NOTICE']
    >>> merge_lists(["LICENSE"], ["NOTICE"])
    ['NOTICE']
    """
    if not higher or higher[0] not in (APPEND, REPLACE):
        return list(higher)
    items = higher[1:]
    if higher[0] == REPLACE:
        return list(items)
    combined = list(lower)
    combined.extend(item for item in items if item not in lower)
    return combined


def deep_merge(lower: Dict[str, Any], higher: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``lower`` overlaid with ``higher``; neither input is modified."""
    merged: Dict[str, Any] = dict(lower)
    for key, value in (higher or {}).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = merge_lists(current, value)
        elif isinstance(value, list):
            # No lower list to append to: drop a leading directive.
            merged[key] = merge_lists([], value)
        else:
            merged[key] = value
    return merged


def merge_layers(layers: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Fold configuration layers, lowest priority first."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged = deep_merge(merged, layer)
    return merged


__all__ = ["APPEND", "REPLACE", "merge_lists", "deep_merge", "merge_layers"]
