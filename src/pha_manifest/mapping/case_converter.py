"""Recursive camelCase to snake_case key conversion.

The manifest consumed by the PHA runtime uses snake_case keys while the
authored app config is camelCase. Conversion walks the whole tree (dicts and
lists) and returns a new structure; scalar values and list order are kept.

Public Functions:
    decamelize: Convert a single key
    decamelize_keys: Convert every key of a nested dict/list tree

Design Invariants:
    - Pure: input is never mutated
    - Stable: converting an already snake_case key is a no-op
    - Non-string keys are copied unchanged
"""
from __future__ import annotations

import re
from typing import Any, Iterable

__all__ = ["copy_tree", "decamelize", "decamelize_keys"]

# Lower-to-upper boundary, then the end of a capital run before a capitalized word.
_LOWER_UPPER_RE = re.compile(r"([a-z\d])([A-Z])")
_UPPER_RUN_RE = re.compile(r"([A-Z]+)([A-Z][a-z\d]+)")


def decamelize(key: str) -> str:
    """Convert a camelCase key to snake_case.

    Examples:
        >>> decamelize("backgroundColor")
        'background_color'
        >>> decamelize("activeIcon")
        'active_icon'
        >>> decamelize("enableHTTPCache")
        'enable_http_cache'
        >>> decamelize("pull_refresh")
        'pull_refresh'
    """
    key = _LOWER_UPPER_RE.sub(r"\1_\2", key)
    return _UPPER_RUN_RE.sub(r"\1_\2", key).lower()


def decamelize_keys(obj: Any, *, preserve_keys: Iterable[str] = ()) -> Any:
    """Recursively convert dict keys of a JSON-like tree to snake_case.

    Args:
        obj: Any JSON-like object (dict / list / primitive)
        preserve_keys: Keys (camelCase or snake_case) whose container key is
            converted but whose value is copied without touching inner keys

    Returns:
        New object with converted keys
    """
    preserve = set(preserve_keys)

    if isinstance(obj, list):
        return [decamelize_keys(item, preserve_keys=preserve) for item in obj]

    if isinstance(obj, dict):
        out: dict[Any, Any] = {}
        for key, value in obj.items():
            if not isinstance(key, str):
                out[key] = value
                continue
            snake_key = decamelize(key)
            if key in preserve or snake_key in preserve:
                out[snake_key] = copy_tree(value)
            else:
                out[snake_key] = decamelize_keys(value, preserve_keys=preserve)
        return out

    return obj


def copy_tree(obj: Any) -> Any:
    """Copy a dict/list tree without converting keys."""
    if isinstance(obj, list):
        return [copy_tree(item) for item in obj]
    if isinstance(obj, dict):
        return {k: copy_tree(v) for k, v in obj.items()}
    return obj
