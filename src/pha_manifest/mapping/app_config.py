"""AppConfig to ManifestConfig transformation.

Turns the authored camelCase app config into the snake_case manifest read by
the PHA runtime:

1. Every key in the tree is converted to snake_case
2. `routes` is renamed to `pages` (routes win over an explicit `pages`)
3. `window` fields are hoisted onto the manifest root
4. Optionally, root keys outside the recognized manifest fields are dropped

Payload-carrying fields are copied verbatim so user data survives:
    - `request_headers` header maps
    - data prefetch `data` payloads and `headers` maps (legacy `header` is
      renamed to `headers`)

Tab bar items authored with `text` instead of `name` are normalized to
`name`.

Public Functions:
    transform_app_config: Build a ManifestConfig dict from an AppConfig dict

Public Constants:
    MANIFEST_RETAIN_KEYS: Root keys kept when filtering is enabled
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping

from .case_converter import copy_tree, decamelize, decamelize_keys

logger = logging.getLogger(__name__)

__all__ = ["MANIFEST_RETAIN_KEYS", "transform_app_config"]

MANIFEST_RETAIN_KEYS = frozenset(
    {
        # document markup
        "spm",
        "metas",
        "links",
        "scripts",
        # app identity
        "name",
        "description",
        "icons",
        "app_key",
        "app_icon",
        "start_url",
        # networking
        "data_prefetches",
        "data_prefetch",
        "request_headers",
        "query_params_pass_keys",
        "query_params_pass_ignore_keys",
        # chrome
        "tab_bar",
        "tab_header",
        "page_header",
        "page_footer",
        # pages
        "pages",
        "url_prefix",
        "url_suffix",
        # offline / caching
        "offline_resources",
        "manifest_prefetch_expires",
        "manifest_prefetch_max_age",
        "max_age",
        "expires",
    }
)

_VERBATIM_KEYS = frozenset({"request_headers"})
_PREFETCH_KEYS = frozenset({"data_prefetches", "data_prefetch"})
_PREFETCH_PAYLOAD_KEYS = ("data", "headers")


def transform_app_config(
    config: Mapping[str, Any],
    filter_keys: bool = True,
    *,
    extra_retain_keys: Iterable[str] = (),
) -> Dict[str, Any]:
    """Convert an AppConfig mapping into a ManifestConfig dict.

    Args:
        config: Authored app config (camelCase keys)
        filter_keys: When True, only recognized root keys (plus fields hoisted
            from `window`) are kept; when False every converted key is kept
        extra_retain_keys: Additional root keys to keep when filtering,
            accepted in camelCase or snake_case

    Returns:
        New manifest dict; the input is not mutated
    """
    manifest: Dict[str, Any] = {}
    window_fields: set[str] = set()
    has_routes = "routes" in config

    for key, value in config.items():
        if not isinstance(key, str):
            manifest[key] = value
            continue
        snake_key = decamelize(key)

        if snake_key == "window":
            if isinstance(value, Mapping):
                hoisted = _transform_tree(value)
                window_fields.update(hoisted)
                manifest.update(hoisted)
            else:
                logger.debug("Ignoring non-mapping window value of type %s", type(value).__name__)
            continue

        if snake_key == "routes":
            snake_key = "pages"
        elif snake_key == "pages" and has_routes:
            logger.debug("Both routes and pages present; routes take precedence")
            continue

        manifest[snake_key] = _transform_value(snake_key, value)

    if not filter_keys:
        return manifest

    allowed = MANIFEST_RETAIN_KEYS | window_fields | {decamelize(k) for k in extra_retain_keys}
    dropped = [k for k in manifest if k not in allowed]
    if dropped:
        logger.debug("Dropping unrecognized manifest keys: %s", ", ".join(map(str, dropped)))
    return {k: v for k, v in manifest.items() if k in allowed}


def _transform_value(snake_key: str, value: Any) -> Any:
    if snake_key in _VERBATIM_KEYS:
        return copy_tree(value)
    if snake_key in _PREFETCH_KEYS and isinstance(value, list):
        return [_transform_prefetch(item) for item in value]
    if snake_key == "tab_bar" and isinstance(value, Mapping):
        return _transform_tab_bar(value)
    return _transform_tree(value)


def _transform_tree(obj: Any) -> Any:
    if isinstance(obj, list):
        return [_transform_tree(item) for item in obj]
    if isinstance(obj, Mapping):
        out: Dict[Any, Any] = {}
        for key, value in obj.items():
            if not isinstance(key, str):
                out[key] = value
                continue
            snake_key = decamelize(key)
            out[snake_key] = _transform_value(snake_key, value)
        return out
    return obj


def _transform_prefetch(item: Any) -> Any:
    """Convert one data prefetch entry, keeping its request payload intact."""
    if not isinstance(item, Mapping):
        return item
    entry = dict(item)
    if "header" in entry and "headers" not in entry:
        entry["headers"] = entry.pop("header")
    return decamelize_keys(entry, preserve_keys=_PREFETCH_PAYLOAD_KEYS)


def _transform_tab_bar(tab_bar: Mapping[str, Any]) -> Dict[str, Any]:
    converted = _transform_tree(tab_bar)
    items = converted.get("items")
    if isinstance(items, list):
        for item in items:
            # older configs label tab items with `text`
            if isinstance(item, dict) and "text" in item and "name" not in item:
                item["name"] = item.pop("text")
    return converted
