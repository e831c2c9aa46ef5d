"""Public facade for AppConfig to PHA manifest conversion.

This module provides the stable public API. Transformation logic lives in
the pha_manifest.mapping package; the facade keeps imports stable while the
helpers evolve.

Public Functions:
    transform_app_config: Convert an AppConfig into a snake_case manifest
    get_page_manifest_by_path: Extract the manifest of a single page
    set_real_url_to_manifest: Resolve page paths and assets to absolute URLs
    build_manifest: Transform and resolve URLs in one call

Internal Re-exports:
    decamelize: Key conversion helper (test usage)
    derive_page_name: Source path to page identifier (test usage)
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Union

from .mapping.app_config import MANIFEST_RETAIN_KEYS, transform_app_config
from .mapping.case_converter import decamelize
from .mapping.page_manifest import default_nsr_script_builder, get_page_manifest_by_path
from .mapping.real_url import derive_page_name, set_real_url_to_manifest
from .mapping.url_context import DocumentApi, RealUrlOptions

__all__ = [
    "MANIFEST_RETAIN_KEYS",
    "DocumentApi",
    "RealUrlOptions",
    "build_manifest",
    "default_nsr_script_builder",
    "get_page_manifest_by_path",
    "set_real_url_to_manifest",
    "transform_app_config",
    # Helper re-exports (test-only / internal use)
    "decamelize",
    "derive_page_name",
]


def build_manifest(
    app_config: Mapping[str, Any],
    options: Union[RealUrlOptions, Mapping[str, Any]],
    *,
    filter_keys: bool = True,
    extra_retain_keys: Iterable[str] = (),
) -> Dict[str, Any]:
    """Convert an AppConfig and resolve its page URLs.

    The transform builds a fresh tree, so the URL pass never touches the
    caller's config.

    Args:
        app_config: Authored app config (camelCase keys)
        options: URL resolution options (see RealUrlOptions)
        filter_keys: Restrict the root to recognized manifest keys
        extra_retain_keys: Additional root keys to keep when filtering

    Returns:
        Manifest dict with absolute page URLs
    """
    manifest = transform_app_config(
        app_config, filter_keys, extra_retain_keys=extra_retain_keys
    )
    set_real_url_to_manifest(options, manifest)
    return manifest
