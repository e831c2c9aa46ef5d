"""Package initialization for pha-manifest.

Exposes the manifest helpers at package level so callers can write
`from pha_manifest import transform_app_config`.
"""

from .manifest import (
    MANIFEST_RETAIN_KEYS,
    RealUrlOptions,
    build_manifest,
    get_page_manifest_by_path,
    set_real_url_to_manifest,
    transform_app_config,
)

__all__ = [
    "MANIFEST_RETAIN_KEYS",
    "RealUrlOptions",
    "build_manifest",
    "get_page_manifest_by_path",
    "set_real_url_to_manifest",
    "transform_app_config",
]
