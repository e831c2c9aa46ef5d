"""Single page manifest extraction.

The PHA runtime requests the manifest of one page at a time. The page
manifest is the app manifest with the requested page's fields merged on top,
so page-level values (path, name, data prefetches, tab bar) shadow the
app-level ones while the `pages` list stays available to the runtime.

Frame pages render standalone: they never inherit the app-level `tab_bar`,
though a `tab_bar` declared on the frame page itself is kept.

Server rendering (NSR) adds an `nsr` marker and, when the script builder
yields one, an `nsr_script` URL. The builder is pluggable; the default
derives `<name>.nsr.js` next to the page's resolved `script`.

Public Functions:
    get_page_manifest_by_path: Extract the manifest of one page
    default_nsr_script_builder: Default NSR script URL derivation
"""
from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .case_converter import decamelize

logger = logging.getLogger(__name__)

__all__ = ["NsrScriptBuilder", "default_nsr_script_builder", "get_page_manifest_by_path"]

NsrScriptBuilder = Callable[[Mapping[str, Any]], Optional[str]]


def default_nsr_script_builder(page: Mapping[str, Any]) -> Optional[str]:
    """Return the NSR bundle URL for a page with a resolved `.js` script."""
    script = page.get("script")
    if isinstance(script, str) and script.endswith(".js"):
        return script[: -len(".js")] + ".nsr.js"
    return None


def get_page_manifest_by_path(
    context: Optional[Mapping[str, Any]] = None,
    *,
    nsr_script_builder: NsrScriptBuilder = default_nsr_script_builder,
) -> Dict[str, Any]:
    """Build the manifest for a single page.

    Args:
        context: Mapping with `decamelize_app_config` (snake_case manifest),
            optional `path` (defaults to the first page) and optional `nsr`;
            camelCase keys are accepted too
        nsr_script_builder: Callable producing the NSR script for the page

    Returns:
        New dict with the app manifest and the page fields merged on top, or
        `{}` when there is no manifest or no matching page
    """
    context = {decamelize(k): v for k, v in (context or {}).items()}
    manifest = context.get("decamelize_app_config")
    if not isinstance(manifest, Mapping) or not manifest:
        return {}

    pages = manifest.get("pages")
    if not isinstance(pages, list) or not pages:
        logger.debug("Manifest has no pages; returning empty page manifest")
        return {}

    path = context.get("path")
    page = _find_page(pages, path)
    if page is None:
        logger.debug("No page matches path %s", path)
        return {}

    result = copy.deepcopy(dict(manifest))
    page_fields = copy.deepcopy(dict(page))
    if page_fields.get("frame"):
        # frames carry no app-level chrome
        result.pop("tab_bar", None)
    result.update(page_fields)

    if context.get("nsr"):
        result["nsr"] = True
        nsr_script = nsr_script_builder(page_fields)
        if nsr_script:
            result["nsr_script"] = nsr_script
    return result


def _find_page(pages: List[Any], path: Optional[str]) -> Optional[Mapping[str, Any]]:
    candidates = [p for p in pages if isinstance(p, Mapping)]
    if not candidates:
        return None
    if not path:
        return candidates[0]
    for page in candidates:
        if page.get("path") == path or page.get("key") == path:
            return page
    return None
