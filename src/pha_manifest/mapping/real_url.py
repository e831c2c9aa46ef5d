"""Resolve manifest pages to absolute URLs.

Rewrites every page, and recursively every frame of a page, in place:

    path       = url_prefix + name
    key        = name
    script     = cdn_prefix + name + ".js"    (templates only)
    stylesheet = cdn_prefix + name + ".css"   (templates without inline style)
    document   = api.apply_method(page)["document"]  (templates only)

`name` falls back to an identifier derived from `source`
(`pages/Home1/index` -> `home1`). A page with neither (a frames container)
keeps its path and key but still receives its document and has its frames
resolved. Frames stay nested under their page.

Header and footer documents (`page_header`, `page_footer`) that carry a
`source`, at the manifest root or on a page, get an absolute `url` and, for
templates, their own script and stylesheet.

Exceptions raised by the document provider propagate to the caller.

Public Functions:
    set_real_url_to_manifest: Resolve all page URLs of a manifest in place
    derive_page_name: Page identifier derived from a source path
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, MutableMapping, Optional, Union

from .url_context import RealUrlOptions, resolve_apply_method

logger = logging.getLogger(__name__)

__all__ = ["derive_page_name", "set_real_url_to_manifest"]

_CHROME_DOCUMENT_KEYS = ("page_header", "page_footer")


def derive_page_name(source: Optional[str]) -> Optional[str]:
    """Derive a page identifier from its source path.

    Examples:
        >>> derive_page_name("pages/Home1/index")
        'home1'
        >>> derive_page_name("pages/Shop/Detail/index")
        'shop_detail'
    """
    if not source:
        return None
    parts = [p for p in source.strip("/").split("/") if p]
    if parts and parts[0] == "pages":
        parts = parts[1:]
    if len(parts) > 1 and parts[-1] == "index":
        parts = parts[:-1]
    return "_".join(parts).lower() or None


def set_real_url_to_manifest(
    options: Union[RealUrlOptions, Mapping[str, Any]],
    manifest: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Rewrite page paths and resources of a manifest to absolute URLs.

    Args:
        options: `RealUrlOptions` or a snake_case mapping of the same fields
        manifest: Snake_case manifest; mutated in place

    Returns:
        The same manifest object
    """
    if not isinstance(options, RealUrlOptions):
        options = RealUrlOptions.from_mapping(options)
    apply_method = resolve_apply_method(options.api) if options.is_template else None

    for chrome_key in _CHROME_DOCUMENT_KEYS:
        _resolve_chrome_document(manifest.get(chrome_key), options)

    pages = manifest.get("pages")
    if isinstance(pages, list):
        _resolve_pages(pages, options, apply_method)
    return manifest


def _resolve_pages(
    pages: List[Any],
    options: RealUrlOptions,
    apply_method: Optional[Callable[[Mapping[str, Any]], Any]],
) -> None:
    for page in pages:
        if not isinstance(page, dict):
            continue
        _resolve_page(page, options, apply_method)
        frames = page.get("frames")
        if isinstance(frames, list):
            _resolve_pages(frames, options, apply_method)


def _resolve_page(
    page: Dict[str, Any],
    options: RealUrlOptions,
    apply_method: Optional[Callable[[Mapping[str, Any]], Any]],
) -> None:
    name = page.get("name") or derive_page_name(page.get("source"))
    if name:
        page["path"] = f"{options.url_prefix}{name}"
        page["key"] = name
        if options.is_template:
            _set_assets(page, name, options)
        logger.debug("Resolved page %s -> %s", name, page["path"])
    else:
        logger.debug("Page without name or source keeps path %s", page.get("path"))

    for chrome_key in _CHROME_DOCUMENT_KEYS:
        _resolve_chrome_document(page.get(chrome_key), options)

    if apply_method is not None:
        result = apply_method(page)
        if isinstance(result, Mapping) and "document" in result:
            page["document"] = result["document"]


def _resolve_chrome_document(doc: Any, options: RealUrlOptions) -> None:
    if not isinstance(doc, dict) or not doc.get("source"):
        return
    name = doc.get("name") or derive_page_name(doc["source"])
    if not name:
        return
    doc["url"] = f"{options.url_prefix}{name}"
    if options.is_template:
        _set_assets(doc, name, options)


def _set_assets(target: Dict[str, Any], name: str, options: RealUrlOptions) -> None:
    target["script"] = f"{options.cdn_prefix}{name}.js"
    if options.inline_style:
        target.pop("stylesheet", None)
    else:
        target["stylesheet"] = f"{options.cdn_prefix}{name}.css"
