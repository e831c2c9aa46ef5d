"""URL resolution options and the document provider interface.

`RealUrlOptions` holds everything the URL resolution pass needs so helpers
receive their inputs explicitly instead of reading settings.

Fields:
    url_prefix: Host prefix joined with the page name to form the page URL
    cdn_prefix: Asset prefix for page scripts and stylesheets
    is_template: Whether pages are served as template bundles
    inline_style: When True, stylesheets are inlined and no CSS URL is set
    api: Document provider; `apply_method(page)` returns a mapping that may
        carry a `document` string

The api may be any object with an `apply_method` callable or a mapping
holding one under `apply_method`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol, Union, runtime_checkable

from .case_converter import decamelize

__all__ = ["DocumentApi", "RealUrlOptions", "resolve_apply_method"]


@runtime_checkable
class DocumentApi(Protocol):
    """Provides the rendered document for a page."""

    def apply_method(self, page: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
        """Return a mapping optionally holding `document` (and `custom`)."""


@dataclass
class RealUrlOptions:
    url_prefix: str = ""
    cdn_prefix: str = ""
    is_template: bool = False
    inline_style: bool = False
    api: Any = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "RealUrlOptions":
        """Build options from a mapping (snake_case or camelCase keys); unknown keys are ignored."""
        options = {decamelize(k): v for k, v in options.items()}
        return cls(
            url_prefix=options.get("url_prefix") or "",
            cdn_prefix=options.get("cdn_prefix") or "",
            is_template=bool(options.get("is_template", False)),
            inline_style=bool(options.get("inline_style", False)),
            api=options.get("api"),
        )


def resolve_apply_method(
    api: Union[DocumentApi, Mapping[str, Any], None],
) -> Optional[Callable[[Mapping[str, Any]], Any]]:
    if api is None:
        return None
    if isinstance(api, Mapping):
        return api.get("apply_method") or api.get("applyMethod")
    return getattr(api, "apply_method", None)
