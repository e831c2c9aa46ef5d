"""Pydantic models for the authored (camelCase) app config.

These models validate configs loaded from outside the process (for example
by the CLI) before they reach the transformation helpers. Every model allows
extra fields so custom keys survive validation; `to_config_dict` dumps the
validated config back to the plain camelCase mapping the helpers expect.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class DataPrefetch(BaseModel):
    """A request the runtime issues before the page script runs."""

    model_config = ConfigDict(extra="allow")

    url: str
    method: Optional[str] = None
    # Request payload; inner keys are sent as authored
    data: Optional[Dict[str, Any]] = None
    # Legacy spelling of `headers`
    header: Optional[Dict[str, Any]] = None
    headers: Optional[Dict[str, Any]] = None
    prefetchKey: Optional[str] = None


class TabBarItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    path: Optional[str] = None
    name: Optional[str] = None
    # Legacy spelling of `name`
    text: Optional[str] = None
    icon: Optional[str] = None
    activeIcon: Optional[str] = None


class TabBar(BaseModel):
    model_config = ConfigDict(extra="allow")

    textColor: Optional[str] = None
    selectedColor: Optional[str] = None
    backgroundColor: Optional[str] = None
    items: Optional[List[TabBarItem]] = None


class WindowOptions(BaseModel):
    """Window options; hoisted onto the manifest root by the transform."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    backgroundColor: Optional[str] = None
    pullRefresh: Optional[bool] = None


class Route(BaseModel):
    """A page route. Frames are routes embedded in a page."""

    model_config = ConfigDict(extra="allow")

    path: Optional[str] = None
    name: Optional[str] = None
    source: Optional[str] = None
    dataPrefetches: Optional[List[DataPrefetch]] = None
    frame: Optional[bool] = None
    frames: Optional[List["Route"]] = None
    tabBar: Optional[TabBar] = None


class AppConfig(BaseModel):
    """The authored application config."""

    model_config = ConfigDict(extra="allow")

    spm: Optional[str] = None
    metas: Optional[List[str]] = None
    links: Optional[List[str]] = None
    scripts: Optional[List[str]] = None
    dataPrefetches: Optional[List[DataPrefetch]] = None
    window: Optional[WindowOptions] = None
    tabBar: Optional[TabBar] = None
    routes: Optional[List[Route]] = None
    requestHeaders: Optional[Dict[str, str]] = None

    def to_config_dict(self) -> Dict[str, Any]:
        """Dump to a plain camelCase mapping, omitting fields that were not authored."""
        return self.model_dump(exclude_unset=True)


Route.model_rebuild()


def load_app_config(raw: Any) -> Dict[str, Any]:
    """Validate a raw app config and return it as a plain mapping.

    Raises:
        pydantic.ValidationError: If the config shape is invalid
    """
    return AppConfig.model_validate(raw).to_config_dict()
