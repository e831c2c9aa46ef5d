"""Application configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads configuration
parameters from environment variables and a `.env` file. Only the CLI reads
settings; the manifest helpers receive everything as explicit arguments.

The `get_settings` function provides a cached, singleton instance of the
configuration.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict


class Settings(BaseSettings):
    """Defines all application configuration parameters."""

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # ---------------- URL resolution -----------------
    PHA_URL_PREFIX: str = Field(
        default="", description="Host prefix joined with page names, e.g. https://m.example.com/app/"
    )
    PHA_CDN_PREFIX: str = Field(
        default="",
        description="Prefix for page scripts and stylesheets (defaults to PHA_URL_PREFIX when blank)",
    )
    PHA_IS_TEMPLATE: bool = Field(
        default=True,
        description="Pages are served as template bundles (script/stylesheet/document are set)",
    )
    PHA_INLINE_STYLE: bool = Field(
        default=False,
        description="Styles are inlined into the page script; no stylesheet URL is emitted",
    )

    # ---------------- Transformation -----------------
    PHA_FILTER_KEYS: bool = Field(
        default=True,
        description="Keep only recognized manifest keys at the manifest root",
    )
    # Use Any type to prevent Pydantic Settings JSON decoding; validator converts to list[str]
    PHA_EXTRA_RETAIN_KEYS: Any = Field(
        default_factory=list,
        description=(
            "Comma-separated list of additional root keys kept when filtering. "
            "camelCase or snake_case. Example: PHA_EXTRA_RETAIN_KEYS=customFlag,theme"
        ),
    )

    # ---------------- Output -----------------
    MANIFEST_INDENT: int = Field(
        default=2, description="JSON indentation of printed manifests (0 = compact)"
    )

    @field_validator("PHA_EXTRA_RETAIN_KEYS", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated string into list of stripped strings.

        Supports both direct list input (from code/tests) and comma-separated
        string input (from environment variables). Empty strings result in
        empty list.
        """
        if isinstance(v, list):
            return [s.strip() for s in v if s.strip()]
        if isinstance(v, str):
            if not v.strip():
                return []
            return [s.strip() for s in v.split(",") if s.strip()]
        return []

    @model_validator(mode="after")
    def default_cdn_prefix(self) -> "Settings":
        """Serve assets from the page host when no CDN prefix is configured."""
        if not self.PHA_CDN_PREFIX:
            self.PHA_CDN_PREFIX = self.PHA_URL_PREFIX
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # pragma: no cover - trivial
    """Return a cached, singleton instance of the application settings."""
    return Settings()
