"""Main CLI entry point for pha-manifest.

This module provides a command-line interface using Typer around the
manifest helpers:
1.  Loading configuration (settings, `.env`) and the app config JSON.
2.  Validating the app config (pha_manifest.models.app_config).
3.  Transforming it into a PHA manifest and resolving page URLs
    (pha_manifest.manifest).
4.  Printing or writing the resulting JSON.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import typer
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from .config import get_settings
from .manifest import (
    RealUrlOptions,
    get_page_manifest_by_path,
    set_real_url_to_manifest,
    transform_app_config,
)
from .models.app_config import load_app_config

# Load .env file if present (before any config access)
_env_file = find_dotenv(usecwd=True)
if _env_file:
    load_dotenv(_env_file)

logger = logging.getLogger(__name__)

app = typer.Typer(help="PHA manifest helper CLI")


class StaticDocumentApi:
    """Document provider returning the same document for every page."""

    def __init__(self, document: Optional[str] = None) -> None:
        self.document = document

    def apply_method(self, page: Mapping[str, Any]) -> Dict[str, Any]:
        if self.document is None:
            return {}
        return {"custom": True, "document": self.document}


def _read_app_config(app_json: Path) -> Dict[str, Any]:
    """Load and validate an app config file, exiting with code 1 on bad input."""
    try:
        raw = json.loads(app_json.read_text(encoding="utf-8"))
        return load_app_config(raw)
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid JSON in {app_json}: {e}", err=True)
        raise typer.Exit(code=1) from e
    except ValidationError as e:
        typer.echo(f"Invalid app config in {app_json}:\n{e}", err=True)
        raise typer.Exit(code=1) from e


def _dump(data: Mapping[str, Any], indent: int) -> str:
    return json.dumps(data, ensure_ascii=False, indent=indent or None)


@app.callback()
def main() -> None:  # pragma: no cover - simple callback
    """pha-manifest CLI.

    Use a subcommand like 'transform' or 'page'.
    """
    pass


@app.command(help="Convert an app config JSON file into a PHA manifest.")
def transform(
    app_json: Path = typer.Argument(..., exists=True, dir_okay=False, help="App config JSON file"),
    filter_keys: Optional[bool] = typer.Option(
        None,
        "--filter/--no-filter",
        help="Keep only recognized manifest keys. If not specified, uses PHA_FILTER_KEYS.",
    ),
    url_prefix: Optional[str] = typer.Option(
        None, help="Page URL prefix (defaults to settings.PHA_URL_PREFIX)"
    ),
    cdn_prefix: Optional[str] = typer.Option(
        None, help="Asset URL prefix (defaults to settings.PHA_CDN_PREFIX)"
    ),
    template: Optional[bool] = typer.Option(
        None,
        "--template/--no-template",
        help="Emit script/stylesheet/document per page. If not specified, uses PHA_IS_TEMPLATE.",
    ),
    inline_style: Optional[bool] = typer.Option(
        None,
        "--inline-style/--no-inline-style",
        help="Omit stylesheet URLs. If not specified, uses PHA_INLINE_STYLE.",
    ),
    document: Optional[Path] = typer.Option(
        None, exists=True, dir_okay=False, help="HTML document attached to every page (templates only)"
    ),
    output: Optional[Path] = typer.Option(
        None, help="Write the manifest to this file instead of stdout"
    ),
) -> None:
    """Transform an app config and resolve its page URLs."""
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    config = _read_app_config(app_json)
    effective_filter = settings.PHA_FILTER_KEYS if filter_keys is None else filter_keys
    manifest = transform_app_config(
        config, effective_filter, extra_retain_keys=settings.PHA_EXTRA_RETAIN_KEYS
    )

    effective_url_prefix = settings.PHA_URL_PREFIX if url_prefix is None else url_prefix
    if effective_url_prefix:
        options = RealUrlOptions(
            url_prefix=effective_url_prefix,
            cdn_prefix=(
                cdn_prefix
                if cdn_prefix is not None
                else settings.PHA_CDN_PREFIX or effective_url_prefix
            ),
            is_template=settings.PHA_IS_TEMPLATE if template is None else template,
            inline_style=settings.PHA_INLINE_STYLE if inline_style is None else inline_style,
            api=StaticDocumentApi(document.read_text(encoding="utf-8") if document else None),
        )
        set_real_url_to_manifest(options, manifest)
    else:
        logger.debug("No URL prefix configured; page paths left unresolved")

    text = _dump(manifest, settings.MANIFEST_INDENT)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote manifest with %d page(s) to %s", len(manifest.get("pages") or []), output)
    else:
        typer.echo(text)


@app.command(help="Print the manifest of a single page.")
def page(
    app_json: Path = typer.Argument(..., exists=True, dir_okay=False, help="App config JSON file"),
    path: Optional[str] = typer.Option(None, help="Page path (defaults to the first page)"),
    nsr: bool = typer.Option(False, "--nsr/--no-nsr", help="Mark the page for server rendering"),
) -> None:
    """Extract one page manifest from an app config."""
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    config = _read_app_config(app_json)
    manifest = transform_app_config(
        config, settings.PHA_FILTER_KEYS, extra_retain_keys=settings.PHA_EXTRA_RETAIN_KEYS
    )
    page_manifest = get_page_manifest_by_path(
        {"decamelize_app_config": manifest, "path": path, "nsr": nsr}
    )
    if not page_manifest:
        typer.echo(f"No page found for path {path!r}", err=True)
        raise typer.Exit(code=1)
    typer.echo(_dump(page_manifest, settings.MANIFEST_INDENT))


if __name__ == "__main__":  # pragma: no cover
    app()
