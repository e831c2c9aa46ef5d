"""Internal mapping subpackage for manifest transformation logic.

All functions within this package operate on in-memory plain data. Only the
URL resolution pass mutates its argument; everything else returns new trees.

The public API remains in the top-level `manifest.py` facade. Callers should
not import directly from this package unless accessing internal helpers for
testing purposes.

Modules:
    case_converter: Recursive camelCase to snake_case key conversion
    app_config: AppConfig to ManifestConfig transformation and key whitelist
    page_manifest: Single page manifest extraction (frames, NSR)
    real_url: Absolute URL and asset resolution across pages and frames
    url_context: URL resolution options and document provider interface
"""
