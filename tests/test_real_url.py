from __future__ import annotations

import copy
from types import SimpleNamespace

import pytest

from pha_manifest.manifest import (
    RealUrlOptions,
    build_manifest,
    derive_page_name,
    set_real_url_to_manifest,
)

CONFIG = {
    "pages": [
        {
            "path": "/",
            "name": "home3",
            "source": "pages/Home/index",
            "data_prefetches": [{"url": "/a.com", "data": {"id": 123}}],
        },
        {
            "path": "/home1",
            "source": "pages/Home1/index",
        },
        {
            "frames": [
                {
                    "path": "/frame1",
                    "source": "pages/frame1/index",
                }
            ]
        },
    ],
}


class _RecordingApi:
    def __init__(self, result=None):
        self.result = {} if result is None else result
        self.calls: list[dict] = []

    def apply_method(self, page):
        self.calls.append(dict(page))
        return self.result


def _options(**overrides) -> dict:
    options = {
        "url_prefix": "https://abc.com/",
        "cdn_prefix": "https://cdn.com/",
        "is_template": True,
        "inline_style": False,
        "api": _RecordingApi(),
    }
    options.update(overrides)
    return options


def test_real_url_to_manifest():
    manifest = set_real_url_to_manifest(_options(), copy.deepcopy(CONFIG))

    assert manifest["pages"][0]["path"] == "https://abc.com/home3"
    assert manifest["pages"][0]["key"] == "home3"
    assert manifest["pages"][0]["script"] == "https://cdn.com/home3.js"
    assert manifest["pages"][0]["stylesheet"] == "https://cdn.com/home3.css"
    assert manifest["pages"][1]["path"] == "https://abc.com/home1"
    assert manifest["pages"][1]["key"] == "home1"
    assert manifest["pages"][2]["frames"][0]["path"] == "https://abc.com/frame1"
    assert manifest["pages"][2]["frames"][0]["script"] == "https://cdn.com/frame1.js"
    # frames stay nested
    assert len(manifest["pages"]) == 3


def test_mutates_and_returns_same_object():
    manifest = copy.deepcopy(CONFIG)
    assert set_real_url_to_manifest(_options(), manifest) is manifest


def test_document_set_on_pages_and_frames():
    api = _RecordingApi({"custom": True, "document": "<html>123</html>"})
    manifest = set_real_url_to_manifest(_options(api=api), copy.deepcopy(CONFIG))

    assert manifest["pages"][0]["document"] == "<html>123</html>"
    assert manifest["pages"][1]["document"] == "<html>123</html>"
    assert manifest["pages"][2]["document"] == "<html>123</html>"
    assert manifest["pages"][2]["frames"][0]["document"] == "<html>123</html>"
    # once per page and frame
    assert len(api.calls) == 4
    assert "custom" not in manifest["pages"][0]


def test_document_absent_when_api_returns_none():
    api = SimpleNamespace(apply_method=lambda page: None)
    manifest = set_real_url_to_manifest(_options(api=api), copy.deepcopy(CONFIG))
    assert "document" not in manifest["pages"][0]


def test_api_as_mapping():
    api = {"apply_method": lambda page: {"document": f"<html>{page.get('key')}</html>"}}
    manifest = set_real_url_to_manifest(_options(api=api), copy.deepcopy(CONFIG))
    assert manifest["pages"][0]["document"] == "<html>home3</html>"
    assert manifest["pages"][2]["frames"][0]["document"] == "<html>frame1</html>"


def test_inline_style_omits_stylesheet():
    manifest = set_real_url_to_manifest(_options(inline_style=True), copy.deepcopy(CONFIG))
    assert "stylesheet" not in manifest["pages"][0]
    assert manifest["pages"][0]["script"] == "https://cdn.com/home3.js"


def test_not_template():
    api = _RecordingApi({"document": "<html>123</html>"})
    manifest = set_real_url_to_manifest(
        _options(is_template=False, api=api), copy.deepcopy(CONFIG)
    )
    page = manifest["pages"][0]
    assert page["path"] == "https://abc.com/home3"
    assert "script" not in page
    assert "stylesheet" not in page
    assert "document" not in page
    assert api.calls == []


def test_options_dataclass():
    options = RealUrlOptions(url_prefix="https://abc.com/", cdn_prefix="https://cdn.com/")
    manifest = set_real_url_to_manifest(options, copy.deepcopy(CONFIG))
    assert manifest["pages"][0]["path"] == "https://abc.com/home3"
    assert "script" not in manifest["pages"][0]


def test_api_exception_propagates():
    def boom(page):
        raise RuntimeError("document service down")

    with pytest.raises(RuntimeError, match="document service down"):
        set_real_url_to_manifest(
            _options(api=SimpleNamespace(apply_method=boom)), copy.deepcopy(CONFIG)
        )


def test_header_and_footer_documents_resolved():
    manifest = {
        "page_header": {"source": "components/Header/index", "height": 60},
        "pages": [
            {"name": "home", "page_footer": {"name": "footer", "source": "components/Footer/index"}}
        ],
    }
    set_real_url_to_manifest(_options(inline_style=True), manifest)
    assert manifest["page_header"]["url"] == "https://abc.com/components_header"
    assert manifest["page_header"]["script"] == "https://cdn.com/components_header.js"
    footer = manifest["pages"][0]["page_footer"]
    assert footer["url"] == "https://abc.com/footer"
    assert footer["script"] == "https://cdn.com/footer.js"
    assert "stylesheet" not in footer


def test_derive_page_name():
    assert derive_page_name("pages/Home1/index") == "home1"
    assert derive_page_name("pages/frame1/index") == "frame1"
    assert derive_page_name("/pages/Shop/Detail/index") == "shop_detail"
    assert derive_page_name("index") == "index"
    assert derive_page_name("") is None
    assert derive_page_name(None) is None


def test_build_manifest_leaves_config_untouched():
    app_config = {
        "spm": "A-1",
        "window": {"title": "Shop"},
        "routes": [{"path": "/", "source": "pages/Home/index"}],
    }
    snapshot = copy.deepcopy(app_config)
    manifest = build_manifest(app_config, _options(inline_style=True))
    assert app_config == snapshot
    assert manifest["title"] == "Shop"
    assert manifest["pages"][0]["path"] == "https://abc.com/home"
    assert manifest["pages"][0]["script"] == "https://cdn.com/home.js"


def test_camel_case_options():
    options = {
        "urlPrefix": "https://abc.com/",
        "cdnPrefix": "https://cdn.com/",
        "isTemplate": True,
        "inlineStyle": False,
        "api": {"applyMethod": lambda page: {"custom": True, "document": "<html>123</html>"}},
    }
    manifest = set_real_url_to_manifest(options, copy.deepcopy(CONFIG))
    assert manifest["pages"][0]["stylesheet"] == "https://cdn.com/home3.css"
    assert manifest["pages"][2]["frames"][0]["document"] == "<html>123</html>"
