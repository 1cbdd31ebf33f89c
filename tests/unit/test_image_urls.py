"""Unit tests for image URL rewriting."""

from __future__ import annotations

import pytest

from rentlink.resolver.image_urls import PLACEHOLDER_IMAGE, ImageUrlRewriter, rewrite_image_url

ENDPOINT = "http://10.0.0.5:8000"


class TestRewriteImageUrl:
    def test_leading_slash_is_joined(self):
        assert rewrite_image_url("/uploads/x.png", ENDPOINT) == "http://10.0.0.5:8000/uploads/x.png"

    def test_bare_relative_path_gets_separator(self):
        assert rewrite_image_url("uploads/x.png", ENDPOINT) == "http://10.0.0.5:8000/uploads/x.png"

    @pytest.mark.parametrize(
        "path",
        ["http://cdn.example.com/y.png", "https://cdn.example.com/y.png", "HTTPS://CDN.example.com/z.png"],
    )
    def test_absolute_urls_are_unchanged(self, path: str):
        assert rewrite_image_url(path, ENDPOINT) == path

    @pytest.mark.parametrize("path", ["", None, "   "])
    def test_empty_path_yields_placeholder(self, path):
        assert rewrite_image_url(path, ENDPOINT) == PLACEHOLDER_IMAGE

    def test_placeholder_is_not_prefixed(self):
        assert rewrite_image_url(PLACEHOLDER_IMAGE, ENDPOINT) == PLACEHOLDER_IMAGE

    def test_trailing_slash_on_endpoint_is_not_duplicated(self):
        assert rewrite_image_url("/uploads/x.png", ENDPOINT + "/") == "http://10.0.0.5:8000/uploads/x.png"

    def test_custom_placeholder(self):
        assert rewrite_image_url("", ENDPOINT, placeholder="/img/none.png") == "/img/none.png"
        assert rewrite_image_url("/img/none.png", ENDPOINT, placeholder="/img/none.png") == "/img/none.png"


class TestImageUrlRewriter:
    def test_follows_endpoint_changes(self):
        current = {"endpoint": "http://10.0.0.5:8000"}
        rewriter = ImageUrlRewriter(lambda: current["endpoint"])

        assert rewriter.rewrite("/a.png") == "http://10.0.0.5:8000/a.png"
        current["endpoint"] = "http://localhost:8000"
        assert rewriter.rewrite("/a.png") == "http://localhost:8000/a.png"

    def test_placeholder_property(self):
        rewriter = ImageUrlRewriter(lambda: ENDPOINT, placeholder="/p.svg")
        assert rewriter.placeholder == "/p.svg"
        assert rewriter.rewrite(None) == "/p.svg"
