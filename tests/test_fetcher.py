# tests/test_fetcher.py
"""
Tests for the content store adapter.

These cover:
1. Path normalization and Cache-Control parsing
2. Part and special-route classification
3. Mapping upstream responses to fetch outcomes
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from frontend.content.fetcher import (
    ContentStoreClient,
    classify_document,
    normalize_base_path,
    parse_cache_control,
)
from frontend.content.schemas import (
    Document,
    ForbiddenResult,
    Found,
    NotFoundResult,
    RedirectTo,
    UpstreamUnavailableResult,
)

from .conftest import CONTENT_STORE_URL, FakeContentStore, schema_example


def fetch(store: FakeContentStore, path: str, locale: str | None = None):
    async def run():
        client = ContentStoreClient(CONTENT_STORE_URL, transport=store.transport)
        try:
            return await client.fetch(path, locale)
        finally:
            await client.aclose()

    return asyncio.run(run())


# =============================================================================
# Tests: Pure helpers
# =============================================================================


class TestNormalizeBasePath:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("government/news", "/government/news"),
            ("/government/news/", "/government/news"),
            ("//government///news", "/government/news"),
            ("", "/"),
        ],
    )
    def test_normalizes(self, raw, expected):
        assert normalize_base_path(raw) == expected

    def test_is_idempotent(self):
        once = normalize_base_path("//a//b/c/")
        assert normalize_base_path(once) == once


class TestParseCacheControl:
    def test_reads_max_age_and_public(self):
        metadata = parse_cache_control("max-age=20, public")
        assert metadata.max_age == 20
        assert metadata.is_private is False

    def test_private_without_max_age(self):
        metadata = parse_cache_control("private")
        assert metadata.max_age is None
        assert metadata.is_private is True

    def test_missing_header(self):
        metadata = parse_cache_control(None)
        assert metadata.max_age is None
        assert metadata.is_private is False


class TestClassifyDocument:
    """A 200 for a path below the base path is a part, a redirect or a 404."""

    def _guide(self) -> Document:
        return Document.model_validate(schema_example("guide"))

    def test_exact_base_path_is_found(self):
        result = classify_document("/vehicle-tax", self._guide())
        assert isinstance(result, Found)
        assert result.part_slug is None

    def test_later_part_is_found_with_slug(self):
        result = classify_document("/vehicle-tax/what-you-need", self._guide())
        assert isinstance(result, Found)
        assert result.part_slug == "what-you-need"

    def test_first_part_redirects(self):
        result = classify_document("/vehicle-tax/overview", self._guide())
        assert isinstance(result, RedirectTo)
        assert result.target == "/vehicle-tax"

    def test_unknown_part_redirects(self):
        result = classify_document("/vehicle-tax/nope", self._guide())
        assert isinstance(result, RedirectTo)

    def test_special_route_ancestor_is_not_found(self):
        document = Document.model_validate(schema_example("special_route"))
        result = classify_document("/government/item-not-here", document)
        assert isinstance(result, NotFoundResult)

    def test_translated_base_path_matches_without_suffix(self):
        document = Document.model_validate(schema_example("case_study_translated"))
        result = classify_document(
            "/government/case-studies/doing-business-in-spain", document, "es"
        )
        assert isinstance(result, Found)


# =============================================================================
# Tests: Upstream responses
# =============================================================================


class TestContentStoreClient:
    def test_found(self):
        store = FakeContentStore()
        store.has_schema_example("case_study", max_age=20)

        result = fetch(store, "government/case-studies/get-britain-building-carlisle-park")

        assert isinstance(result, Found)
        assert result.document.schema_name == "case_study"
        assert result.document.publishing.max_age == 20

    def test_missing_locale_defaults(self):
        store = FakeContentStore()
        item = schema_example("detailed_guide")
        del item["locale"]
        store.has_item(item["base_path"], item)

        result = fetch(store, item["base_path"])

        assert result.document.locale == "en"

    def test_translation_requested_with_locale_suffix(self):
        store = FakeContentStore()
        store.has_schema_example("case_study_translated")

        result = fetch(store, "government/case-studies/doing-business-in-spain", "es")

        assert isinstance(result, Found)
        assert store.requests[-1].url.path.endswith("doing-business-in-spain.es")

    @pytest.mark.parametrize(
        "status,outcome",
        [
            (404, NotFoundResult),
            (410, NotFoundResult),
            (403, ForbiddenResult),
            (500, UpstreamUnavailableResult),
            (502, UpstreamUnavailableResult),
        ],
    )
    def test_status_mapping(self, status, outcome):
        store = FakeContentStore()
        store.responds("/some/page", status)

        assert isinstance(fetch(store, "/some/page"), outcome)

    def test_redirect_keeps_location(self):
        store = FakeContentStore()
        store.responds("/old", 301, headers={"Location": "/new"})

        result = fetch(store, "/old")

        assert isinstance(result, RedirectTo)
        assert result.target == "/new"
        assert result.status_code == 301

    def test_timeout_is_unavailable(self):
        store = FakeContentStore()
        store.raise_on["/slow"] = httpx.ReadTimeout("timed out")

        result = fetch(store, "/slow")

        assert isinstance(result, UpstreamUnavailableResult)
        assert result.reason == "timeout"

    def test_connection_error_is_unavailable(self):
        store = FakeContentStore()
        store.raise_on["/down"] = httpx.ConnectError("refused")

        assert isinstance(fetch(store, "/down"), UpstreamUnavailableResult)

    def test_malformed_body_is_unavailable(self):
        store = FakeContentStore()
        store.responses["/broken"] = httpx.Response(200, content=b"not json")

        assert isinstance(fetch(store, "/broken"), UpstreamUnavailableResult)


class TestSparsePayloads:
    """Nulls in upstream JSON become empty values instead of failing validation."""

    def test_null_title_and_details(self):
        document = Document.model_validate({"base_path": "/x", "title": None, "details": None})
        assert document.title == ""
        assert document.details == {}

    def test_null_links(self):
        document = Document.model_validate({"base_path": "/x", "links": {"taxons": None}})
        assert document.linked("taxons") == []
        assert Document.model_validate({"base_path": "/x", "links": None}).links == {}

    def test_linked_item_with_null_details(self):
        document = Document.model_validate({
            "base_path": "/x",
            "links": {"primary_publishing_organisation": [{"title": "Org", "details": None}]},
        })
        assert document.linked("primary_publishing_organisation")[0].details == {}

    def test_null_title_is_found_over_http(self):
        store = FakeContentStore()
        item = schema_example("gone")
        item["title"] = None
        store.has_item(item["base_path"], item)

        assert isinstance(fetch(store, item["base_path"]), Found)
