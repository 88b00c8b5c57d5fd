# tests/conftest.py
"""
Shared fixtures: example content items and a fake content store.

The fake content store is an httpx.MockTransport serving canned responses
keyed by upstream path, so the whole app runs without network access.
"""

from __future__ import annotations

import copy
import json
from typing import Any, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from frontend.api.main import create_app
from frontend.config import Settings

CONTENT_STORE_URL = "http://content-store.test"


# =============================================================================
# Example content items
# =============================================================================

SCHEMA_EXAMPLES: dict[str, dict[str, Any]] = {
    "case_study": {
        "schema_name": "case_study",
        "document_type": "case_study",
        "base_path": "/government/case-studies/get-britain-building-carlisle-park",
        "content_id": "f6e2e1a5-0000-4000-8000-000000000001",
        "locale": "en",
        "title": "Get Britain Building: Carlisle Park",
        "description": "Nearly 400 homes are set to be built on the site.",
        "details": {"body": "<p>The site was stalled for years.</p>"},
        "links": {},
    },
    "case_study_translated": {
        "schema_name": "case_study",
        "document_type": "case_study",
        "base_path": "/government/case-studies/doing-business-in-spain.es",
        "content_id": "f6e2e1a5-0000-4000-8000-000000000002",
        "locale": "es",
        "title": "Hacer negocios en España",
        "description": "Un estudio de caso.",
        "details": {"body": "<p>Contenido traducido.</p>"},
        "links": {},
    },
    "travel_advice": {
        "schema_name": "travel_advice",
        "document_type": "travel_advice",
        "base_path": "/foreign-travel-advice/albania",
        "content_id": "2a3938e1-0000-4000-8000-000000000003",
        "locale": "en",
        "title": "Albania travel advice",
        "description": "Latest travel advice for Albania.",
        "public_updated_at": "2024-03-01T10:00:00Z",
        "details": {
            "change_description": "Latest update: summary of entry requirements",
            "alert_status": [],
            "parts": [
                {"slug": "summary", "title": "Summary", "body": "<p>Summary body</p>"},
                {"slug": "safety-and-security", "title": "Safety and security", "body": "<p>Safety body</p>"},
                {"slug": "entry-requirements", "title": "Entry requirements", "body": "<p>Entry body</p>"},
            ],
        },
        "links": {},
    },
    "guide": {
        "schema_name": "guide",
        "document_type": "guide",
        "base_path": "/vehicle-tax",
        "content_id": "fa748fae-0000-4000-8000-000000000004",
        "locale": "en",
        "title": "Tax your vehicle",
        "description": "Renew or tax your vehicle.",
        "details": {
            "parts": [
                {"slug": "overview", "title": "Overview", "body": "<p>Guide part one</p>"},
                {"slug": "what-you-need", "title": "What you need", "body": "<p>Guide part two</p>"},
            ],
        },
        "links": {},
    },
    "detailed_guide": {
        "schema_name": "detailed_guide",
        "document_type": "detailed_guide",
        "base_path": "/guidance/salary-sacrifice",
        "content_id": "00f693d4-0000-4000-8000-000000000005",
        "locale": "en",
        "title": "Salary sacrifice for employers",
        "description": "How salary sacrifice works.",
        "details": {"body": "<p>Detailed guide body</p>"},
        "links": {},
    },
    "publication": {
        "schema_name": "publication",
        "document_type": "guidance",
        "base_path": "/government/publications/some-publication",
        "content_id": "5f3c2e5f-0000-4000-8000-000000000006",
        "locale": "en",
        "title": "Some publication",
        "description": "The current description",
        "details": {"body": "<p>Publication body</p>"},
        "links": {},
    },
    "coming_soon": {
        "schema_name": "coming_soon",
        "document_type": "coming_soon",
        "base_path": "/government/publications/coming-soon",
        "content_id": "5f3c2e5f-0000-4000-8000-000000000007",
        "locale": "en",
        "title": "Coming soon",
        "details": {"publish_time": "2024-05-01T09:30:00Z"},
        "links": {},
    },
    "news_article": {
        "schema_name": "news_article",
        "document_type": "news_story",
        "base_path": "/government/news/new-funding-announced",
        "content_id": "5f3c2e5f-0000-4000-8000-000000000008",
        "locale": "en",
        "title": "New funding announced",
        "description": "Funding for local projects.",
        "details": {
            "body": "<p>News body</p>",
            "image": {"url": "https://assets.example/own-image.jpg", "alt_text": "Own image"},
        },
        "links": {},
    },
    "special_route": {
        "schema_name": "special_route",
        "document_type": "special_route",
        "base_path": "/government",
        "content_id": "5f3c2e5f-0000-4000-8000-000000000009",
        "locale": "en",
        "title": "Government",
        "details": {},
        "links": {},
    },
    "gone": {
        "schema_name": "gone",
        "document_type": "gone",
        "base_path": "/government/old-page",
        "locale": "en",
        "title": "",
        "details": {
            "explanation": "<p>This page was merged.</p>",
            "alternative_path": "/government/new-page",
        },
        "links": {},
    },
}


def schema_example(name: str) -> dict[str, Any]:
    """A deep copy of one example content item."""
    return copy.deepcopy(SCHEMA_EXAMPLES[name])


# =============================================================================
# Fake content store
# =============================================================================


class FakeContentStore:
    """Canned content store responses keyed by upstream base path."""

    def __init__(self) -> None:
        self.responses: dict[str, httpx.Response] = {}
        self.requests: list[httpx.Request] = []
        self.raise_on: dict[str, Exception] = {}

    def has_item(
        self,
        base_path: str,
        item: dict[str, Any],
        max_age: Optional[int] = 900,
        private: bool = False,
    ) -> None:
        headers = {}
        if max_age is not None:
            headers["Cache-Control"] = f"max-age={max_age}, {'private' if private else 'public'}"
        elif private:
            headers["Cache-Control"] = "private"
        self.responses[base_path] = httpx.Response(
            200,
            content=json.dumps(item).encode("utf-8"),
            headers={"Content-Type": "application/json", **headers},
        )

    def has_schema_example(self, name: str, **kwargs: Any) -> dict[str, Any]:
        item = schema_example(name)
        self.has_item(item["base_path"], item, **kwargs)
        return item

    def responds(self, base_path: str, status: int, headers: Optional[dict] = None) -> None:
        self.responses[base_path] = httpx.Response(status, headers=headers or {})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        assert path.startswith("/content"), path
        base_path = path[len("/content"):] or "/"
        if base_path in self.raise_on:
            raise self.raise_on[base_path]
        response = self.responses.get(base_path)
        if response is None:
            return httpx.Response(404)
        return httpx.Response(
            response.status_code,
            content=response.content,
            headers=response.headers,
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def content_store() -> FakeContentStore:
    return FakeContentStore()


@pytest.fixture
def settings() -> Settings:
    return Settings(content_store_url=CONTENT_STORE_URL)


@pytest.fixture
def client(content_store: FakeContentStore, settings: Settings):
    app = create_app(settings=settings, transport=content_store.transport)
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
