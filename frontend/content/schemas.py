"""Content schemas — request, document and fetch-outcome models.

A Document is built fresh from each upstream response and never mutated
afterwards. FetchResult is a discriminated union over the five outcomes
the content store adapter can produce.
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class MediaRange(BaseModel):
    """One entry of an Accept header."""

    model_config = {"frozen": True}

    media_type: str
    quality: float = 1.0


class RequestDescriptor(BaseModel):
    """Everything the dispatcher needs to know about an inbound request."""

    model_config = {"frozen": True}

    path: str = Field(
        ...,
        description="Normalized, percent-decoded path with no leading slash",
    )
    format: Optional[str] = Field(
        default=None,
        description="Explicit format from the path extension (e.g. 'atom')",
    )
    locale: Optional[str] = None
    variant: Optional[str] = Field(
        default=None,
        description="Path variant suffix (e.g. 'print')",
    )
    accept: tuple[MediaRange, ...] = Field(
        default=(),
        description="Parsed Accept header, highest preference first; empty when absent",
    )
    requested_via_script: bool = Field(
        default=False,
        description="True when sent with X-Requested-With: XMLHttpRequest",
    )
    query: dict[str, str] = Field(default_factory=dict)

    @property
    def base_path(self) -> str:
        return "/" + self.path


class LinkedItem(BaseModel):
    """A read-only reference to another content item."""

    model_config = {"frozen": True, "extra": "ignore"}

    content_id: Optional[str] = None
    base_path: Optional[str] = None
    title: Optional[str] = None
    locale: Optional[str] = None
    document_type: Optional[str] = None
    details: dict[str, Any] = Field(default_factory=dict)

    @field_validator("details", mode="before")
    @classmethod
    def _null_details(cls, value):
        return {} if value is None else value


class PublishingMetadata(BaseModel):
    """Freshness and access data taken from the upstream response."""

    model_config = {"frozen": True}

    max_age: Optional[int] = None
    is_private: bool = False


class Document(BaseModel):
    """A content item as returned by the content store."""

    model_config = {"frozen": True, "extra": "ignore"}

    schema_name: Optional[str] = None
    document_type: Optional[str] = None
    base_path: str
    content_id: Optional[str] = None
    locale: str = "en"
    title: str = ""
    description: Optional[str] = None
    public_updated_at: Optional[str] = None
    details: dict[str, Any] = Field(default_factory=dict)
    links: dict[str, list[LinkedItem]] = Field(default_factory=dict)
    withdrawn_notice: Optional[dict[str, Any]] = None
    publishing: PublishingMetadata = Field(default_factory=PublishingMetadata)

    @field_validator("title", mode="before")
    @classmethod
    def _null_title(cls, value):
        return "" if value is None else value

    @field_validator("details", mode="before")
    @classmethod
    def _null_details(cls, value):
        return {} if value is None else value

    @field_validator("links", mode="before")
    @classmethod
    def _null_links(cls, value):
        # The content store sends null for empty link groups
        if value is None:
            return {}
        if isinstance(value, dict):
            return {k: v for k, v in value.items() if v is not None}
        return value

    def linked(self, link_type: str) -> list[LinkedItem]:
        """Linked items of one type, empty when the link is absent."""
        return list(self.links.get(link_type) or [])

    @property
    def parts(self) -> list[dict[str, Any]]:
        return list(self.details.get("parts") or [])


# -- Fetch outcomes --


class Found(BaseModel):
    outcome: Literal["found"] = "found"
    document: Document
    part_slug: Optional[str] = Field(
        default=None,
        description="Slug of the requested part when a part path was fetched",
    )


class NotFoundResult(BaseModel):
    outcome: Literal["not_found"] = "not_found"


class ForbiddenResult(BaseModel):
    outcome: Literal["forbidden"] = "forbidden"


class RedirectTo(BaseModel):
    outcome: Literal["redirect"] = "redirect"
    target: str
    status_code: int = 301


class UpstreamUnavailableResult(BaseModel):
    outcome: Literal["unavailable"] = "unavailable"
    reason: str = ""


FetchResult = Union[
    Found,
    NotFoundResult,
    ForbiddenResult,
    RedirectTo,
    UpstreamUnavailableResult,
]
