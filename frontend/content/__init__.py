"""Content store access: request and document models plus the fetch adapter."""

from .schemas import (
    Document,
    FetchResult,
    ForbiddenResult,
    Found,
    LinkedItem,
    MediaRange,
    NotFoundResult,
    PublishingMetadata,
    RedirectTo,
    RequestDescriptor,
    UpstreamUnavailableResult,
)
from .fetcher import ContentStoreClient, classify_document, normalize_base_path

__all__ = [
    "ContentStoreClient",
    "Document",
    "FetchResult",
    "ForbiddenResult",
    "Found",
    "LinkedItem",
    "MediaRange",
    "NotFoundResult",
    "PublishingMetadata",
    "RedirectTo",
    "RequestDescriptor",
    "UpstreamUnavailableResult",
    "classify_document",
    "normalize_base_path",
]
