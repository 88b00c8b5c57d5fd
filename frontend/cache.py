"""Cache policy propagation.

The outgoing Cache-Control header mirrors what the content store sent for
the item. Only successful renders are cacheable; every other terminal
response is marked no-store.
"""

from typing import Literal

from pydantic import BaseModel, Field

from frontend.content.schemas import PublishingMetadata

DEFAULT_MAX_AGE = 900
NO_STORE = "no-store"


class CacheDirective(BaseModel):
    model_config = {"frozen": True}

    max_age: int = Field(default=DEFAULT_MAX_AGE, ge=0)
    visibility: Literal["public", "private"] = "public"

    def header_value(self) -> str:
        return f"max-age={self.max_age}, {self.visibility}"


def derive_cache_directive(
    publishing: PublishingMetadata,
    default_max_age: int = DEFAULT_MAX_AGE,
) -> CacheDirective:
    """Derive the outgoing cache directive from upstream freshness metadata.

    Private items stay private; max-age passes through unchanged when the
    content store declared one and falls back to ``default_max_age`` otherwise.
    The same default applies to public and private items.
    """
    max_age = publishing.max_age if publishing.max_age is not None else default_max_age
    return CacheDirective(
        max_age=max(0, max_age),
        visibility="private" if publishing.is_private else "public",
    )
