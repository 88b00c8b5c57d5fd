"""The render-ready view handed to templates.

PageView is what templates see and what experiment overrides patch. It is
built fresh from a Document by a presenter; patching produces a new view.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from frontend.content.schemas import LinkedItem


class Part(BaseModel):
    """One page of a multi-part document."""

    slug: Optional[str] = None
    title: Optional[str] = None
    body: str = ""


class FeedEntry(BaseModel):
    title: str
    link: str
    updated: Optional[str] = None
    summary: str = ""


class PageView(BaseModel):
    """Read-only view data for one rendered page."""

    schema_name: str
    base_path: str
    locale: str
    template_key: str
    title: str
    page_title: str
    description: Optional[str] = None
    body: str = ""
    parts: list[Part] = Field(default_factory=list)
    current_part_index: Optional[int] = Field(
        default=None,
        description="Index into parts of the part being shown",
    )
    image: Optional[dict[str, Any]] = None
    show_taxonomy_sidebar: bool = False
    taxons: list[LinkedItem] = Field(default_factory=list)
    feed_title: Optional[str] = None
    feed_entries: list[FeedEntry] = Field(default_factory=list)
    extra: dict[str, Any] = Field(
        default_factory=dict,
        description="Schema-specific fields (e.g. explanation, alternative_path)",
    )
    query: dict[str, str] = Field(default_factory=dict)

    @property
    def current_part(self) -> Optional[Part]:
        if self.current_part_index is None or self.current_part_index >= len(self.parts):
            return None
        return self.parts[self.current_part_index]
