"""Base presenter for content items.

Wraps a Document plus request context and derives view data from it without
touching the Document. Schema presenters add fields by overriding
``extra_fields`` or individual properties; they all inherit directly from
ContentItemPresenter.
"""

from typing import Any, Optional

from frontend.content.schemas import Document, PublishingMetadata, RequestDescriptor
from frontend.strategies.schemas import PresentationStrategy
from .capabilities import taxonomy_sidebar_eligible
from .schemas import PageView, Part


class ContentItemPresenter:
    """Read-only view over a Document for one request."""

    def __init__(
        self,
        document: Document,
        request: RequestDescriptor,
        strategy: PresentationStrategy,
        part_slug: Optional[str] = None,
    ):
        self.document = document
        self.request = request
        self.strategy = strategy
        self.part_slug = part_slug

    # -- Shared capabilities --

    @property
    def title(self) -> str:
        return self.document.title

    @property
    def page_title(self) -> str:
        if self.document.withdrawn_notice:
            return f"[Withdrawn] {self.title}"
        return self.title

    @property
    def description(self) -> Optional[str]:
        return self.document.description

    @property
    def body(self) -> str:
        body = self.document.details.get("body")
        return body if isinstance(body, str) else ""

    @property
    def publishing(self) -> PublishingMetadata:
        """Upstream freshness and privacy, the input to the cache directive."""
        return self.document.publishing

    @property
    def show_taxonomy_sidebar(self) -> bool:
        return self.strategy.taxonomy_sidebar and taxonomy_sidebar_eligible(self.document)

    @property
    def parts(self) -> list[Part]:
        return []

    @property
    def current_part_index(self) -> Optional[int]:
        return None

    @property
    def image(self) -> Optional[dict[str, Any]]:
        return None

    def extra_fields(self) -> dict[str, Any]:
        """Schema-specific fields merged into the view's ``extra`` mapping."""
        extra: dict[str, Any] = {}
        if self.document.withdrawn_notice:
            extra["withdrawn_notice"] = dict(self.document.withdrawn_notice)
        return extra

    def to_view(self, template_key: str) -> PageView:
        """Build the render-ready view for the given template."""
        return PageView(
            schema_name=self.strategy.schema_name,
            base_path=self.document.base_path,
            locale=self.document.locale,
            template_key=template_key,
            title=self.title,
            page_title=self.page_title,
            description=self.description,
            body=self.body,
            parts=self.parts,
            current_part_index=self.current_part_index,
            image=self.image,
            show_taxonomy_sidebar=self.show_taxonomy_sidebar,
            taxons=self.document.linked("taxons") if self.show_taxonomy_sidebar else [],
            extra=self.extra_fields(),
            query=dict(self.request.query),
        )
