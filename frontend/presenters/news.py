"""Presenters for image-bearing news content."""

from typing import Any, Optional

from .capabilities import news_image
from .content_item import ContentItemPresenter


class NewsArticlePresenter(ContentItemPresenter):
    @property
    def image(self) -> Optional[dict[str, Any]]:
        # A present but non-mapping image (e.g. "") ends the fallback with no image shown
        image = news_image(self.document)
        return image if isinstance(image, dict) else None

    def extra_fields(self) -> dict[str, Any]:
        extra = super().extra_fields()
        first_published = self.document.details.get("first_public_at")
        if first_published:
            extra["first_published"] = first_published
        return extra


class CaseStudyPresenter(NewsArticlePresenter):
    pass
