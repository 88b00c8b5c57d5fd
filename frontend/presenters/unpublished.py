"""Presenters for content that is no longer available."""

from typing import Any

from .content_item import ContentItemPresenter

NO_LONGER_AVAILABLE = "No longer available"


class GonePresenter(ContentItemPresenter):
    """Removed content, optionally pointing at a replacement path."""

    @property
    def page_title(self) -> str:
        return NO_LONGER_AVAILABLE

    @property
    def explanation(self) -> str:
        return self.document.details.get("explanation") or ""

    @property
    def alternative_path(self) -> str:
        return self.document.details.get("alternative_path") or ""

    def extra_fields(self) -> dict[str, Any]:
        extra = super().extra_fields()
        extra.update(explanation=self.explanation, alternative_path=self.alternative_path)
        return extra


class UnpublishingPresenter(ContentItemPresenter):
    """Unpublished content, optionally pointing at an external replacement URL."""

    @property
    def page_title(self) -> str:
        return NO_LONGER_AVAILABLE

    @property
    def explanation(self) -> str:
        return self.document.details.get("explanation") or ""

    @property
    def alternative_url(self) -> str:
        return self.document.details.get("alternative_url") or ""

    def extra_fields(self) -> dict[str, Any]:
        extra = super().extra_fields()
        extra.update(explanation=self.explanation, alternative_url=self.alternative_url)
        return extra
