"""Presenters for multi-part documents (guides, travel advice)."""

from typing import Any, Optional

from frontend.strategies.schemas import ATOM
from .content_item import ContentItemPresenter
from .schemas import FeedEntry, PageView, Part


class PartsPresenter(ContentItemPresenter):
    """A document whose body is split into ordered, slugged parts."""

    @property
    def parts(self) -> list[Part]:
        return [
            Part(
                slug=raw.get("slug"),
                title=raw.get("title"),
                body=raw.get("body") or "",
            )
            for raw in self.document.parts
            if isinstance(raw, dict)
        ]

    @property
    def current_part_index(self) -> Optional[int]:
        parts = self.parts
        if not parts:
            return None
        if self.part_slug:
            for index, part in enumerate(parts):
                if part.slug == self.part_slug:
                    return index
        return 0

    @property
    def current_part(self) -> Optional[Part]:
        index = self.current_part_index
        return None if index is None else self.parts[index]

    @property
    def page_title(self) -> str:
        part = self.current_part
        if part is not None and part.title and self.part_slug:
            return f"{super().page_title}: {part.title}"
        return super().page_title

    @property
    def body(self) -> str:
        part = self.current_part
        return part.body if part is not None else ""


class GuidePresenter(PartsPresenter):
    pass


class TravelAdvicePresenter(PartsPresenter):
    """Travel advice also publishes an Atom feed of its latest change."""

    def feed_entries(self) -> list[FeedEntry]:
        details = self.document.details
        return [
            FeedEntry(
                title=self.title,
                link=self.document.base_path,
                updated=self.document.public_updated_at or details.get("reviewed_at"),
                summary=details.get("change_description") or self.description or "",
            )
        ]

    def extra_fields(self) -> dict[str, Any]:
        extra = super().extra_fields()
        alert_status = self.document.details.get("alert_status")
        if alert_status:
            extra["alert_status"] = list(alert_status)
        return extra

    def to_view(self, template_key: str) -> PageView:
        view = super().to_view(template_key)
        if ATOM not in self.strategy.supported_formats:
            return view
        return view.model_copy(
            update={
                "feed_title": self.strategy.feed_title or self.title,
                "feed_entries": self.feed_entries(),
            }
        )
