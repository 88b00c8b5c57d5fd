"""Schema-aware, read-only views over content items.

PRESENTERS maps the presenter key named by a PresentationStrategy to the
class that builds the view. New schemas add an entry here and a strategy
in the YAML definitions.
"""

from .capabilities import (
    ABSENT,
    PLACEHOLDER_IMAGE,
    first_present,
    news_image,
    taxonomy_sidebar_eligible,
)
from .content_item import ContentItemPresenter
from .news import CaseStudyPresenter, NewsArticlePresenter
from .parts import GuidePresenter, PartsPresenter, TravelAdvicePresenter
from .schemas import FeedEntry, PageView, Part
from .unpublished import GonePresenter, UnpublishingPresenter

PRESENTERS: dict[str, type[ContentItemPresenter]] = {
    "content_item": ContentItemPresenter,
    "case_study": CaseStudyPresenter,
    "news_article": NewsArticlePresenter,
    "guide": GuidePresenter,
    "travel_advice": TravelAdvicePresenter,
    "gone": GonePresenter,
    "unpublishing": UnpublishingPresenter,
}

__all__ = [
    "ABSENT",
    "PLACEHOLDER_IMAGE",
    "PRESENTERS",
    "CaseStudyPresenter",
    "ContentItemPresenter",
    "FeedEntry",
    "GonePresenter",
    "GuidePresenter",
    "NewsArticlePresenter",
    "PageView",
    "Part",
    "PartsPresenter",
    "TravelAdvicePresenter",
    "UnpublishingPresenter",
    "first_present",
    "news_image",
    "taxonomy_sidebar_eligible",
]
