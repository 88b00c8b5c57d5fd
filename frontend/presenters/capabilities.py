"""Derived-field helpers shared by presenters.

Fallback chains here use explicit presence checks: a value counts as present
when its key exists and is not None. An empty but present value stops the
chain; only a missing one moves on to the next lookup.
"""

from typing import Any, Callable, Optional

from frontend.content.schemas import Document, LinkedItem


class _Absent:
    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()

# Uploaded to asset-manager; used when neither the item nor its organisation has an image
PLACEHOLDER_IMAGE: dict[str, str] = {
    "url": "https://assets.publishing.service.gov.uk/media/5e985599d3bf7f3fc943bbd8/UK_government_logo.jpg",
}

# Taxons under this subtree always get taxonomy navigation
WORLD_TAXON_PREFIX = "/world"


def lookup(mapping: Optional[dict[str, Any]], *keys: str) -> Any:
    """Walk nested dict keys, returning ABSENT at the first missing or None step."""
    current: Any = mapping
    for key in keys:
        if not isinstance(current, dict) or current.get(key) is None:
            return ABSENT
        current = current[key]
    return current


def first_present(*lookups: Callable[[], Any]) -> Any:
    """Evaluate lookups in order, returning the first result that is not ABSENT."""
    for fetch in lookups:
        value = fetch()
        if value is not ABSENT:
            return value
    return ABSENT


def organisation_default_image(document: Document) -> Any:
    organisations = document.linked("primary_publishing_organisation")
    if not organisations:
        return ABSENT
    return lookup(organisations[0].details, "default_news_image")


def news_image(document: Document) -> dict[str, Any]:
    """Image shown for a news-bearing item: own image, then organisation default, then placeholder."""
    return first_present(
        lambda: lookup(document.details, "image"),
        lambda: organisation_default_image(document),
        lambda: dict(PLACEHOLDER_IMAGE),
    )


def _is_world_taxon(taxon: LinkedItem) -> bool:
    path = taxon.base_path or ""
    return path == WORLD_TAXON_PREFIX or path.startswith(WORLD_TAXON_PREFIX + "/")


def taxonomy_sidebar_eligible(document: Document) -> bool:
    """Whether the taxonomy navigation sidebar should be shown.

    Requires a taxon link. Pages also tagged to mainstream browse keep the
    browse navigation instead, unless a taxon sits under the world subtree.
    """
    taxons = document.linked("taxons")
    if not taxons:
        return False
    if any(_is_world_taxon(taxon) for taxon in taxons):
        return True
    return not document.linked("mainstream_browse_pages")
