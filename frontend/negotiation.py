"""Format negotiation.

Picks exactly one output representation for a request, or rejects it.
Precedence, strongest first:

1. explicit path variant (e.g. ``/print``)
2. explicit format extension (e.g. ``.atom``)
3. the Accept header

A requested machine format that the schema does not support is rejected,
never downgraded to html.
"""

import logging
from typing import Optional, Union

from pydantic import BaseModel

from frontend.content.schemas import Document, MediaRange, RequestDescriptor
from frontend.strategies.schemas import (
    FORMAT_MEDIA_TYPES,
    HTML,
    VARIANT_FORMATS,
    PresentationStrategy,
)

logger = logging.getLogger(__name__)

# Media types mapped back to the format that produces them
_MEDIA_TYPE_FORMATS: dict[str, str] = {
    media_type: format_name for format_name, media_type in FORMAT_MEDIA_TYPES.items()
}
_MEDIA_TYPE_FORMATS["application/xhtml+xml"] = HTML

_HTML_RANGES = {"*/*", "text/*"}


class NegotiatedRepresentation(BaseModel):
    model_config = {"frozen": True}

    format: str
    media_type: str
    locale: str
    variant: Optional[str] = None


class NegotiationRejection(BaseModel):
    model_config = {"frozen": True}

    reason: str


NegotiationResult = Union[NegotiatedRepresentation, NegotiationRejection]


def parse_accept(header: Optional[str]) -> tuple[MediaRange, ...]:
    """Parse an Accept header into media ranges ordered by preference.

    Ranges keep their header order among equal q-values. Malformed q-values
    count as 1.0; ranges with q=0 are dropped.
    """
    if not header or not header.strip():
        return ()

    ranges: list[MediaRange] = []
    for raw in header.split(","):
        pieces = [piece.strip() for piece in raw.split(";")]
        media_type = pieces[0].lower()
        if not media_type:
            continue
        if media_type == "*":
            media_type = "*/*"

        quality = 1.0
        for param in pieces[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 1.0
        if quality <= 0:
            continue
        ranges.append(MediaRange(media_type=media_type, quality=min(quality, 1.0)))

    return tuple(sorted(ranges, key=lambda r: r.quality, reverse=True))


def _format_for_range(media_range: MediaRange, strategy: PresentationStrategy) -> Optional[str]:
    if media_range.media_type in _HTML_RANGES:
        return HTML if strategy.supports(HTML) else None
    format_name = _MEDIA_TYPE_FORMATS.get(media_range.media_type)
    if format_name and strategy.supports(format_name):
        return format_name
    return None


def _negotiate_format(
    request: RequestDescriptor,
    strategy: PresentationStrategy,
) -> Union[tuple[str, Optional[str]], NegotiationRejection]:
    if request.variant:
        variant_format = VARIANT_FORMATS.get(request.variant)
        if variant_format is None or not strategy.supports(request.variant):
            return NegotiationRejection(
                reason=f"Variant '{request.variant}' is not supported for {strategy.schema_name}"
            )
        if not strategy.supports(variant_format):
            return NegotiationRejection(
                reason=f"Variant '{request.variant}' needs unsupported format '{variant_format}'"
            )
        return variant_format, request.variant

    if request.format:
        if request.format not in FORMAT_MEDIA_TYPES or not strategy.supports(request.format):
            return NegotiationRejection(
                reason=f"Format '{request.format}' is not supported for {strategy.schema_name}"
            )
        return request.format, None

    if request.requested_via_script:
        # Script requests only get a representation they asked for by name
        for media_range in request.accept:
            format_name = _MEDIA_TYPE_FORMATS.get(media_range.media_type)
            if format_name and strategy.supports(format_name):
                return format_name, None
        return NegotiationRejection(reason="Script request without a supported Accept type")

    if not request.accept:
        if strategy.supports(HTML):
            return HTML, None
        return NegotiationRejection(reason=f"{strategy.schema_name} has no default representation")

    for media_range in request.accept:
        format_name = _format_for_range(media_range, strategy)
        if format_name:
            return format_name, None

    requested = ", ".join(r.media_type for r in request.accept)
    return NegotiationRejection(
        reason=f"None of [{requested}] is supported for {strategy.schema_name}"
    )


def _locale_available(document: Document, locale: str) -> bool:
    if document.locale == locale:
        return True
    return any(
        translation.locale == locale
        for translation in document.linked("available_translations")
    )


def negotiate(
    request: RequestDescriptor,
    strategy: PresentationStrategy,
    document: Document,
) -> NegotiationResult:
    """Choose the single representation to render, or reject the request."""
    chosen = _negotiate_format(request, strategy)
    if isinstance(chosen, NegotiationRejection):
        logger.info(f"Rejected /{request.path}: {chosen.reason}")
        return chosen

    format_name, variant = chosen
    locale = request.locale or document.locale
    if request.locale and not _locale_available(document, request.locale):
        rejection = NegotiationRejection(
            reason=f"No '{request.locale}' translation of {document.base_path}"
        )
        logger.info(f"Rejected /{request.path}: {rejection.reason}")
        return rejection

    return NegotiatedRepresentation(
        format=format_name,
        media_type=FORMAT_MEDIA_TYPES[format_name],
        locale=locale,
        variant=variant,
    )
