"""Which formats, presenter and templates each content schema uses.

The registry lives in ``frontend.strategies.registry``; it is not re-exported
here because it depends on the presenter table, which itself uses these schemas.
"""

from .schemas import (
    ATOM,
    FORMAT_MEDIA_TYPES,
    HTML,
    PRINT,
    PageTemplate,
    VARIANT_FORMATS,
    PresentationStrategy,
    StrategySummary,
)

__all__ = [
    "ATOM",
    "FORMAT_MEDIA_TYPES",
    "HTML",
    "PRINT",
    "PageTemplate",
    "VARIANT_FORMATS",
    "PresentationStrategy",
    "StrategySummary",
]
