"""Presentation strategy schemas.

A PresentationStrategy declares, per content schema, which output formats
are supported, which presenter builds the view and which template renders
it. Strategies are loaded once at startup and never modified.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

HTML = "html"
ATOM = "atom"
PRINT = "print"

# Output formats the frontend knows how to produce, with their media types
FORMAT_MEDIA_TYPES: dict[str, str] = {
    HTML: "text/html",
    ATOM: "application/atom+xml",
}

# Path variants and the format they render through
VARIANT_FORMATS: dict[str, str] = {
    PRINT: HTML,
}


class PresentationStrategy(BaseModel):
    """How one content schema is presented."""

    model_config = {"frozen": True}

    schema_name: str = Field(..., description="Content schema this strategy handles")
    presenter: str = Field(
        default="content_item",
        description="Key into the presenter table (e.g. 'guide', 'news_article')",
    )
    template_key: str = Field(
        ...,
        description="Template rendered for the html format (e.g. 'case_study')",
    )
    supported_formats: frozenset[str] = Field(
        default=frozenset({HTML}),
        description="Output formats and variants this schema supports: 'html', 'atom', 'print'",
    )
    feed_template_key: Optional[str] = Field(
        default=None,
        description="Template rendered for the atom format",
    )
    print_template_key: Optional[str] = Field(
        default=None,
        description="Template rendered for the print variant",
    )
    taxonomy_sidebar: bool = Field(
        default=True,
        description="Whether pages of this schema may show taxonomy navigation",
    )
    feed_title: Optional[str] = None

    @field_validator("supported_formats", mode="before")
    @classmethod
    def _coerce_formats(cls, value):
        if isinstance(value, (list, tuple, set)):
            return frozenset(value)
        return value

    @field_validator("supported_formats")
    @classmethod
    def _check_formats(cls, value: frozenset[str]) -> frozenset[str]:
        known = set(FORMAT_MEDIA_TYPES) | set(VARIANT_FORMATS)
        unknown = set(value) - known
        if unknown:
            raise ValueError(f"Unknown formats: {sorted(unknown)}")
        return value

    def supports(self, format_or_variant: str) -> bool:
        return format_or_variant in self.supported_formats

    def template_for(self, format_name: str, variant: Optional[str] = None) -> str:
        """Template key for a negotiated format/variant pair."""
        if variant == PRINT and self.print_template_key:
            return self.print_template_key
        if format_name == ATOM and self.feed_template_key:
            return self.feed_template_key
        return self.template_key


class StrategySummary(BaseModel):
    """Lightweight strategy listing for the healthcheck."""

    schema_name: str
    presenter: str
    supported_formats: list[str]


class PageTemplate(BaseModel):
    """A single page rendered through its own html template."""

    model_config = {"frozen": True}

    base_path: str = Field(..., description="Exact base path (e.g. '/log-in-file-self-assessment-tax-return/not-registered')")
    template_key: str

    @field_validator("base_path")
    @classmethod
    def _absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"base_path must start with '/', got '{value}'")
        return value
