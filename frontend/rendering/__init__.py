"""Template rendering for content pages, feeds and error pages."""

from .engine import TemplateRenderer

__all__ = ["TemplateRenderer"]
