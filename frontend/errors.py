"""Request-terminating error taxonomy.

Each error maps to exactly one response class. None of them is retried and
none escapes the request that raised it.
"""

from typing import Optional


class ContentFrontendError(Exception):
    """Base class for errors that end a request with a non-200 status."""

    status_code: int = 500
    title: str = "Something went wrong"

    def __init__(self, message: str = "", path: Optional[str] = None):
        super().__init__(message or self.title)
        self.message = message or self.title
        self.path = path


class NotFound(ContentFrontendError):
    status_code = 404
    title = "Page not found"


class Forbidden(ContentFrontendError):
    status_code = 403
    title = "You do not have permission to view this page"


class UnsupportedSchema(NotFound):
    """The content item's schema has no registered presentation strategy."""

    title = "No renderer for this content type"

    def __init__(self, schema_name: Optional[str], path: Optional[str] = None):
        super().__init__(f"No presentation strategy for schema '{schema_name}'", path)
        self.schema_name = schema_name


class NotAcceptableFormat(ContentFrontendError):
    status_code = 406
    title = "Not acceptable"

    def __init__(self, reason: str, path: Optional[str] = None):
        super().__init__(reason, path)
        self.reason = reason


class UpstreamUnavailable(ContentFrontendError):
    status_code = 503
    title = "Sorry, we're experiencing technical difficulties"


class RedirectRequired(ContentFrontendError):
    status_code = 301
    title = "Moved permanently"

    def __init__(self, location: str, path: Optional[str] = None, status_code: int = 301):
        super().__init__(f"Redirect to {location}", path)
        self.location = location
        self.status_code = status_code


class TemplateRenderError(ContentFrontendError):
    """A template key resolved to no template, or the template failed to render."""

    status_code = 500
