"""Content store adapter.

Calls the upstream content store and translates the transport outcome into
a FetchResult. Nothing is retried here: timeouts, connection failures and
5xx responses all surface as UpstreamUnavailableResult so the dispatcher can
fail the request fast without rendering partial content.

The content store answers a request for a part URL (e.g.
``/guide-name/part-two``) with the parent document. This adapter is the one
place that knows that, and signals it explicitly:

- requested path == document base path -> Found
- requested path is a valid non-first part -> Found with part_slug
- requested path is the first part or an unknown part -> RedirectTo(base path)
- anything else (e.g. a special route ancestor) -> NotFoundResult
"""

import logging
import re
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from frontend.content.schemas import (
    Document,
    FetchResult,
    ForbiddenResult,
    Found,
    NotFoundResult,
    PublishingMetadata,
    RedirectTo,
    UpstreamUnavailableResult,
)

logger = logging.getLogger(__name__)

_REDIRECT_STATUSES = {301, 302, 303, 307, 308}
_MAX_AGE_RE = re.compile(r"max-age=(\d+)")


def normalize_base_path(path: str) -> str:
    """Collapse a request path into the ``/a/b/c`` form the content store keys on.

    Idempotent: normalizing an already-normalized path returns it unchanged.
    """
    segments = [segment for segment in path.split("/") if segment]
    return "/" + "/".join(segments)


def parse_cache_control(header: Optional[str]) -> PublishingMetadata:
    """Read max-age and the private flag out of an upstream Cache-Control header."""
    if not header:
        return PublishingMetadata()

    directives = [d.strip().lower() for d in header.split(",")]
    max_age = None
    for directive in directives:
        match = _MAX_AGE_RE.fullmatch(directive)
        if match:
            max_age = int(match.group(1))
            break

    return PublishingMetadata(max_age=max_age, is_private="private" in directives)


def _strip_locale(path: str, locale: Optional[str]) -> str:
    if locale and path.endswith(f".{locale}"):
        return path[: -(len(locale) + 1)]
    return path


def classify_document(
    requested_path: str,
    document: Document,
    locale: Optional[str] = None,
) -> FetchResult:
    """Decide what a 200 response for ``requested_path`` actually means.

    Args:
        requested_path: Normalized path that was requested, without locale suffix
        document: Document the content store returned
        locale: Locale suffix that was appended to the upstream request, if any
    """
    base_path = _strip_locale(normalize_base_path(document.base_path), locale or document.locale)

    if requested_path == base_path:
        return Found(document=document)

    prefix = base_path.rstrip("/") + "/"
    if not requested_path.startswith(prefix):
        return NotFoundResult()

    slug = requested_path[len(prefix):]
    parts = document.parts
    if not parts or "/" in slug:
        return NotFoundResult()

    slugs = [part.get("slug") for part in parts]
    if slug in slugs[1:]:
        return Found(document=document, part_slug=slug)

    logger.info(f"Part path {requested_path} redirects to {document.base_path}")
    return RedirectTo(target=document.base_path)


class ContentStoreClient:
    """Async client for the content store's ``/content/<base_path>`` endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 4.0,
        default_locale: str = "en",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.default_locale = default_locale
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
            follow_redirects=False,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    def upstream_path(self, base_path: str, locale: Optional[str] = None) -> str:
        """Path requested from the content store; translations live at ``<path>.<locale>``."""
        path = normalize_base_path(base_path)
        if locale and locale != self.default_locale:
            path = f"{path}.{locale}"
        return path

    async def fetch(self, base_path: str, locale: Optional[str] = None) -> FetchResult:
        """Fetch one content item.

        Args:
            base_path: Request path, with or without leading slash
            locale: Requested locale, if the request path carried one

        Returns:
            One of Found, NotFoundResult, ForbiddenResult, RedirectTo,
            UpstreamUnavailableResult
        """
        requested = normalize_base_path(base_path)
        upstream = self.upstream_path(requested, locale)
        url = "/content" + quote(upstream, safe="/")

        try:
            response = await self._client.get(url)
        except httpx.TimeoutException:
            logger.warning(f"Content store timed out fetching {upstream}")
            return UpstreamUnavailableResult(reason="timeout")
        except httpx.TransportError as e:
            logger.warning(f"Content store unreachable fetching {upstream}: {e}")
            return UpstreamUnavailableResult(reason=f"transport error: {e}")

        status = response.status_code
        if status in _REDIRECT_STATUSES:
            location = response.headers.get("location")
            if not location:
                return UpstreamUnavailableResult(reason=f"redirect {status} without location")
            return RedirectTo(target=location, status_code=301 if status == 301 else 302)
        if status == 403:
            return ForbiddenResult()
        if status in (404, 410):
            return NotFoundResult()
        if status != 200:
            logger.warning(f"Content store returned {status} for {upstream}")
            return UpstreamUnavailableResult(reason=f"upstream status {status}")

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Content store returned malformed JSON for {upstream}: {e}")
            return UpstreamUnavailableResult(reason="malformed body")

        if not isinstance(data, dict):
            return UpstreamUnavailableResult(reason="malformed body")
        if not data.get("locale"):
            data["locale"] = self.default_locale
        data["publishing"] = parse_cache_control(response.headers.get("cache-control"))

        try:
            document = Document.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Content item at {upstream} failed validation: {e}")
            return UpstreamUnavailableResult(reason="invalid content item")

        return classify_document(requested, document, locale)
