"""Content dispatcher — turns a parsed request into a rendered response.

One request moves through these states, in order:

    RECEIVED -> FETCHED -> SCHEMA_RESOLVED -> NEGOTIATED -> PRESENTED
             -> CACHE_POLICY_SET -> EXPERIMENTS_APPLIED -> RENDERED

Every state has a terminal error exit, raised as a ContentFrontendError
subclass and rendered by ``error_response``:

    upstream not found          -> 404
    upstream forbidden          -> 403
    upstream redirect / part    -> 301 (or the upstream redirect status)
    upstream unavailable        -> 503, no-store
    no strategy for the schema  -> 404
    negotiation rejected        -> 406

Only the upstream fetch awaits; everything after it is pure computation on
per-request data.
"""

import logging
from enum import Enum
from typing import Optional, Protocol

from pydantic import BaseModel, Field

from frontend.cache import NO_STORE, derive_cache_directive
from frontend.content.schemas import (
    Document,
    FetchResult,
    ForbiddenResult,
    Found,
    NotFoundResult,
    RedirectTo,
    RequestDescriptor,
    UpstreamUnavailableResult,
)
from frontend.errors import (
    ContentFrontendError,
    Forbidden,
    NotAcceptableFormat,
    NotFound,
    RedirectRequired,
    UnsupportedSchema,
    UpstreamUnavailable,
)
from frontend.experiments.dispatcher import ExperimentDispatcher
from frontend.negotiation import NegotiationRejection, negotiate
from frontend.presenters import PRESENTERS
from frontend.rendering.engine import TemplateRenderer
from frontend.strategies.registry import StrategyRegistry
from frontend.strategies.schemas import ATOM, HTML

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html; charset=utf-8"


class DispatchState(str, Enum):
    RECEIVED = "received"
    FETCHED = "fetched"
    SCHEMA_RESOLVED = "schema_resolved"
    NEGOTIATED = "negotiated"
    PRESENTED = "presented"
    CACHE_POLICY_SET = "cache_policy_set"
    EXPERIMENTS_APPLIED = "experiments_applied"
    RENDERED = "rendered"


class ContentFetcher(Protocol):
    async def fetch(self, base_path: str, locale: Optional[str] = None) -> FetchResult:
        ...


class RenderedResponse(BaseModel):
    """Status, headers and body ready to hand to the web framework."""

    status_code: int
    body: bytes = b""
    headers: dict[str, str] = Field(default_factory=dict)


def _unwrap(result: FetchResult, request: RequestDescriptor) -> tuple[Document, Optional[str]]:
    """Return the fetched document or raise the matching terminal error."""
    path = request.base_path
    if isinstance(result, Found):
        return result.document, result.part_slug
    if isinstance(result, NotFoundResult):
        raise NotFound(path=path)
    if isinstance(result, ForbiddenResult):
        raise Forbidden(path=path)
    if isinstance(result, RedirectTo):
        raise RedirectRequired(result.target, path=path, status_code=result.status_code)
    if isinstance(result, UpstreamUnavailableResult):
        raise UpstreamUnavailable(result.reason, path=path)
    raise UpstreamUnavailable(f"Unexpected fetch outcome {result!r}", path=path)


class ContentDispatcher:
    """Sequences fetch, strategy lookup, negotiation, presentation, caching,
    experiments and rendering for one request at a time.

    Holds only read-only collaborators, so one instance serves concurrent
    requests.
    """

    def __init__(
        self,
        fetcher: ContentFetcher,
        strategies: StrategyRegistry,
        experiments: ExperimentDispatcher,
        renderer: TemplateRenderer,
        default_max_age: int = 900,
    ):
        self.fetcher = fetcher
        self.strategies = strategies
        self.experiments = experiments
        self.renderer = renderer
        self.default_max_age = default_max_age

    def _trace(self, request: RequestDescriptor, state: DispatchState) -> None:
        logger.debug(f"{request.base_path}: {state.value}")

    async def dispatch(
        self,
        request: RequestDescriptor,
        assignments: Optional[dict[str, str]] = None,
    ) -> RenderedResponse:
        """Render the content item for ``request``.

        Args:
            request: Parsed inbound request
            assignments: Experiment name -> arm, supplied by the caller

        Raises:
            ContentFrontendError: For every terminal exit other than 200
        """
        assignments = assignments or {}
        self._trace(request, DispatchState.RECEIVED)

        result = await self.fetcher.fetch(request.path, request.locale)
        document, part_slug = _unwrap(result, request)
        self._trace(request, DispatchState.FETCHED)

        strategy = self.strategies.strategy_for(document.schema_name)
        if strategy is None:
            logger.warning(
                f"No presentation strategy for schema '{document.schema_name}' at {document.base_path}"
            )
            raise UnsupportedSchema(document.schema_name, path=request.base_path)
        self._trace(request, DispatchState.SCHEMA_RESOLVED)

        negotiated = negotiate(request, strategy, document)
        if isinstance(negotiated, NegotiationRejection):
            raise NotAcceptableFormat(negotiated.reason, path=request.base_path)
        self._trace(request, DispatchState.NEGOTIATED)

        presenter = PRESENTERS[strategy.presenter](document, request, strategy, part_slug)
        template_key = strategy.template_for(negotiated.format, negotiated.variant)
        if negotiated.format == HTML and negotiated.variant is None:
            template_key = self.strategies.template_for_path(document.base_path) or template_key
        view = presenter.to_view(template_key)
        self._trace(request, DispatchState.PRESENTED)

        cache_directive = derive_cache_directive(presenter.publishing, self.default_max_age)
        self._trace(request, DispatchState.CACHE_POLICY_SET)

        view = self.experiments.apply(assignments, document.base_path, view)
        self._trace(request, DispatchState.EXPERIMENTS_APPLIED)

        body = self.renderer.render(view.template_key, negotiated.locale, view)
        self._trace(request, DispatchState.RENDERED)

        headers = {
            "Content-Type": f"{negotiated.media_type}; charset=utf-8",
            "Cache-Control": cache_directive.header_value(),
        }
        if negotiated.format == ATOM:
            headers["Access-Control-Allow-Origin"] = "*"
        vary = self.experiments.vary_headers(document.base_path)
        if vary:
            headers["Vary"] = ", ".join(vary)

        return RenderedResponse(status_code=200, body=body, headers=headers)

    def submit(
        self,
        request: RequestDescriptor,
        assignments: dict[str, str],
        form: dict[str, str],
    ) -> RenderedResponse:
        """Handle a follow-on form submission through a next-handler override.

        Raises:
            NotFound: When no next-handler override applies to this path and assignment
        """
        target = self.experiments.resolve_next_handler(request.base_path, assignments, form)
        if target is None:
            raise NotFound(path=request.base_path)
        logger.info(f"Form submission to {request.base_path} redirects to {target}")
        return RenderedResponse(
            status_code=302,
            headers={"Location": target, "Cache-Control": NO_STORE},
        )

    def error_response(self, error: ContentFrontendError) -> RenderedResponse:
        """Render the schema-independent page for a terminal error."""
        headers = {"Cache-Control": NO_STORE}
        if isinstance(error, RedirectRequired):
            headers["Location"] = error.location
            return RenderedResponse(status_code=error.status_code, headers=headers)

        headers["Content-Type"] = HTML_CONTENT_TYPE
        body = self.renderer.render_error(error.status_code, error.title, error.message)
        return RenderedResponse(status_code=error.status_code, body=body, headers=headers)
