"""Content item routes.

Every path not claimed by another router is treated as a content store
base path, optionally suffixed with a locale, a format or ``/print``.
"""

import logging

from fastapi import APIRouter, Request, Response

from frontend.dispatch import ContentDispatcher, RenderedResponse
from frontend.routing import build_request_descriptor, extract_assignments

logger = logging.getLogger(__name__)

router = APIRouter(tags=["content"])


def _dispatcher(request: Request) -> ContentDispatcher:
    return request.app.state.dispatcher


def to_response(rendered: RenderedResponse) -> Response:
    headers = dict(rendered.headers)
    media_type = headers.pop("Content-Type", None)
    return Response(
        content=rendered.body,
        status_code=rendered.status_code,
        headers=headers,
        media_type=media_type,
    )


def _assignments(request: Request) -> dict[str, str]:
    experiments = request.app.state.experiment_names
    return extract_assignments(request.headers, experiments)


@router.get("/{path:path}")
async def show(path: str, request: Request) -> Response:
    """Render a content item."""
    settings = request.app.state.settings
    descriptor = build_request_descriptor(
        path,
        request.headers,
        request.query_params,
        settings.available_locales,
        settings.default_locale,
    )
    rendered = await _dispatcher(request).dispatch(descriptor, _assignments(request))
    return to_response(rendered)


@router.post("/{path:path}")
async def submit(path: str, request: Request) -> Response:
    """Route a follow-on form submission through its experiment next handler."""
    settings = request.app.state.settings
    descriptor = build_request_descriptor(
        path,
        request.headers,
        request.query_params,
        settings.available_locales,
        settings.default_locale,
    )
    form = await request.form()
    fields = {key: value for key, value in form.items() if isinstance(value, str)}
    rendered = _dispatcher(request).submit(descriptor, _assignments(request), fields)
    return to_response(rendered)
