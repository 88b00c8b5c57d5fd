"""Content frontend API - renders content store items.

Serves every public path by fetching the matching content item from the
content store and rendering it:
- HTML pages, per content schema
- Atom feeds and print variants where the schema supports them
- Experiment variants for requests assigned to an experiment arm

Run with:
    uvicorn frontend.api.main:app
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request, Response

from frontend import __version__
from frontend.api.routes import content_items, meta
from frontend.api.routes.content_items import to_response
from frontend.config import Settings, get_settings
from frontend.content.fetcher import ContentStoreClient
from frontend.dispatch import ContentDispatcher
from frontend.errors import ContentFrontendError
from frontend.experiments.dispatcher import ExperimentDispatcher
from frontend.experiments.registry import ExperimentRegistry
from frontend.rendering.engine import TemplateRenderer
from frontend.strategies.registry import StrategyRegistry

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use (default: read from the environment)
        transport: Optional httpx transport for the content store client
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load registries once and open the content store client."""
        logger.info("Loading presentation strategies...")
        strategy_registry = StrategyRegistry(settings.strategies_file)
        strategy_registry.load()
        logger.info(f"Loaded {strategy_registry.count()} strategies")

        logger.info("Loading experiment overrides...")
        experiment_registry = ExperimentRegistry(settings.experiments_file)
        logger.info(f"Loaded {experiment_registry.count} experiment overrides")

        fetcher = ContentStoreClient(
            settings.content_store_url,
            timeout=settings.content_store_timeout,
            default_locale=settings.default_locale,
            transport=transport,
        )
        renderer = TemplateRenderer(
            templates_dir=settings.templates_dir,
            schema_names_file=settings.schema_names_file,
            default_locale=settings.default_locale,
        )

        app.state.settings = settings
        app.state.strategy_registry = strategy_registry
        app.state.experiment_registry = experiment_registry
        app.state.experiment_names = experiment_registry.experiment_names()
        app.state.dispatcher = ContentDispatcher(
            fetcher=fetcher,
            strategies=strategy_registry,
            experiments=ExperimentDispatcher(experiment_registry.list_all()),
            renderer=renderer,
            default_max_age=settings.default_max_age,
        )

        logger.info(f"Content frontend ready (content store: {settings.content_store_url})")
        yield
        logger.info("Shutting down content frontend")
        await fetcher.aclose()

    app = FastAPI(
        title="Content Frontend",
        description="Renders content store items as pages and feeds.",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.exception_handler(ContentFrontendError)
    async def content_error_handler(request: Request, exc: ContentFrontendError) -> Response:
        if exc.status_code >= 500:
            logger.warning(f"{request.url.path}: {exc.message}")
        return to_response(request.app.state.dispatcher.error_response(exc))

    # Meta routes first: the content router claims every other path
    app.include_router(meta.router)
    app.include_router(content_items.router)

    return app


configure_logging(get_settings().log_level)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "frontend.api.main:app",
        host="0.0.0.0",
        port=3090,
        reload=True,
    )
