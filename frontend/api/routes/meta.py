"""Meta/system routes."""

import logging

from fastapi import APIRouter, Request

from frontend import __version__

logger = logging.getLogger(__name__)

router = APIRouter(tags=["meta"])


@router.get("/healthcheck")
async def healthcheck(request: Request) -> dict:
    """Report loaded registries; does not call the content store."""
    state = request.app.state
    return {
        "status": "ok",
        "version": __version__,
        "strategies_loaded": state.strategy_registry.count(),
        "schemas": state.strategy_registry.list_keys(),
        "strategies": [s.model_dump() for s in state.strategy_registry.list_summaries()],
        "experiment_overrides_loaded": state.experiment_registry.count,
        "experiments": state.experiment_names,
    }
