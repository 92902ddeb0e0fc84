"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from codeplay.config import Config
from codeplay.playgrounds import (
    InMemoryPlaygroundStore,
    JsonPlaygroundStore,
    PlaygroundActions,
    PlaygroundStore,
)

from . import playground_routes, template_routes
from .errors import TemplateApiError, template_api_error_handler

logger = logging.getLogger(__name__)


def build_store(config: Config) -> PlaygroundStore:
    """JSON-file store when ``data_file`` is configured, in-memory otherwise."""
    if config.data_file is not None:
        return JsonPlaygroundStore(config.data_file)
    logger.warning("No data file configured; playgrounds will not survive a restart")
    return InMemoryPlaygroundStore()


def create_app(config: Config | None = None, store: PlaygroundStore | None = None) -> FastAPI:
    """Build the CodePlay API.

    Args:
        config: Service configuration. Defaults to ``Config.from_env()``.
        store: Playground store. Defaults to ``build_store(config)``.
    """
    config = config or Config.from_env()
    config.ensure_directories()
    store = store if store is not None else build_store(config)

    app = FastAPI(title="CodePlay")
    app.state.config = config
    app.state.store = store
    app.state.actions = PlaygroundActions(store)

    app.add_exception_handler(TemplateApiError, template_api_error_handler)
    app.include_router(template_routes.router)
    app.include_router(playground_routes.router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
