from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .bootstrap import PortalContext, build_context
from .env_settings import get_env
from .log_config import setup_logging
from .routers import password
from .webui import STATIC_ASSETS_DIR


log = logging.getLogger(__name__)


def create_app(context: PortalContext | None = None) -> FastAPI:
    """Build the ASGI app.

    Without an explicit ``context`` logging is configured and the shared
    context (pinned CA, HIBP client) is built from the environment at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if getattr(app.state, "portal", None) is None:
            env = get_env()
            setup_logging(level=env.log_level, log_dir=env.log_dir, retention_days=env.log_retention_days)
            owned = build_context(env)
            app.state.portal = owned
            log.info("%s started", env.app_name)
        try:
            yield
        finally:
            if owned is not None:
                owned.close()

    app = FastAPI(title="Password Portal", lifespan=lifespan)
    if context is not None:
        app.state.portal = context

    app.mount("/password/assets", StaticFiles(directory=str(STATIC_ASSETS_DIR)), name="assets")
    app.include_router(password.router)

    @app.get("/healthz")
    def healthz():
        return {}

    return app


app = create_app()
