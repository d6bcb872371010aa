"""
Main entrypoint for the Booking Services API.

This module assembles the FastAPI application: logging, CORS, error
handlers, the session routes, the versioned record routes and the
liveness route.  The ``create_app`` function builds and configures the
app, which is then instantiated at module import time as ``app``, e.g.::

    uvicorn booking_api.app.main:app --port 5000

The MongoDB client is created on startup, pinged once from a worker
thread and kept open for the lifetime of the process.  Tests pass
their own ``Settings`` and ``RecordStore`` to ``create_app`` instead.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from .api import session
from .api.v1.router import build_router
from .core.config import Settings, settings as default_settings
from .core.db import RecordStore
from .core.errors import StoreError, register_error_handlers
from .core.logging_config import setup_logging
from .core.security import TokenService


logger = logging.getLogger(__name__)


def _connect_store(app: FastAPI, app_settings: Settings) -> None:
    if app.state.store is None:
        app.state.store = RecordStore.from_settings(app_settings)
    # A failed ping is logged, not fatal: the driver keeps trying to
    # reach the deployment and later requests report their own errors.
    try:
        app.state.store.ping()
    except StoreError:
        logger.exception("Could not reach MongoDB deployment")
    else:
        logger.info("Pinged your deployment. You successfully connected to MongoDB!")


def create_app(app_settings: Optional[Settings] = None, store: Optional[RecordStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Configuration to use.  Defaults to the settings read from the
        environment when ``core.config`` was imported.
    store : Optional[RecordStore]
        Pre-built store.  When omitted, one is created from the settings
        on startup and closed on shutdown.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)
    owns_store = store is None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await run_in_threadpool(_connect_store, app, app_settings)
        try:
            yield
        finally:
            if owns_store and app.state.store is not None:
                await run_in_threadpool(app.state.store.close)
                app.state.store = None

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version, lifespan=lifespan)
    app.state.settings = app_settings
    app.state.store = store
    app.state.tokens = TokenService(
        app_settings.secret_key,
        lifetime_seconds=app_settings.token_lifetime_seconds,
        algorithm=app_settings.algorithm,
    )
    if app_settings.secret_key == "change_me":
        logger.warning("ACCESS_TOKEN_SECRET is not set; session tokens use the default secret")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app, debug=app_settings.debug)

    app.include_router(session.router, tags=["session"])
    app.include_router(build_router(app_settings.bookings_require_auth), prefix="/api/v1")

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def liveness() -> str:
        return "Server is running"

    return app


app = create_app()
