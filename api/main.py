from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.deps import _load_config
from api.errors import install_error_handlers
from api.routes import get_api_router, health
from hashcash import __version__
from hashcash.core.config import Config
from hashcash.core.ledger import Ledger, open_ledger


def create_app(config: Config | None = None, ledger: Ledger | None = None) -> FastAPI:
    start = time.monotonic()
    config = config or _load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        created_ledger = False
        if getattr(app.state, "ledger", None) is None:
            app.state.ledger = open_ledger(app.state.config.ledger)
            created_ledger = True

        yield

        # Close the ledger only if this lifespan opened it.
        close = getattr(app.state.ledger, "close", None)
        if created_ledger and close is not None:
            close()

    openapi_tags = [
        {"name": "health", "description": "Liveness and version metadata."},
        {"name": "stamps", "description": "Challenge parameters and stamp verification."},
    ]

    app = FastAPI(
        title="hashcash API",
        description="Proof-of-work stamp verification",
        version=__version__,
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )

    # Exposed in app state for dependency injection + tests.
    app.state.started_at = start
    app.state.config = config
    app.state.ledger = ledger

    install_error_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(get_api_router(), prefix="/api/v1")
    return app


# Module-level app for uvicorn (e.g. `uvicorn api.main:app`).
app = create_app()
