"""FastAPI application factory for the Decider API server."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from decider import __version__
from decider.api.routes import decide, health, history
from decider.errors import ValidationError

logger = logging.getLogger(__name__)


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Report lists that are too short to decide between."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.code)
    return JSONResponse(status_code=400, content={"detail": exc.message, "code": exc.code})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI app instance.
    """
    app = FastAPI(
        title="Decider API",
        description="Local-only API for Decider - share a list, get one item back",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS configuration for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:8080",
            "http://127.0.0.1:8080",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, _validation_error_handler)

    app.include_router(health.router, tags=["Health"])
    app.include_router(decide.router, tags=["Decide"])
    app.include_router(history.router, tags=["History"])

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        """Redirect to the API docs."""
        return RedirectResponse(url="/docs")

    return app
