"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import admin, claims, health, tokens
from api.errors import (
    APIError,
    allowlist_error_handler,
    api_error_handler,
    generic_error_handler,
)
from core.schemas.errors import AllowlistException


# Configure logging; respects ALLOWLIST_LOG_LEVEL env var
def _resolve_log_level() -> int:
    """Resolve log level from env var, defaulting to INFO."""
    raw = os.getenv("ALLOWLIST_LOG_LEVEL")
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Merkle Allowlist API",
        description="""
HTTP API for claiming allowlisted tokens against a Merkle commitment root.

## Endpoints

- **POST /claim** - Claim a token for the calling identity
- **POST /leaf** - Compute the leaf commitment for (claimant, token id)
- **POST /verify-proof** - Check a proof against the live root
- **GET /status** - Live root, suspension flag, metadata location, admin
- **GET /tokens/{id}**, **GET /claimants/{address}** - Consumption state
- **POST /admin/...** - Admin-gated root, pause, metadata and admin transfer
- **GET /health** - Health check

## Caller identity

The calling identity is read from the `X-Caller-Address` header, which
the authenticating gateway in front of this service must set.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(AllowlistException, allowlist_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(claims.router)
    app.include_router(tokens.router)
    app.include_router(admin.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    from core.config.runtime import get_default_config

    service = get_default_config().service
    uvicorn.run(app, host=service.host, port=service.port)
