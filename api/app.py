"""
Distributor API - FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import json
import logging
import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from api.errors import (
    APIError,
    airdrop_error_handler,
    api_error_handler,
    generic_error_handler,
    validation_error_handler,
)
from api.routes import claims, health, info
from core.schemas.errors import AirdropException


# Configure logging: AIRDROP_LOG_LEVEL env var, then airdrop.json log_level
def _resolve_log_level() -> int:
    """Resolve log level from env var or airdrop.json, defaulting to INFO."""
    raw = os.getenv("AIRDROP_LOG_LEVEL")
    if raw is None:
        cfg_path = Path.cwd() / "airdrop.json"
        if cfg_path.exists():
            try:
                with open(cfg_path) as f:
                    raw = json.load(f).get("log_level")
            except (OSError, ValueError, AttributeError):
                raw = None
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Merkle Airdrop API",
        description="""
HTTP API for a Merkle airdrop distributor.

## Endpoints

- **GET /health** - Health check
- **GET /root** - Committed root and signing domain
- **GET /token** - Token ledger and remaining distributor balance
- **GET /digest** - Digest an account signs to authorize its claim
- **GET /claims/{account}** - Claim status
- **POST /claim** - Submit a claim
- **POST /claim/check** - Dry-run a claim

## Rejections

- `409` already claimed
- `401` invalid signature
- `400` invalid proof or malformed input
- `502` token transfer failed (nothing is recorded)
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(AirdropException, airdrop_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(info.router)
    app.include_router(claims.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    from api.deps import _load_runtime_config

    api_config = _load_runtime_config().api
    uvicorn.run(app, host=api_config.host, port=api_config.port)
