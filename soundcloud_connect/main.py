"""
FastAPI application for connecting SoundCloud accounts.

This module wires dependencies and configures the application.
The API client is in soundcloud_connect/infrastructure.
"""

import logging
import os
from datetime import UTC, datetime

# Configure logging FIRST, before other local imports
from soundcloud_connect.logging_config import setup_global_logging

setup_global_logging()

# Now import other modules (they will use the configured logging)
from fastapi import FastAPI, Request, status  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402

from soundcloud_connect.core.exceptions import RemoteApiError  # noqa: E402
from soundcloud_connect.oauth import router as oauth_router  # noqa: E402

logger = logging.getLogger(__name__)


app = FastAPI(
    title="SoundCloud Connect",
    description="Connects SoundCloud accounts over OAuth2 and proxies API calls",
    version="1.0.0",
)


# ============================================================================
# Centralized Exception Handlers
# ============================================================================


@app.exception_handler(RemoteApiError)
async def remote_api_error_handler(request: Request, exc: RemoteApiError):
    """
    Handle SoundCloud API failures.

    Returns 502 Bad Gateway, carrying the status SoundCloud answered with.
    """
    logger.error(
        f"SoundCloud API error: {exc}",
        extra={"extra_fields": {"remote_status": exc.status_code}},
    )
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "status": "error",
            "message": str(exc),
            "remote_status": exc.status_code,
        },
    )


# ============================================================================
# Health Check Endpoints
# ============================================================================


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "soundcloud-connect",
        "timestamp": datetime.now(UTC).isoformat(),
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


# ============================================================================
# Include Routers
# ============================================================================

app.include_router(oauth_router.router)


# ============================================================================
# Main Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8080))
    uvicorn.run(app, host="0.0.0.0", port=port)
