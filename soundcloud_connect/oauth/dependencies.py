"""
FastAPI dependencies for SoundCloud endpoints.

Provides dependency injection for the configured SoundCloud client.
"""

import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from soundcloud_connect.config import SoundCloudConfig, get_soundcloud_config
from soundcloud_connect.infrastructure.soundcloud_client import SoundCloudClient


logger = logging.getLogger(__name__)


def get_soundcloud_client(
    config: Annotated[SoundCloudConfig, Depends(get_soundcloud_config)],
) -> SoundCloudClient:
    """
    Provide a SoundCloud client for the current request.

    Builds a new client for every request.

    Raises:
        HTTPException: If the client credentials are not configured
    """
    if not config.is_configured():
        logger.warning("SoundCloud OAuth not configured (missing credentials)")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="SoundCloud is not configured",
        )
    return SoundCloudClient.from_config(config)


async def get_bearer_token(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """
    Extract the token from an ``Authorization: OAuth <token>`` header.

    Raises:
        HTTPException: If the header is missing or malformed
    """
    scheme, _, token = (authorization or "").partition(" ")
    if scheme != "OAuth" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing 'Authorization: OAuth <token>' header",
        )
    return token.strip()


# Type aliases for cleaner dependency injection
SoundCloud = Annotated[SoundCloudClient, Depends(get_soundcloud_client)]
BearerToken = Annotated[str, Depends(get_bearer_token)]
