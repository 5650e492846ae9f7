"""
SoundCloud OAuth2 and resource endpoints.

- GET /oauth/soundcloud/connect - Start OAuth flow
- GET /oauth/soundcloud/callback - Exchange the code, return the token
- GET /oauth/soundcloud/me - Current user for a token
- POST /oauth/soundcloud/tracks - Upload a track

Tokens are returned to the caller, never stored.
"""

import logging

from fastapi import APIRouter, Body, HTTPException, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from soundcloud_connect.core.domain import SoundCloudToken
from soundcloud_connect.core.exceptions import RemoteApiError
from soundcloud_connect.oauth.dependencies import BearerToken, SoundCloud


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/oauth/soundcloud", tags=["soundcloud"])


@router.get("/connect")
async def connect(client: SoundCloud):
    """
    Start OAuth2 authorization flow.

    Redirects the user to the SoundCloud authorization page.

    Args:
        client: SoundCloud client

    Returns:
        Redirect to SoundCloud's authorization page
    """
    logger.info(
        "Starting SoundCloud OAuth flow",
        extra={"extra_fields": {"sandbox": client.sandbox}},
    )
    return RedirectResponse(
        url=client.build_authorization_url(),
        status_code=status.HTTP_302_FOUND,
    )


@router.get("/callback")
async def callback(
    client: SoundCloud,
    code: str | None = None,
    error: str | None = None,
    error_description: str | None = None,
):
    """
    Handle OAuth2 callback from SoundCloud.

    Exchanges the authorization code for a token and returns it.

    Args:
        client: SoundCloud client
        code: Authorization code
        error: Error code set when the user denied access
        error_description: Human readable error

    Returns:
        The token issued by SoundCloud

    Raises:
        HTTPException: On denied access, missing code or failed exchange
    """
    if error:
        logger.warning(f"SoundCloud authorization denied: {error}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Authorization denied: {error_description or error}",
        )

    if not code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing authorization code",
        )

    try:
        token_data = await client.exchange_code_for_token(code)
        token = SoundCloudToken.from_oauth_response(token_data)
    except RemoteApiError as e:
        logger.error(
            f"OAuth error during token exchange: {e}",
            extra={"extra_fields": {"status_code": e.status_code}},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"OAuth authorization failed: {e}",
        )
    except ValidationError as e:
        logger.error(f"Unexpected token response from SoundCloud: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Invalid token response from SoundCloud",
        )

    logger.info("Successfully connected SoundCloud")

    return {
        "status": "success",
        "token": token.model_dump(),
    }


@router.get("/me")
async def me(client: SoundCloud, oauth_token: str):
    """
    Get the SoundCloud user who owns ``oauth_token``.

    Remote failures are handled by the RemoteApiError handler in main.py.
    """
    return await client.get_current_user(oauth_token)


@router.post("/tracks", status_code=status.HTTP_201_CREATED)
async def upload_track(
    client: SoundCloud,
    token: BearerToken,
    track: dict[str, str] = Body(...),
):
    """
    Upload a track for the user owning the bearer token.

    Args:
        client: SoundCloud client
        token: Token from the Authorization header
        track: Flat track fields (title, sharing, ...)

    Returns:
        The created track
    """
    client.set_access_token(token)
    created = await client.upload_track(track)
    track_id = created.get("id") if isinstance(created, dict) else None

    logger.info(
        "Uploaded SoundCloud track",
        extra={"extra_fields": {"track_id": track_id}},
    )
    return created
