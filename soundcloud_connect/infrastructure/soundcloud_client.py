"""
Client for interacting with the SoundCloud API.

Builds the authorization URL, exchanges authorization codes for tokens and
performs resource calls. Every failed call is reported as RemoteApiError.
"""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import httpx

from soundcloud_connect.config import DEFAULT_TIMEOUT, SoundCloudConfig
from soundcloud_connect.core.domain import Session
from soundcloud_connect.core.exceptions import RemoteApiError
from soundcloud_connect.core.params import build_request_params, to_nested_form_fields


logger = logging.getLogger(__name__)


class SoundCloudClient:
    """
    A client for the SoundCloud OAuth2 flow and REST API.

    An instance is meant for one caller at a time. Token state lives in an
    immutable Session that set_access_token replaces as a whole.
    """

    PRODUCTION_HOST = "soundcloud.com"
    SANDBOX_HOST = "sandbox-soundcloud.com"

    CONNECT_PATH = "connect"
    TOKEN_PATH = "oauth2/token"
    ME_PATH = "me"
    TRACKS_PATH = "tracks"

    CONNECT_PARAMS = {
        "scope": "non-expiring",
        "display": "popup",
        "response_type": "code",
    }

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        sandbox: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initializes the client.

        Args:
            client_id: SoundCloud application client ID.
            client_secret: SoundCloud application client secret.
            redirect_uri: Redirect URI registered for the application.
            sandbox: Target the sandbox environment instead of production.
            timeout: Timeout in seconds for requests made with the
                client's own transport.
            http_client: Optional shared AsyncClient. It is used as-is and
                never closed by this class.
        """
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_uri = redirect_uri
        self._timeout = timeout
        self._http_client = http_client
        self._session = Session()
        self.sandbox = sandbox

    @classmethod
    def from_config(
        cls, config: SoundCloudConfig, http_client: httpx.AsyncClient | None = None
    ) -> "SoundCloudClient":
        """Create a client from a SoundCloudConfig."""
        if not config.is_configured():
            raise ValueError("SoundCloud client credentials are not configured")
        return cls(
            client_id=config.client_id,
            client_secret=config.client_secret,
            redirect_uri=config.redirect_uri,
            sandbox=config.sandbox,
            timeout=config.timeout,
            http_client=http_client,
        )

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def client_secret(self) -> str:
        return self._client_secret

    @property
    def redirect_uri(self) -> str:
        return self._redirect_uri

    @property
    def session(self) -> Session:
        return self._session

    @property
    def access_token(self) -> str | None:
        return self._session.access_token

    # ------------------------------------------------------------------ #
    #  OAuth2 flow                                                         #
    # ------------------------------------------------------------------ #

    def build_authorization_url(self) -> str:
        """
        Build the URL the user visits to grant access to their account.

        The client secret is never part of this URL.
        """
        params = build_request_params(
            self._default_params(), self.CONNECT_PARAMS, exclude=("client_secret",)
        )
        return self._build_url(self.CONNECT_PATH, params)

    async def exchange_code_for_token(
        self, code: str, grant_type: str = "authorization_code"
    ) -> dict[str, Any]:
        """
        Exchange an authorization code for an access token.

        The token is returned, not stored: call set_access_token to use it.

        Args:
            code: The code passed to the redirect URI.
            grant_type: OAuth2 grant type.

        Returns:
            The token endpoint response (access_token, scope, ...).

        Raises:
            RemoteApiError: If the request fails or SoundCloud rejects it.
        """
        params = build_request_params(
            self._default_params(), {"grant_type": grant_type, "code": code}
        )
        return await self._request("POST", self._build_url(self.TOKEN_PATH), params)

    def set_access_token(self, token: str) -> Session:
        """Use ``token`` as the bearer credential for subsequent calls."""
        self._session = self._session.with_access_token(token)
        return self._session

    # ------------------------------------------------------------------ #
    #  Resources                                                           #
    # ------------------------------------------------------------------ #

    async def get_current_user(self, token: str) -> dict[str, Any]:
        """
        Get the user who owns ``token``.

        The token is sent as the ``oauth_token`` query parameter, and no
        client credentials are included.
        """
        return await self._request(
            "GET", self._build_url(self.ME_PATH), {"oauth_token": token}
        )

    async def upload_track(self, data: Mapping[str, str]) -> dict[str, Any]:
        """
        Upload a track.

        Args:
            data: Flat track fields, e.g. ``{"title": "Demo"}``. Each key is
                sent as ``track[<key>]``.

        Returns:
            The created track as returned by SoundCloud.
        """
        params = build_request_params(
            self._default_params(), to_nested_form_fields("track", data)
        )
        return await self._request("POST", self._build_url(self.TRACKS_PATH), params)

    # ------------------------------------------------------------------ #
    #  Request helpers                                                     #
    # ------------------------------------------------------------------ #

    def _default_params(self) -> dict[str, str]:
        return {
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "redirect_uri": self._redirect_uri,
        }

    def _build_url(self, path: str, params: Mapping[str, str] | None = None) -> str:
        """
        Build an absolute API URL for ``path``.

        Only the connect endpoint lives outside the ``api.`` subdomain, and
        only it carries its parameters in the URL.
        """
        is_connect = self.CONNECT_PATH in path
        host = self.SANDBOX_HOST if self.sandbox else self.PRODUCTION_HOST
        prefix = "" if is_connect else "api."
        url = f"https://{prefix}{host}/{path}"

        if is_connect and params:
            url += "?" + urlencode(params)

        return url

    async def _request(
        self, method: str, url: str, params: Mapping[str, str]
    ) -> dict[str, Any]:
        """Send the request and decode its JSON body."""
        headers = dict(self._session.headers)
        # GET carries parameters in the query string, everything else in a form body
        payload_key = "params" if method == "GET" else "data"
        options: dict[str, Any] = {"headers": headers, payload_key: dict(params)}

        logger.debug(f"SoundCloud request: {method} {url}")

        response = await self._send(method, url, options)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"SoundCloud returned a non-JSON body for {method} {url}")
            raise RemoteApiError(
                f"Invalid JSON in response from {url}: {e}",
                status_code=response.status_code,
                response_text=response.text,
            ) from e

    async def _send(self, method: str, url: str, options: dict[str, Any]) -> httpx.Response:
        try:
            if self._http_client is not None:
                response = await self._http_client.request(method, url, **options)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.request(method, url, **options)
            response.raise_for_status()
            return response

        except httpx.HTTPStatusError as e:
            logger.error(
                f"SoundCloud API error: {e.response.status_code} for {method} {url}",
                extra={"extra_fields": {"status_code": e.response.status_code}},
            )
            raise RemoteApiError(
                str(e),
                status_code=e.response.status_code,
                response_text=e.response.text,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"SoundCloud network error for {method} {url}: {e}")
            raise RemoteApiError(f"Network error: {e}") from e
