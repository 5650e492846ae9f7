"""
Domain models for the SoundCloud client.

Pydantic models for session state and token responses.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_HEADERS = {"Accept": "application/json"}


class Session(BaseModel):
    """
    Bearer credentials and default headers sent with every request.

    Sessions are immutable: setting a token produces a new Session, and the
    header map is read-only, so a request in flight never observes a
    half-updated header map.
    """

    access_token: str | None = Field(
        default=None, description="OAuth2 access token, if one was set"
    )
    headers: Mapping[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_HEADERS),
        validate_default=True,
        description="Headers attached to every request (read-only)",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("headers", mode="after")
    @classmethod
    def _freeze_headers(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        # Copy first so the caller's dict cannot change the session either
        return MappingProxyType(dict(value))

    def with_access_token(self, token: str) -> "Session":
        """Return a copy carrying ``token`` and its Authorization header."""
        return Session(
            access_token=token,
            headers={**self.headers, "Authorization": f"OAuth {token}"},
        )


class SoundCloudToken(BaseModel):
    """
    Token returned by the SoundCloud token endpoint.

    The response contract is owned by SoundCloud, so unknown keys are kept.
    """

    access_token: str = Field(description="OAuth2 access token")
    scope: str | None = Field(default=None, description="Granted scope")
    expires_in: int | None = Field(
        default=None, description="Lifetime in seconds (absent for non-expiring)"
    )
    refresh_token: str | None = Field(default=None, description="Refresh token")
    token_type: str | None = Field(default=None, description="Token type")

    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_oauth_response(cls, token_data: dict[str, Any]) -> "SoundCloudToken":
        """Create a SoundCloudToken from the raw token endpoint payload."""
        return cls.model_validate(token_data)
