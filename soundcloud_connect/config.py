"""
SoundCloud API configuration.

Loaded from environment variables by the web application. The client itself
takes plain constructor arguments and never reads the environment.
"""

import os
from dataclasses import dataclass
from functools import lru_cache


DEFAULT_TIMEOUT = 30.0

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class SoundCloudConfig:
    """Configuration for SoundCloud API access."""

    client_id: str | None = None
    client_secret: str | None = None
    redirect_uri: str | None = None
    sandbox: bool = False
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "SoundCloudConfig":
        """Load configuration from environment variables."""
        return cls(
            client_id=os.getenv("SOUNDCLOUD_CLIENT_ID"),
            client_secret=os.getenv("SOUNDCLOUD_CLIENT_SECRET"),
            redirect_uri=os.getenv("SOUNDCLOUD_REDIRECT_URI"),
            sandbox=os.getenv("SOUNDCLOUD_SANDBOX", "false").strip().lower()
            in _TRUTHY,
            timeout=float(os.getenv("SOUNDCLOUD_HTTP_TIMEOUT", DEFAULT_TIMEOUT)),
        )

    def is_configured(self) -> bool:
        """Check if client credentials and redirect URI are all present."""
        return bool(self.client_id and self.client_secret and self.redirect_uri)


@lru_cache()
def get_soundcloud_config() -> SoundCloudConfig:
    """Get SoundCloud configuration singleton."""
    return SoundCloudConfig.from_env()
