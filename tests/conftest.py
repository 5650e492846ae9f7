"""
Shared test configuration and fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from soundcloud_connect.infrastructure.soundcloud_client import SoundCloudClient
from soundcloud_connect.main import app

client = TestClient(app)


@pytest.fixture
def soundcloud_client():
    """SoundCloud client against production hosts."""
    return SoundCloudClient(
        client_id="A", client_secret="B", redirect_uri="http://cb"
    )


@pytest.fixture
def sandbox_client():
    """SoundCloud client against sandbox hosts."""
    return SoundCloudClient(
        client_id="A", client_secret="B", redirect_uri="http://cb", sandbox=True
    )


@pytest.fixture
def sample_token_response():
    """Sample SoundCloud token endpoint payload."""
    return {
        "access_token": "04u7h-4cc355-70k3n",
        "scope": "non-expiring",
    }
