"""Shared fixtures for integration tests."""

import os

import pytest

from xarchive.models import SessionCredentials

# Skip all integration tests unless RUN_XARCHIVE_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_XARCHIVE_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_XARCHIVE_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def session_credentials():
    """Credentials of a signed-in browser session, taken from the environment."""
    bearer = os.environ.get("XARCHIVE_BEARER_TOKEN")
    csrf = os.environ.get("XARCHIVE_CSRF_TOKEN")
    if not bearer or not csrf:
        pytest.skip("XARCHIVE_BEARER_TOKEN and XARCHIVE_CSRF_TOKEN are required")
    return SessionCredentials(bearer_token=bearer, csrf_token=csrf)
