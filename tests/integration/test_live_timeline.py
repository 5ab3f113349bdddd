"""Integration tests for the live X timeline endpoints."""

import os

import pytest

from xarchive.clients import StaticHostSession, TimelineArchiver
from xarchive.connectors.x import XRESTConnector
from xarchive.core import StopReason

pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_XARCHIVE_NETWORK_TESTS") != "1",
    reason="Requires network access to the X web API",
)

SCREEN_NAME = os.environ.get("XARCHIVE_TEST_SCREEN_NAME", "XDevelopers")


class TestLiveTimeline:
    """Fetch a small amount of real data."""

    @pytest.mark.asyncio
    async def test_lookup_and_first_page(self, session_credentials):
        async with XRESTConnector(session_credentials) as connector:
            subject_id = await connector.fetch_user_id(SCREEN_NAME)
            page = await connector.fetch_page(subject_id, page_size=20)

        assert subject_id.isdigit()
        assert page.items
        assert all(item.id and item.created_at for item in page.items)

    @pytest.mark.asyncio
    async def test_archive_small_target(self, session_credentials):
        archiver = TimelineArchiver(StaticHostSession(credentials=session_credentials))

        result = await archiver.archive(25, screen_name=SCREEN_NAME, timeout=120)

        assert 0 < len(result.items) <= 25
        assert result.pagination.stop_reason in (
            StopReason.TARGET_REACHED,
            StopReason.END_OF_STREAM,
        )
        created = [item.created_at for item in result.items]
        assert created == sorted(created)
