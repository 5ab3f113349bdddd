"""Shared builders for unit tests: items and timeline response envelopes."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from xarchive.models import ItemRecord

EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


def build_item(item_id: str, t: int = 0, text: str = "", **counters: int) -> ItemRecord:
    """Item created ``t`` seconds after a fixed epoch."""
    return ItemRecord(
        id=item_id,
        text=text or f"post {item_id}",
        created_at=EPOCH + timedelta(seconds=t),
        **counters,
    )


def build_tweet_result(
    tweet_id: str,
    *,
    created_at: str = "Wed Oct 10 20:19:24 +0000 2018",
    text: str = "hello",
    views: str | None = "10",
    with_author: bool = True,
) -> dict[str, Any]:
    """A ``tweet_results.result`` node as served by the timeline endpoint."""
    result: dict[str, Any] = {
        "__typename": "Tweet",
        "rest_id": tweet_id,
        "legacy": {
            "id_str": tweet_id,
            "full_text": text,
            "created_at": created_at,
            "favorite_count": 5,
            "retweet_count": 2,
            "reply_count": 1,
            "quote_count": 0,
            "bookmark_count": 3,
            "conversation_id_str": tweet_id,
            "lang": "en",
        },
        "source": '<a href="https://mobile.twitter.com" rel="nofollow">Twitter Web App</a>',
    }
    if views is not None:
        result["views"] = {"count": views, "state": "EnabledWithCount"}
    if with_author:
        result["core"] = {
            "user_results": {
                "result": {
                    "__typename": "User",
                    "rest_id": "42",
                    "is_blue_verified": True,
                    "core": {"screen_name": "alice", "name": "Alice"},
                    "legacy": {"followers_count": 1000},
                }
            }
        }
    return result


def build_tweet_entry(tweet_id: str, **kwargs: Any) -> dict[str, Any]:
    return {
        "entryId": f"tweet-{tweet_id}",
        "sortIndex": tweet_id,
        "content": {
            "entryType": "TimelineTimelineItem",
            "__typename": "TimelineTimelineItem",
            "itemContent": {
                "itemType": "TimelineTweet",
                "__typename": "TimelineTweet",
                "tweet_results": {"result": build_tweet_result(tweet_id, **kwargs)},
            },
        },
    }


def build_cursor_entry(value: str, cursor_type: str = "Bottom") -> dict[str, Any]:
    return {
        "entryId": f"cursor-{cursor_type.lower()}-{value}",
        "sortIndex": "0",
        "content": {
            "entryType": "TimelineTimelineCursor",
            "__typename": "TimelineTimelineCursor",
            "value": value,
            "cursorType": cursor_type,
        },
    }


def build_timeline_body(
    entries: list[dict[str, Any]], extra_instructions: list[dict[str, Any]] | None = None
) -> dict[str, Any]:
    """Full response envelope carrying one TimelineAddEntries instruction."""
    instructions: list[dict[str, Any]] = [{"type": "TimelineClearCache"}]
    instructions.append({"type": "TimelineAddEntries", "entries": entries})
    instructions.extend(extra_instructions or [])
    return {
        "data": {
            "user": {
                "result": {
                    "__typename": "User",
                    "timeline": {"timeline": {"instructions": instructions}},
                }
            }
        }
    }


@pytest.fixture
def make_item():
    return build_item


@pytest.fixture
def tweet_result():
    return build_tweet_result


@pytest.fixture
def tweet_entry():
    return build_tweet_entry


@pytest.fixture
def cursor_entry():
    return build_cursor_entry


@pytest.fixture
def timeline_body():
    return build_timeline_body
