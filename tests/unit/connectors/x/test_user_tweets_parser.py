"""Unit tests for parsing UserTweets response envelopes."""

from datetime import UTC, datetime

import pytest

from xarchive.connectors.x.rest.endpoints import UserTweetsAdapter
from xarchive.connectors.x.rest.endpoints.user_tweets import (
    decode_entry,
    decode_instruction,
    map_tweet,
)
from xarchive.core import ParseError
from xarchive.models import (
    AddEntriesInstruction,
    CursorEntry,
    PageResult,
    TweetEntry,
    UnknownEntry,
    UnknownInstruction,
)


@pytest.fixture
def adapter():
    return UserTweetsAdapter()


class TestEnvelope:
    """Test envelope traversal and cursor extraction."""

    def test_items_and_bottom_cursor(self, adapter, timeline_body, tweet_entry, cursor_entry):
        body = timeline_body(
            [
                tweet_entry("1"),
                tweet_entry("2"),
                cursor_entry("top-1", "Top"),
                cursor_entry("next-1", "Bottom"),
            ]
        )

        page = adapter.parse(body)

        assert isinstance(page, PageResult)
        assert [item.id for item in page.items] == ["1", "2"]
        assert page.cursor == "next-1"

    def test_no_cursor_means_end_of_stream(self, adapter, timeline_body, tweet_entry):
        page = adapter.parse(timeline_body([tweet_entry("1")]))
        assert page.cursor is None
        assert not page.has_next

    def test_zero_item_page_is_valid(self, adapter, timeline_body, cursor_entry):
        page = adapter.parse(timeline_body([cursor_entry("next-1")]))
        assert page.is_empty
        assert page.cursor == "next-1"

    def test_cursor_from_replace_entry(self, adapter, timeline_body, tweet_entry, cursor_entry):
        """Later pages deliver the bottom cursor through TimelineReplaceEntry."""
        body = timeline_body(
            [tweet_entry("1")],
            extra_instructions=[
                {"type": "TimelineReplaceEntry", "entry": cursor_entry("next-2")},
            ],
        )
        assert adapter.parse(body).cursor == "next-2"

    def test_cursor_recognized_by_entry_id(self, adapter, timeline_body):
        entry = {
            "entryId": "cursor-bottom-99",
            "content": {"entryType": "TimelineTimelineCursor", "value": "by-id"},
        }
        assert adapter.parse(timeline_body([entry])).cursor == "by-id"

    def test_timeline_v2_variant(self, adapter, tweet_entry):
        body = {
            "data": {
                "user": {
                    "result": {
                        "timeline_v2": {
                            "timeline": {
                                "instructions": [
                                    {"type": "TimelineAddEntries", "entries": [tweet_entry("7")]}
                                ]
                            }
                        }
                    }
                }
            }
        }
        assert [item.id for item in adapter.parse(body).items] == ["7"]

    def test_unknown_instruction_and_entry_kinds_skipped(self, adapter, timeline_body, tweet_entry):
        body = timeline_body(
            [
                {
                    "entryId": "who-to-follow-1",
                    "content": {"entryType": "TimelineTimelineWhatever"},
                },
                tweet_entry("1"),
            ],
            extra_instructions=[{"type": "TimelineShowAlert", "alertType": "NewTweets"}],
        )
        assert [item.id for item in adapter.parse(body).items] == ["1"]

    def test_module_items_are_extracted(self, adapter, timeline_body, tweet_entry):
        module = {
            "entryId": "profile-conversation-1",
            "content": {
                "entryType": "TimelineTimelineModule",
                "items": [
                    {"entryId": "a", "item": tweet_entry("10")["content"]},
                    {"entryId": "b", "item": tweet_entry("11")["content"]},
                ],
            },
        }
        assert [item.id for item in adapter.parse(timeline_body([module])).items] == ["10", "11"]

    def test_parsing_is_deterministic(self, adapter, timeline_body, tweet_entry, cursor_entry):
        body = timeline_body([tweet_entry("1"), tweet_entry("2"), cursor_entry("c")])
        assert adapter.parse(body) == adapter.parse(body)


class TestParseErrors:
    """Test envelope shape failures."""

    def test_missing_path_reports_top_level_keys(self, adapter):
        with pytest.raises(ParseError) as exc_info:
            adapter.parse({"data": {"user": {}}, "extensions": {}})
        assert exc_info.value.top_level_keys == ["data", "extensions"]

    def test_errors_without_data(self, adapter):
        body = {"errors": [{"message": "Authorization: Denied by access control"}]}
        with pytest.raises(ParseError, match="Denied by access control") as exc_info:
            adapter.parse(body)
        assert exc_info.value.top_level_keys == ["errors"]

    def test_non_object_body(self, adapter):
        with pytest.raises(ParseError):
            adapter.parse(["not", "an", "envelope"])

    def test_errors_alongside_data_still_parse(self, adapter, timeline_body, tweet_entry):
        body = timeline_body([tweet_entry("1")])
        body["errors"] = [{"message": "partial failure"}]
        assert len(adapter.parse(body).items) == 1

    @pytest.mark.parametrize(
        "data",
        [
            {"user": "gone"},
            {"user": {"result": "x"}},
            {"user": {"result": {"timeline": "x"}}},
            {"user": {"result": {"timeline": {"timeline": {"instructions": "x"}}}}},
        ],
    )
    def test_non_object_hops_raise_parse_error(self, adapter, data):
        with pytest.raises(ParseError) as exc_info:
            adapter.parse({"data": data})
        assert exc_info.value.top_level_keys == ["data"]

    def test_non_list_entries_yield_empty_page(self, adapter):
        body = {
            "data": {
                "user": {
                    "result": {
                        "timeline": {
                            "timeline": {
                                "instructions": [{"type": "TimelineAddEntries", "entries": "x"}]
                            }
                        }
                    }
                }
            }
        }
        page = adapter.parse(body)
        assert page.items == ()
        assert page.cursor is None

    def test_non_string_cursor_value_ignored(
        self, adapter, timeline_body, tweet_entry, cursor_entry
    ):
        bad_cursor = cursor_entry("c")
        bad_cursor["content"]["value"] = {"opaque": True}
        page = adapter.parse(timeline_body([tweet_entry("1"), bad_cursor]))
        assert [item.id for item in page.items] == ["1"]
        assert page.cursor is None


class TestItemMapping:
    """Test mapping of tweet results onto ItemRecord."""

    def test_full_mapping(self, tweet_result):
        item = map_tweet(tweet_result("1", text="hello &amp; world"))

        assert item.id == "1"
        assert item.text == "hello &amp; world"
        assert item.created_at == datetime(2018, 10, 10, 20, 19, 24, tzinfo=UTC)
        assert item.like_count == 5
        assert item.repost_count == 2
        assert item.reply_count == 1
        assert item.view_count == 10
        assert item.bookmark_count == 3
        assert item.source == "Twitter Web App"
        assert item.lang == "en"
        assert item.author.author_id == "42"
        assert item.author.handle == "alice"
        assert item.author.verified is True
        assert item.author.followers_count == 1000

    def test_missing_views_default_to_zero(self, tweet_result):
        assert map_tweet(tweet_result("1", views=None)).view_count == 0

    def test_missing_author(self, tweet_result):
        assert map_tweet(tweet_result("1", with_author=False)).author is None

    def test_note_tweet_text_preferred(self, tweet_result):
        result = tweet_result("1", text="truncated…")
        result["note_tweet"] = {"note_tweet_results": {"result": {"text": "the full long text"}}}
        assert map_tweet(result).text == "the full long text"

    def test_tombstone_skipped(self):
        assert map_tweet({"__typename": "TweetTombstone", "tombstone": {}}) is None

    def test_unparseable_created_at_skipped(self, tweet_result):
        assert map_tweet(tweet_result("1", created_at="yesterday")) is None

    def test_visibility_wrapper_unwrapped(self, adapter, timeline_body, tweet_entry, tweet_result):
        entry = tweet_entry("1")
        entry["content"]["itemContent"]["tweet_results"]["result"] = {
            "__typename": "TweetWithVisibilityResults",
            "tweet": tweet_result("55"),
        }
        assert [item.id for item in adapter.parse(timeline_body([entry])).items] == ["55"]

    def test_malformed_item_skipped_not_fatal(self, adapter, timeline_body, tweet_entry):
        bad = tweet_entry("2")
        bad["content"]["itemContent"]["tweet_results"]["result"]["legacy"]["full_text"] = 123
        page = adapter.parse(timeline_body([tweet_entry("1"), bad, tweet_entry("3")]))
        assert [item.id for item in page.items] == ["1", "3"]

    @pytest.mark.parametrize("field", ["views", "core", "note_tweet", "source"])
    def test_non_object_sub_objects_degrade_to_defaults(self, tweet_result, field):
        result = tweet_result("1")
        result[field] = "10"
        item = map_tweet(result)
        assert item.id == "1"
        assert item.text == "hello"
        if field == "views":
            assert item.view_count == 0
        if field == "core":
            assert item.author is None

    def test_non_object_author_parts_degrade(self, tweet_result):
        result = tweet_result("1")
        user = result["core"]["user_results"]["result"]
        user["core"] = ["alice"]
        user["legacy"] = "x"
        author = map_tweet(result).author
        assert author.author_id == "42"
        assert author.handle is None
        assert author.followers_count == 0

    def test_module_with_non_list_items_skipped(self, adapter, timeline_body, tweet_entry):
        module = {
            "entryId": "profile-conversation-1",
            "content": {"entryType": "TimelineTimelineModule", "items": {"a": 1}},
        }
        page = adapter.parse(timeline_body([module, tweet_entry("2")]))
        assert [item.id for item in page.items] == ["2"]


class TestDecoding:
    """Test decoding into the instruction and entry variants."""

    def test_decode_add_entries(self, tweet_entry, cursor_entry):
        instruction = decode_instruction(
            {"type": "TimelineAddEntries", "entries": [tweet_entry("1"), cursor_entry("c")]}
        )
        assert isinstance(instruction, AddEntriesInstruction)
        assert isinstance(instruction.entries[0], TweetEntry)
        assert isinstance(instruction.entries[1], CursorEntry)
        assert instruction.entries[1].is_bottom

    def test_decode_unknown_instruction(self):
        instruction = decode_instruction({"type": "TimelinePinEntry", "entry": {}})
        assert isinstance(instruction, UnknownInstruction)
        assert instruction.kind == "TimelinePinEntry"

    def test_decode_non_tweet_item(self):
        entry = {
            "entryId": "user-1",
            "content": {
                "entryType": "TimelineTimelineItem",
                "itemContent": {"itemType": "TimelineUser"},
            },
        }
        (decoded,) = decode_entry(entry)
        assert isinstance(decoded, UnknownEntry)
        assert decoded.entry_id == "user-1"
