"""X UserTweets endpoint definition and adapter.

The request side encodes the subject id, page size and cursor together with
the fixed capability flags into three JSON query parameters. The response
side walks the instruction-based timeline envelope and maps tweet entries
onto ItemRecord.
"""

from __future__ import annotations

import html
import json
import logging
import re
from datetime import datetime
from typing import Any

from pydantic import ValidationError as ModelValidationError

from xarchive.connectors.x.config import (
    CREATED_AT_FORMAT,
    DEFAULT_PAGE_SIZE,
    USER_TWEETS_FEATURES,
    USER_TWEETS_FIELD_TOGGLES,
    USER_TWEETS_FLAGS,
    USER_TWEETS_QUERY_ID,
)
from xarchive.core import CursorKind, EntryKind, InstructionKind, ParseError, ValidationError
from xarchive.models import (
    AddEntriesInstruction,
    AuthorSummary,
    CursorEntry,
    ItemRecord,
    PageResult,
    ReplaceEntryInstruction,
    TimelineEntry,
    TimelineInstruction,
    TweetEntry,
    UnknownEntry,
    UnknownInstruction,
)
from xarchive.runtime.rest import RequestSpec, ResponseAdapter, RestEndpointSpec, prepare_request

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]+>")


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def build_path(params: dict[str, Any]) -> str:
    """Build the UserTweets operation path."""
    return f"/{USER_TWEETS_QUERY_ID}/UserTweets"


def build_variables(params: dict[str, Any]) -> dict[str, Any]:
    """Build the ``variables`` blob (subject, page size, cursor, fixed flags)."""
    subject_id = params.get("subject_id")
    if not subject_id:
        raise ValidationError("subject_id is required")
    page_size = int(params.get("page_size", DEFAULT_PAGE_SIZE))
    if page_size <= 0:
        raise ValidationError(f"page_size must be positive, got {page_size}")

    variables: dict[str, Any] = {"userId": str(subject_id), "count": page_size}
    variables.update(USER_TWEETS_FLAGS)
    cursor = params.get("cursor")
    if cursor:
        variables["cursor"] = cursor
    return variables


def build_query(params: dict[str, Any]) -> dict[str, str]:
    """Build query parameters for the UserTweets endpoint."""
    return {
        "variables": _dumps(build_variables(params)),
        "features": _dumps(USER_TWEETS_FEATURES),
        "fieldToggles": _dumps(USER_TWEETS_FIELD_TOGGLES),
    }


# Endpoint specification
SPEC = RestEndpointSpec(
    id="user_tweets",
    method="GET",
    build_path=build_path,
    build_query=build_query,
)


def build_page_request(
    subject_id: str,
    cursor: str | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    *,
    base_url: str | None = None,
) -> RequestSpec:
    """Build the request for one timeline page without performing I/O.

    Args:
        subject_id: Identifier of the stream owner
        cursor: Opaque cursor from a previous page, forwarded verbatim
        page_size: Items per call, independent of the overall target count
        base_url: Optional base URL to produce an absolute URL

    Returns:
        RequestSpec with the encoded query parameters
    """
    params = {"subject_id": subject_id, "cursor": cursor, "page_size": page_size}
    return prepare_request(SPEC, params, base_url=base_url)


# --- envelope decoding -------------------------------------------------------


def extract_instructions(body: Any) -> list[Any]:
    """Locate the instruction list inside the response envelope.

    Raises:
        ParseError: If the envelope path is absent
    """
    if not isinstance(body, dict):
        raise ParseError(f"Expected a JSON object, got {type(body).__name__}")
    top_level_keys = sorted(body.keys())

    data = body.get("data")
    if not isinstance(data, dict):
        errors = body.get("errors")
        message = "Response has no data section"
        if errors:
            message = f"{message}; API errors: {_error_messages(errors)}"
        raise ParseError(message, top_level_keys=top_level_keys)
    if body.get("errors"):
        logger.warning("api_errors_with_data", extra={"errors": _error_messages(body["errors"])})

    user = data.get("user")
    user_result = user.get("result") if isinstance(user, dict) else None
    if not isinstance(user_result, dict):
        raise ParseError("Missing data.user.result", top_level_keys=top_level_keys)

    timeline_holder = user_result.get("timeline") or user_result.get("timeline_v2")
    timeline = timeline_holder.get("timeline") if isinstance(timeline_holder, dict) else None
    instructions = timeline.get("instructions") if isinstance(timeline, dict) else None
    if not isinstance(instructions, list):
        raise ParseError(
            "Missing data.user.result.timeline.timeline.instructions",
            top_level_keys=top_level_keys,
        )
    return instructions


def _obj(value: Any) -> dict[str, Any]:
    """Return value if it is a JSON object, else an empty one."""
    return value if isinstance(value, dict) else {}


def _error_messages(errors: Any) -> list[str]:
    if not isinstance(errors, list):
        return [str(errors)]
    return [str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors]


def decode_instruction(raw: Any) -> TimelineInstruction:
    """Decode one raw instruction into the tagged union."""
    if not isinstance(raw, dict):
        return UnknownInstruction(kind=None)
    kind = InstructionKind.from_raw(raw.get("type"))
    if kind is InstructionKind.ADD_ENTRIES:
        entries: list[TimelineEntry] = []
        raw_entries = raw.get("entries")
        for raw_entry in raw_entries if isinstance(raw_entries, list) else []:
            entries.extend(decode_entry(raw_entry))
        return AddEntriesInstruction(entries=tuple(entries))
    if kind is InstructionKind.REPLACE_ENTRY and isinstance(raw.get("entry"), dict):
        decoded = decode_entry(raw["entry"])
        return ReplaceEntryInstruction(entry=decoded[0])
    return UnknownInstruction(kind=raw.get("type"))


def decode_entry(raw: Any) -> list[TimelineEntry]:
    """Decode one raw entry; conversation modules may yield several tweets."""
    if not isinstance(raw, dict):
        return [UnknownEntry(entry_id="", kind=None)]
    entry_id = str(raw.get("entryId") or "")
    content = raw.get("content")
    if not isinstance(content, dict):
        return [UnknownEntry(entry_id=entry_id, kind=None)]

    raw_kind = content.get("entryType") or content.get("__typename")
    kind = EntryKind.from_raw(raw_kind)

    if kind is EntryKind.TIMELINE_CURSOR or "cursorType" in content:
        value = content.get("value")
        return [
            CursorEntry(
                entry_id=entry_id,
                cursor_kind=CursorKind.from_raw(content.get("cursorType")),
                value=value if isinstance(value, str) else None,
            )
        ]

    if kind is EntryKind.TIMELINE_ITEM:
        result = _tweet_result(content.get("itemContent"))
        if result is not None:
            return [TweetEntry(entry_id=entry_id, result=result)]

    if kind is EntryKind.TIMELINE_MODULE:
        tweets: list[TimelineEntry] = []
        module_items = content.get("items")
        for module_item in module_items if isinstance(module_items, list) else []:
            if not isinstance(module_item, dict):
                continue
            result = _tweet_result(_obj(module_item.get("item")).get("itemContent"))
            if result is not None:
                item_id = f"{entry_id}/{module_item.get('entryId', '')}"
                tweets.append(TweetEntry(entry_id=item_id, result=result))
        if tweets:
            return tweets

    return [UnknownEntry(entry_id=entry_id, kind=raw_kind)]


def _tweet_result(item_content: Any) -> dict[str, Any] | None:
    if not isinstance(item_content, dict) or item_content.get("itemType") != "TimelineTweet":
        return None
    result = _obj(item_content.get("tweet_results")).get("result")
    if isinstance(result, dict) and result.get("__typename") == "TweetWithVisibilityResults":
        result = result.get("tweet")
    return result if isinstance(result, dict) else None


# --- item mapping ------------------------------------------------------------


def _as_int(value: Any) -> int:
    try:
        return max(int(value), 0)
    except (OverflowError, TypeError, ValueError):
        return 0


def _parse_created_at(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value, CREATED_AT_FORMAT)
    except ValueError:
        return None


def _strip_source(value: Any) -> str | None:
    if not isinstance(value, str) or not value:
        return None
    return html.unescape(_TAG_RE.sub("", value)).strip() or None


def _full_text(result: dict[str, Any], legacy: dict[str, Any]) -> str:
    note = _obj(_obj(_obj(result.get("note_tweet")).get("note_tweet_results")).get("result"))
    return note.get("text") or legacy.get("full_text") or ""


def _author(result: dict[str, Any]) -> AuthorSummary | None:
    user = _obj(_obj(_obj(result.get("core")).get("user_results")).get("result"))
    if not user.get("rest_id"):
        return None
    core = _obj(user.get("core"))
    legacy = _obj(user.get("legacy"))
    verification = _obj(user.get("verification"))
    return AuthorSummary(
        author_id=str(user["rest_id"]),
        handle=core.get("screen_name") or legacy.get("screen_name"),
        display_name=core.get("name") or legacy.get("name"),
        verified=bool(
            verification.get("verified") or user.get("is_blue_verified") or legacy.get("verified")
        ),
        followers_count=_as_int(legacy.get("followers_count")),
    )


def map_tweet(result: dict[str, Any]) -> ItemRecord | None:
    """Map one tweet result onto an ItemRecord.

    Returns None for results that are not tweets (tombstones, unavailable
    posts) or that lack an identity or a parseable creation time.
    """
    if result.get("__typename") not in (None, "Tweet"):
        return None
    legacy = result.get("legacy")
    if not isinstance(legacy, dict):
        return None
    item_id = legacy.get("id_str") or result.get("rest_id")
    created_at = _parse_created_at(legacy.get("created_at"))
    if not item_id or created_at is None:
        return None

    return ItemRecord(
        id=str(item_id),
        text=_full_text(result, legacy),
        created_at=created_at,
        like_count=_as_int(legacy.get("favorite_count")),
        repost_count=_as_int(legacy.get("retweet_count")),
        reply_count=_as_int(legacy.get("reply_count")),
        view_count=_as_int(_obj(result.get("views")).get("count")),
        quote_count=_as_int(legacy.get("quote_count")),
        bookmark_count=_as_int(legacy.get("bookmark_count")),
        author=_author(result),
        source=_strip_source(result.get("source")),
        conversation_id=legacy.get("conversation_id_str"),
        lang=legacy.get("lang"),
        is_quote=bool(legacy.get("is_quote_status")),
        possibly_sensitive=bool(legacy.get("possibly_sensitive")),
    )


class Adapter(ResponseAdapter):
    """Adapter for parsing the UserTweets timeline envelope into a PageResult."""

    def parse(self, response: Any, params: dict[str, Any] | None = None) -> PageResult:
        """Parse one UserTweets response.

        Args:
            response: Decoded JSON body
            params: Request parameters (unused)

        Returns:
            PageResult with the page's items in envelope order and the bottom cursor

        Raises:
            ParseError: If the envelope shape is absent
        """
        items: list[ItemRecord] = []
        cursor: str | None = None

        for raw_instruction in extract_instructions(response):
            instruction = decode_instruction(raw_instruction)
            if isinstance(instruction, AddEntriesInstruction):
                entries = instruction.entries
            elif isinstance(instruction, ReplaceEntryInstruction):
                entries = (instruction.entry,)
            else:
                continue

            for entry in entries:
                if isinstance(entry, TweetEntry):
                    record = self._map(entry)
                    if record is not None:
                        items.append(record)
                elif isinstance(entry, CursorEntry) and entry.is_bottom and entry.value:
                    cursor = entry.value

        return PageResult(items=tuple(items), cursor=cursor)

    @staticmethod
    def _map(entry: TweetEntry) -> ItemRecord | None:
        try:
            return map_tweet(entry.result)
        except (ModelValidationError, AttributeError, TypeError, ValueError) as e:
            # One malformed item must not fail the whole page
            logger.warning(
                "item_skipped",
                extra={"entry_id": entry.entry_id, "error_message": str(e)},
            )
            return None
