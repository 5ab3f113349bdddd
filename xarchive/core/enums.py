"""Core enums shared across the runtime, connectors and models."""

from __future__ import annotations

from enum import Enum


class FailureClass(str, Enum):
    """Class of a failed page request, as seen by the backoff policy."""

    RATE_LIMITED = "rate_limited"
    NETWORK_ERROR = "network_error"


class StopReason(str, Enum):
    """Why a pagination run stopped.

    Every reason except CANCELLED and TIMEOUT is a regular loop exit; all of
    them hand back whatever was accumulated.
    """

    TARGET_REACHED = "target_reached"
    END_OF_STREAM = "end_of_stream"
    EMPTY_PAGE_CEILING = "empty_page_ceiling"
    ERROR_CEILING = "error_ceiling"
    PAGE_CEILING = "page_ceiling"
    CANCELLED = "cancelled"
    TIMEOUT = "timeout"

    @property
    def is_partial(self) -> bool:
        """Whether the run ended before the stream or the target was reached."""
        return self not in (StopReason.TARGET_REACHED, StopReason.END_OF_STREAM)


class InstructionKind(str, Enum):
    """Timeline instruction kinds the parser knows about."""

    ADD_ENTRIES = "TimelineAddEntries"
    REPLACE_ENTRY = "TimelineReplaceEntry"
    CLEAR_CACHE = "TimelineClearCache"
    PIN_ENTRY = "TimelinePinEntry"
    TERMINATE_TIMELINE = "TimelineTerminateTimeline"
    UNKNOWN = "unknown"

    @classmethod
    def from_raw(cls, value: str | None) -> InstructionKind:
        """Map a raw instruction type onto a known kind (UNKNOWN otherwise)."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class EntryKind(str, Enum):
    """Timeline entry kinds the parser knows about."""

    TIMELINE_ITEM = "TimelineTimelineItem"
    TIMELINE_CURSOR = "TimelineTimelineCursor"
    TIMELINE_MODULE = "TimelineTimelineModule"
    UNKNOWN = "unknown"

    @classmethod
    def from_raw(cls, value: str | None) -> EntryKind:
        """Map a raw entry type onto a known kind (UNKNOWN otherwise)."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class CursorKind(str, Enum):
    """Pagination cursor direction."""

    TOP = "Top"
    BOTTOM = "Bottom"
    UNKNOWN = "unknown"

    @classmethod
    def from_raw(cls, value: str | None) -> CursorKind:
        """Map a raw cursorType onto a known kind (UNKNOWN otherwise)."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN
