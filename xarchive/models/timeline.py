"""Tagged union over the timeline envelope's instruction and entry kinds.

Architecture:
    The remote timeline is a list of instructions, each optionally carrying
    entries. Rather than walking raw dicts with ad hoc shape checks, the
    parser first decodes every instruction and entry into one of the variants
    below and then dispatches on the variant type.

Design Decisions:
    - Explicit Unknown* variants: new instruction/entry kinds introduced by
      the remote service decode successfully and are skipped by the parser
    - Frozen dataclasses: decoded envelope nodes are immutable snapshots
    - Raw payloads kept on TweetEntry: item mapping happens in a second step
      so that one malformed item cannot fail the decode of its page
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..core.enums import CursorKind


@dataclass(frozen=True)
class TweetEntry:
    """Entry wrapping one timeline tweet result."""

    entry_id: str
    result: dict[str, Any]


@dataclass(frozen=True)
class CursorEntry:
    """Entry carrying a pagination cursor."""

    entry_id: str
    cursor_kind: CursorKind
    value: str | None

    @property
    def is_bottom(self) -> bool:
        """Bottom cursors point at the next (older) page."""
        return self.cursor_kind is CursorKind.BOTTOM or "cursor-bottom" in self.entry_id


@dataclass(frozen=True)
class UnknownEntry:
    """Entry of a kind the parser does not extract anything from."""

    entry_id: str
    kind: str | None


TimelineEntry = TweetEntry | CursorEntry | UnknownEntry


@dataclass(frozen=True)
class AddEntriesInstruction:
    """The only instruction kind that carries data."""

    entries: tuple[TimelineEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ReplaceEntryInstruction:
    """Replaces one earlier entry; on later pages this carries the bottom cursor."""

    entry: TimelineEntry


@dataclass(frozen=True)
class UnknownInstruction:
    """Instruction the parser skips (cache clears, pins, unknown kinds)."""

    kind: str | None


TimelineInstruction = AddEntriesInstruction | ReplaceEntryInstruction | UnknownInstruction
