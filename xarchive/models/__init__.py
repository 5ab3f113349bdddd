"""Data models for timeline archiving.

Architecture:
    This module exports all data models used throughout the library.
    Item, page and payload models are Pydantic v2 models and immutable
    (frozen=True); the decoded timeline envelope uses frozen dataclasses.

Design Decisions:
    - Pydantic v2: Type validation, defaults for absent counters, JSON serialization
    - Frozen models: Parsed items are never mutated after the parser creates them
    - Tagged union for the envelope: unknown instruction/entry kinds are explicit

Model Categories:
    - Timeline data: ItemRecord, AuthorSummary, PageResult
    - Session: SessionCredentials
    - Envelope: AddEntriesInstruction, ReplaceEntryInstruction, UnknownInstruction,
      TweetEntry, CursorEntry, UnknownEntry
    - Export: ExportPayload, ExportMetadata, ExportItem, DateRange, EngagementTotals,
      UploadReceipt
"""

from .item import AuthorSummary, ItemRecord
from .page import PageResult, SessionCredentials
from .payload import (
    DateRange,
    EngagementTotals,
    ExportItem,
    ExportMetadata,
    ExportPayload,
    UploadReceipt,
)
from .timeline import (
    AddEntriesInstruction,
    CursorEntry,
    ReplaceEntryInstruction,
    TimelineEntry,
    TimelineInstruction,
    TweetEntry,
    UnknownEntry,
    UnknownInstruction,
)

__all__ = [
    "AddEntriesInstruction",
    "AuthorSummary",
    "CursorEntry",
    "DateRange",
    "EngagementTotals",
    "ExportItem",
    "ExportMetadata",
    "ExportPayload",
    "ItemRecord",
    "PageResult",
    "ReplaceEntryInstruction",
    "SessionCredentials",
    "TimelineEntry",
    "TimelineInstruction",
    "TweetEntry",
    "UnknownEntry",
    "UnknownInstruction",
    "UploadReceipt",
]
