"""Export payload data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .item import ItemRecord


class DateRange(BaseModel):
    """Oldest and newest creation timestamps in an export."""

    oldest: datetime | None = None
    newest: datetime | None = None

    model_config = ConfigDict(frozen=True)


class EngagementTotals(BaseModel):
    """Engagement counters summed over all exported items."""

    likes: int = Field(default=0, ge=0)
    reposts: int = Field(default=0, ge=0)
    replies: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    quotes: int = Field(default=0, ge=0)
    bookmarks: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class ExportMetadata(BaseModel):
    """Summary section of an export payload."""

    username: str
    subject_id: str | None = None
    total_count: int = Field(..., ge=0)
    extracted_at: datetime
    date_range: DateRange
    total_engagement: EngagementTotals

    model_config = ConfigDict(frozen=True)


class ExportItem(BaseModel):
    """Normalized item as it appears in the export."""

    id: str
    text: str
    created_at: datetime
    like_count: int = 0
    repost_count: int = 0
    reply_count: int = 0
    view_count: int = 0
    quote_count: int = 0
    bookmark_count: int = 0
    author_handle: str | None = None
    source: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_record(cls, record: ItemRecord) -> ExportItem:
        return cls(
            id=record.id,
            text=record.text,
            created_at=record.created_at,
            like_count=record.like_count,
            repost_count=record.repost_count,
            reply_count=record.reply_count,
            view_count=record.view_count,
            quote_count=record.quote_count,
            bookmark_count=record.bookmark_count,
            author_handle=record.author.handle if record.author else None,
            source=record.source,
        )


class ExportPayload(BaseModel):
    """Transfer payload handed to an upload collaborator."""

    metadata: ExportMetadata
    items: tuple[ExportItem, ...] = ()

    model_config = ConfigDict(frozen=True)

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to JSON text (timestamps as ISO-8601)."""
        return self.model_dump_json(indent=indent)


class UploadReceipt(BaseModel):
    """Where an upload collaborator stored a payload."""

    url: str
    filename: str

    model_config = ConfigDict(frozen=True)
