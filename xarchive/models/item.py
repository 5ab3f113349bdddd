"""Timeline item (post) data model."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuthorSummary(BaseModel):
    """Author information attached to an item."""

    author_id: str = Field(..., min_length=1)
    handle: str | None = None
    display_name: str | None = None
    verified: bool = False
    followers_count: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class ItemRecord(BaseModel):
    """A single post from a subject's timeline.

    Identity is unique within the subject's stream only after deduplication;
    raw pages may repeat items across page boundaries.
    """

    id: str = Field(..., min_length=1)
    text: str = ""
    created_at: datetime
    like_count: int = Field(default=0, ge=0)
    repost_count: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)
    view_count: int = Field(default=0, ge=0)
    quote_count: int = Field(default=0, ge=0)
    bookmark_count: int = Field(default=0, ge=0)
    author: AuthorSummary | None = None
    source: str | None = None
    conversation_id: str | None = None
    lang: str | None = None
    is_quote: bool = False
    possibly_sensitive: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("created_at")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC so ordering is always well defined."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @property
    def engagement(self) -> dict[str, int]:
        """Engagement counters keyed by their export names."""
        return {
            "likes": self.like_count,
            "reposts": self.repost_count,
            "replies": self.reply_count,
            "views": self.view_count,
            "quotes": self.quote_count,
            "bookmarks": self.bookmark_count,
        }

    @property
    def sort_key(self) -> tuple[datetime, str]:
        """Total ordering key: creation time, then identity."""
        return (self.created_at, self.id)
