"""Page-level data models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .item import ItemRecord


class PageResult(BaseModel):
    """Items produced by one page request plus the cursor for the next page.

    A missing cursor means the stream has no further pages.
    """

    items: tuple[ItemRecord, ...] = ()
    cursor: str | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("cursor")
    @classmethod
    def blank_cursor_is_absent(cls, v: str | None) -> str | None:
        """An empty cursor string carries no position."""
        return v or None

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def has_next(self) -> bool:
        return self.cursor is not None


class SessionCredentials(BaseModel):
    """Credentials supplied by the host session for remote API calls."""

    bearer_token: str = Field(..., min_length=1)
    csrf_token: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    def __repr__(self) -> str:
        return "SessionCredentials(bearer_token=***, csrf_token=***)"
