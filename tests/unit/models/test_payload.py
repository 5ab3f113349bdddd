"""Unit tests for export payload models."""

import json
from datetime import UTC, datetime

from xarchive.models import (
    AuthorSummary,
    DateRange,
    EngagementTotals,
    ExportItem,
    ExportMetadata,
    ExportPayload,
    ItemRecord,
)


def test_export_item_from_record():
    record = ItemRecord(
        id="1",
        text="hi",
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
        like_count=3,
        author=AuthorSummary(author_id="42", handle="alice"),
        source="Twitter Web App",
    )
    item = ExportItem.from_record(record)
    assert item.id == "1"
    assert item.like_count == 3
    assert item.author_handle == "alice"
    assert item.source == "Twitter Web App"


def test_export_item_without_author():
    record = ItemRecord(id="1", created_at=datetime(2024, 1, 1, tzinfo=UTC))
    assert ExportItem.from_record(record).author_handle is None


def test_payload_to_json():
    """Timestamps serialize as ISO-8601 and the two sections are present."""
    extracted_at = datetime(2024, 2, 1, 8, 30, tzinfo=UTC)
    payload = ExportPayload(
        metadata=ExportMetadata(
            username="alice",
            subject_id="42",
            total_count=0,
            extracted_at=extracted_at,
            date_range=DateRange(),
            total_engagement=EngagementTotals(),
        ),
    )
    data = json.loads(payload.to_json())
    assert set(data) == {"metadata", "items"}
    assert data["items"] == []
    assert data["metadata"]["extracted_at"].startswith("2024-02-01T08:30:00")
    assert data["metadata"]["date_range"] == {"oldest": None, "newest": None}
    assert data["metadata"]["total_engagement"]["likes"] == 0
