"""Export payload construction and delivery."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from ..models import (
    DateRange,
    EngagementTotals,
    ExportItem,
    ExportMetadata,
    ExportPayload,
    ItemRecord,
    UploadReceipt,
)
from .upload import Uploader

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class SubjectMeta:
    """Identity of the subject an export belongs to."""

    username: str
    subject_id: str | None = None


def archive_filename(username: str, count: int, extracted_at: datetime) -> str:
    """File name for an export, e.g. ``alice_tweet_archive_3_2024-01-02T03-04-05-006Z.json``."""
    stamp = extracted_at.astimezone(UTC)
    millis = stamp.microsecond // 1000
    return f"{username}_tweet_archive_{count}_{stamp:%Y-%m-%dT%H-%M-%S}-{millis:03d}Z.json"


class Exporter:
    """Builds the transfer payload and hands it to an upload collaborator."""

    def build_payload(
        self,
        items: Sequence[ItemRecord],
        subject_meta: SubjectMeta,
        extracted_at: datetime | None = None,
    ) -> ExportPayload:
        """Build the export payload.

        Args:
            items: Items in the order they should appear in the export
            subject_meta: Subject identity for the metadata section
            extracted_at: Extraction time (defaults to now, UTC)

        Returns:
            ExportPayload whose metadata counts and totals match ``items``
        """
        extracted_at = extracted_at or datetime.now(UTC)
        totals = dict.fromkeys(("likes", "reposts", "replies", "views", "quotes", "bookmarks"), 0)
        for item in items:
            for key, value in item.engagement.items():
                totals[key] += value

        if items:
            timestamps = [item.created_at for item in items]
            date_range = DateRange(oldest=min(timestamps), newest=max(timestamps))
        else:
            date_range = DateRange()

        metadata = ExportMetadata(
            username=subject_meta.username,
            subject_id=subject_meta.subject_id,
            total_count=len(items),
            extracted_at=extracted_at,
            date_range=date_range,
            total_engagement=EngagementTotals(**totals),
        )
        return ExportPayload(
            metadata=metadata,
            items=tuple(ExportItem.from_record(item) for item in items),
        )

    def export(self, items: Sequence[ItemRecord], subject_meta: SubjectMeta) -> ExportPayload:
        """Build the payload for ``items`` stamped with the current time."""
        return self.build_payload(items, subject_meta)

    async def deliver(
        self,
        payload: ExportPayload,
        uploader: Uploader,
        credential: str | None,
    ) -> UploadReceipt:
        """Serialize the payload and hand it to ``uploader``.

        Raises:
            UploadError: Propagated from the uploader
        """
        metadata = payload.metadata
        filename = archive_filename(metadata.username, metadata.total_count, metadata.extracted_at)
        receipt = await uploader.upload(payload.to_json(), CONTENT_TYPE, credential, filename)
        logger.info(
            "export_delivered",
            extra={"archive_filename": receipt.filename, "items": metadata.total_count},
        )
        return receipt
