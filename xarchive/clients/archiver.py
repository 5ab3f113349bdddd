"""High-level archiving facade.

Architecture:
    TimelineArchiver wires the collaborators of one extraction run:
    HostSession -> XRESTConnector -> PaginationDriver -> Exporter -> Uploader

    1. Credentials are read from the host first; without them nothing is
       fetched
    2. The subject id comes from the host, or from a handle lookup
    3. The driver fetches pages until a stop condition holds
    4. The result is truncated to the target, exported and optionally
       delivered

Design Decisions:
    - Every collaborator is passed in or built per run: no global state
    - Delivery failures are reported on the result, not raised, so callers
      can retry delivery without re-fetching
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..connectors.x.rest.provider import XRESTConnector
from ..core.exceptions import CredentialMissingError, SubjectNotFoundError, UploadError
from ..export import Exporter, SubjectMeta, Uploader
from ..models import ExportPayload, ItemRecord, PageResult, SessionCredentials, UploadReceipt
from ..processing import truncate
from ..runtime.pagination import (
    BackoffController,
    BackoffPolicy,
    PaginationDriver,
    PaginationPolicy,
    PaginationResult,
)
from .host import HostSession

logger = logging.getLogger(__name__)

ConnectorFactory = Callable[[SessionCredentials], XRESTConnector]


@dataclass(frozen=True)
class ArchiveResult:
    """Outcome of one archive run.

    Attributes:
        items: Deduplicated, time-ordered items truncated to the target count
        pagination: Raw pagination outcome (stop reason, counters)
        payload: Export payload built from ``items``
        receipt: Where the payload was delivered, if it was
        delivery_error: Delivery failure, if delivery was attempted and failed
    """

    items: list[ItemRecord]
    pagination: PaginationResult
    payload: ExportPayload
    receipt: UploadReceipt | None = None
    delivery_error: UploadError | None = None

    @property
    def delivered(self) -> bool:
        return self.receipt is not None


class TimelineArchiver:
    """Collects a subject's timeline and exports it."""

    def __init__(
        self,
        host: HostSession,
        *,
        uploader: Uploader | None = None,
        policy: PaginationPolicy | None = None,
        backoff_policy: BackoffPolicy | None = None,
        exporter: Exporter | None = None,
        connector_factory: ConnectorFactory = XRESTConnector,
    ) -> None:
        """Initialize archiver.

        Args:
            host: Source of credentials and the current subject id
            uploader: Optional delivery destination for the export payload
            policy: Pagination termination and throttling policy
            backoff_policy: Retry policy for failed page requests
            exporter: Payload builder
            connector_factory: Builds the connector from session credentials
        """
        self._host = host
        self._uploader = uploader
        self._policy = policy or PaginationPolicy()
        self._backoff_policy = backoff_policy or BackoffPolicy()
        self._exporter = exporter or Exporter()
        self._connector_factory = connector_factory

    def _credentials(self) -> SessionCredentials:
        credentials = self._host.get_session_credentials()
        if credentials is None:
            raise CredentialMissingError("Host session has no bearer or anti-forgery token")
        return credentials

    def _driver(self, connector: XRESTConnector, subject_id: str) -> PaginationDriver:
        async def fetch_page(cursor: str | None, page_size: int) -> PageResult:
            return await connector.fetch_page(subject_id, cursor, page_size)

        return PaginationDriver(
            fetch_page,
            policy=self._policy,
            backoff=BackoffController(self._backoff_policy),
            endpoint_id="user_tweets",
        )

    async def _resolve_subject(
        self, connector: XRESTConnector, screen_name: str | None
    ) -> str:
        subject_id = self._host.get_current_subject_id()
        if subject_id:
            return subject_id
        if screen_name:
            return await connector.fetch_user_id(screen_name)
        raise SubjectNotFoundError("Host has no current subject and no handle was given")

    async def fetch_all(
        self,
        target_count: int,
        *,
        subject_id: str | None = None,
        timeout: float | None = None,
    ) -> PaginationResult:
        """Fetch up to roughly ``target_count`` items for a subject.

        The result is deduplicated and sorted but not truncated; it may hold
        up to one page more than requested.

        Raises:
            CredentialMissingError: If the host has no credentials
            SubjectNotFoundError: If no subject id is given or known to the host
        """
        credentials = self._credentials()
        subject_id = subject_id or self._host.get_current_subject_id()
        if not subject_id:
            raise SubjectNotFoundError("Host has no current subject and none was given")

        async with self._connector_factory(credentials) as connector:
            return await self._driver(connector, subject_id).run(target_count, timeout=timeout)

    async def archive(
        self,
        target_count: int,
        *,
        screen_name: str | None = None,
        upload_credential: str | None = None,
        timeout: float | None = None,
    ) -> ArchiveResult:
        """Fetch, truncate, export and (optionally) deliver a subject's timeline.

        The run may collect up to one page more than ``target_count``; the
        time-ordered result is truncated to its oldest ``target_count`` items,
        so the surplus that gets dropped is the newest items.

        Args:
            target_count: Number of items wanted
            screen_name: Handle used to look the subject up when the host has
                no current subject
            upload_credential: Credential passed to the uploader
            timeout: Optional wall-clock bound in seconds for fetching

        Raises:
            CredentialMissingError: If the host has no credentials
            SubjectNotFoundError: If the subject cannot be determined
        """
        credentials = self._credentials()

        async with self._connector_factory(credentials) as connector:
            subject_id = await self._resolve_subject(connector, screen_name)
            pagination = await self._driver(connector, subject_id).run(
                target_count, timeout=timeout
            )

        items = truncate(pagination.items, target_count)
        subject_meta = SubjectMeta(username=screen_name or subject_id, subject_id=subject_id)
        payload = self._exporter.export(items, subject_meta)

        receipt: UploadReceipt | None = None
        delivery_error: UploadError | None = None
        if self._uploader is not None:
            try:
                receipt = await self._exporter.deliver(payload, self._uploader, upload_credential)
            except UploadError as e:
                logger.warning(
                    "delivery_failed",
                    extra={"error_message": str(e), "status_code": e.status_code},
                )
                delivery_error = e

        logger.info(
            "archive_completed",
            extra={
                "subject_id": subject_id,
                "items": len(items),
                "stop_reason": pagination.stop_reason.value,
                "delivered": receipt is not None,
            },
        )
        return ArchiveResult(
            items=items,
            pagination=pagination,
            payload=payload,
            receipt=receipt,
            delivery_error=delivery_error,
        )
