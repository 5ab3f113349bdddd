"""Upload collaborators for finished export payloads.

Architecture:
    Exporter.deliver hands serialized payloads to an Uploader without knowing
    where they end up. Two implementations are provided:
    - HTTPUploader: POSTs the payload to an upload service's /api/upload
    - FileUploader: writes the payload into a local directory

Every implementation raises UploadError on failure; callers decide whether
that is fatal.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from ..core.exceptions import TransportError, UploadError
from ..models import UploadReceipt
from ..runtime.rest import HTTPClient

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "tweet_archive.json"


@runtime_checkable
class Uploader(Protocol):
    """Destination for serialized export payloads."""

    async def upload(
        self,
        content: str,
        content_type: str,
        credential: str | None,
        filename: str | None = None,
    ) -> UploadReceipt:
        """Store content and return where it ended up.

        Raises:
            UploadError: If the content could not be stored
        """
        ...


class HTTPUploader:
    """Uploads payloads to an archive service over HTTP.

    The service accepts a JSON body ``{data, filename, contentType}`` with a
    bearer credential and answers with ``{url, filename}``.
    """

    def __init__(
        self,
        api_base: str,
        *,
        timeout: float = 60.0,
        http: HTTPClient | None = None,
    ) -> None:
        self._http = http or HTTPClient(base_url=api_base.rstrip("/"), timeout=timeout)

    async def upload(
        self,
        content: str,
        content_type: str,
        credential: str | None,
        filename: str | None = None,
    ) -> UploadReceipt:
        if not credential:
            raise UploadError("An upload credential is required")

        filename = filename or DEFAULT_FILENAME
        data: Any = json.loads(content) if content_type == "application/json" else content
        body = {"data": data, "filename": filename, "contentType": content_type}
        headers = {"Content-Type": "application/json", "Authorization": f"Bearer {credential}"}

        try:
            response = await self._http.post("/api/upload", json=body, headers=headers)
        except TransportError as e:
            raise UploadError(f"Upload failed: {e}", status_code=e.status_code) from e

        if not response.ok:
            raise UploadError(
                f"Upload rejected with HTTP {response.status}: {_error_detail(response.body)}",
                status_code=response.status,
            )
        if not isinstance(response.body, dict) or not response.body.get("url"):
            raise UploadError("Upload response did not include a URL", status_code=response.status)

        receipt = UploadReceipt(
            url=str(response.body["url"]),
            filename=str(response.body.get("filename") or filename),
        )
        logger.info(
            "upload_completed",
            extra={"archive_filename": receipt.filename, "url": receipt.url},
        )
        return receipt

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> HTTPUploader:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _error_detail(body: Any) -> str:
    if isinstance(body, str):
        try:
            body = json.loads(body)
        except ValueError:
            return body[:200]
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return str(body)[:200]


class FileUploader:
    """Writes payloads into a local directory (the "download" destination)."""

    def __init__(self, output_dir: str | Path = "output") -> None:
        self.output_dir = Path(output_dir)

    async def upload(
        self,
        content: str,
        content_type: str,  # noqa: ARG002
        credential: str | None = None,  # noqa: ARG002
        filename: str | None = None,
    ) -> UploadReceipt:
        path = self.output_dir / (filename or DEFAULT_FILENAME)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise UploadError(f"Could not write {path}: {e}") from e

        logger.info("file_written", extra={"path": str(path), "bytes": len(content)})
        return UploadReceipt(url=path.resolve().as_uri(), filename=path.name)
