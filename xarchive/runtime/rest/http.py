"""HTTP client helper."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import aiohttp

from ...core.exceptions import TransportError
from .request import RawResponse


class HTTPClient:
    """Async HTTP client wrapper.

    Status codes are passed through untouched; only connection failures,
    timeouts and undecodable 2xx bodies (bad encoding or bad JSON) raise
    TransportError.
    """

    def __init__(self, base_url: str | None = None, timeout: float = 30.0) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _resolve(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> RawResponse:
        """GET request."""
        url = self._resolve(url)
        try:
            async with self.session.get(url, params=params, headers=headers) as response:
                return await self._read(response)
        except asyncio.TimeoutError as e:
            raise TransportError(f"Request timed out: GET {url}") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Request failed: GET {url}: {e}") from e

    async def post(
        self,
        url: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> RawResponse:
        """POST request with a JSON body."""
        url = self._resolve(url)
        try:
            async with self.session.post(url, json=json, headers=headers) as response:
                return await self._read(response)
        except asyncio.TimeoutError as e:
            raise TransportError(f"Request timed out: POST {url}") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Request failed: POST {url}: {e}") from e

    @staticmethod
    async def _read(response: aiohttp.ClientResponse) -> RawResponse:
        status = response.status
        headers = dict(response.headers)
        if not 200 <= status < 300:
            # Error bodies are informational only
            text = await response.text(errors="replace")
            return RawResponse(status=status, body=text, headers=headers)
        try:
            text = await response.text()
            body = json.loads(text) if text else None
        except (UnicodeDecodeError, ValueError) as e:
            raise TransportError("Malformed response body", status_code=status) from e
        return RawResponse(status=status, body=body, headers=headers)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
