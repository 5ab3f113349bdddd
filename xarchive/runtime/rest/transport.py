"""REST transport attaching session credentials and browser-like headers."""

from __future__ import annotations

from typing import Any

from ...core.exceptions import CredentialMissingError
from ...models import SessionCredentials
from .http import HTTPClient
from .request import RawResponse, RequestSpec


class RESTTransport:
    """Executes requests against one remote API with a stable header set.

    The remote API rejects requests that lack the bearer credential, the
    anti-forgery token or the browser-like headers, so every request goes out
    with all three. Status codes are not interpreted here.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        credentials: SessionCredentials | None = None,
        default_headers: dict[str, str] | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._http = HTTPClient(base_url=base_url, timeout=timeout)
        self._credentials = credentials
        self._default_headers = dict(default_headers or {})

    @property
    def base_url(self) -> str | None:
        return self._http.base_url

    def headers_for(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        """Merge default, credential and request-specific headers."""
        if self._credentials is None:
            raise CredentialMissingError("No session credentials configured for transport")
        headers = dict(self._default_headers)
        headers["authorization"] = f"Bearer {self._credentials.bearer_token}"
        headers["x-csrf-token"] = self._credentials.csrf_token
        if extra:
            headers.update(extra)
        return headers

    async def send(self, request: RequestSpec) -> RawResponse:
        """Execute a prepared request."""
        if request.method.upper() == "GET":
            return await self.get(request.url, params=request.params, headers=request.headers)
        return await self.post(request.url, json_body=request.json_body, headers=request.headers)

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> RawResponse:
        return await self._http.get(path, params=params, headers=self.headers_for(headers))

    async def post(
        self,
        path: str,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> RawResponse:
        return await self._http.post(path, json=json_body, headers=self.headers_for(headers))

    async def close(self) -> None:
        await self._http.close()
