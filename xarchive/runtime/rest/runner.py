"""REST request runner using endpoint specs and response adapters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ...core.exceptions import HTTPStatusError, RateLimitError
from .request import RawResponse, RequestSpec
from .transport import RESTTransport


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: str  # "GET" | "POST"
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, str]] | None = None
    build_body: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None


class ResponseAdapter:
    def parse(self, response: Any, params: dict[str, Any]) -> Any:
        return response


def prepare_request(
    spec: RestEndpointSpec, params: dict[str, Any], base_url: str | None = None
) -> RequestSpec:
    """Build the request for an endpoint without performing any I/O."""
    path = spec.build_path(params)
    url = f"{base_url}{path}" if base_url and not path.startswith("http") else path
    return RequestSpec(
        method=spec.method.upper(),
        url=url,
        params=spec.build_query(params) if spec.build_query else {},
        headers=spec.build_headers(params) if spec.build_headers else {},
        json_body=spec.build_body(params) if spec.build_body else None,
    )


def raise_for_status(response: RawResponse, endpoint_id: str) -> None:
    """Classify non-2xx responses: 429 is rate limiting, the rest hard failures."""
    if response.ok:
        return
    if response.status == 429:
        raise RateLimitError(
            f"{endpoint_id}: rate limited",
            retry_after=_retry_after(response),
        )
    raise HTTPStatusError(f"{endpoint_id}: HTTP {response.status}", status_code=response.status)


def _retry_after(response: RawResponse) -> int | None:
    value = response.header("retry-after")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class RestRunner:
    def __init__(self, transport: RESTTransport) -> None:
        self._t = transport

    def prepare(self, *, spec: RestEndpointSpec, params: dict[str, Any]) -> RequestSpec:
        # Paths stay relative; the transport's HTTP client owns the base URL
        return prepare_request(spec, params)

    async def send(self, request: RequestSpec) -> RawResponse:
        return await self._t.send(request)

    async def run(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        request = self.prepare(spec=spec, params=params)
        response = await self.send(request)
        raise_for_status(response, spec.id)
        return adapter.parse(response.body, params)
