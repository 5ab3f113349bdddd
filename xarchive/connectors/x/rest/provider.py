"""X REST connector for the timeline and subject lookup endpoints.

Architecture:
    This connector uses the endpoint registry to look up specs and adapters,
    then uses RestRunner to execute requests. Its fetch_page method has the
    exact shape PaginationDriver expects of a page fetcher, so the driver
    never touches the transport directly.
"""

from __future__ import annotations

from typing import Any

from xarchive.connectors.x.config import BASE_URL, BROWSER_HEADERS, DEFAULT_PAGE_SIZE
from xarchive.core import SubjectNotFoundError
from xarchive.models import PageResult, SessionCredentials
from xarchive.runtime.rest import RestRunner, RESTTransport

from .endpoints import get_endpoint_adapter, get_endpoint_spec


class XRESTConnector:
    """X REST connector bound to one set of session credentials."""

    def __init__(
        self,
        credentials: SessionCredentials,
        *,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        transport: RESTTransport | None = None,
    ) -> None:
        """Initialize X REST connector.

        Args:
            credentials: Bearer and anti-forgery tokens from the host session
            base_url: GraphQL base URL
            timeout: Per-request timeout in seconds
            transport: Optional pre-built transport (tests inject one)
        """
        self._transport = transport or RESTTransport(
            base_url=base_url,
            credentials=credentials,
            default_headers=BROWSER_HEADERS,
            timeout=timeout,
        )
        self._runner = RestRunner(self._transport)

    async def fetch(self, endpoint_id: str, params: dict[str, Any]) -> Any:
        """Fetch data from an X REST endpoint.

        Args:
            endpoint_id: Endpoint identifier (e.g., "user_tweets")
            params: Request parameters

        Returns:
            Parsed response from the endpoint adapter

        Raises:
            ValueError: If endpoint_id is not found in registry
        """
        spec = get_endpoint_spec(endpoint_id)
        if spec is None:
            raise ValueError(f"Unknown REST endpoint: {endpoint_id}")

        adapter_cls = get_endpoint_adapter(endpoint_id)
        if adapter_cls is None:
            raise ValueError(f"No adapter found for endpoint: {endpoint_id}")

        adapter = adapter_cls()
        return await self._runner.run(spec=spec, adapter=adapter, params=params)

    async def fetch_page(
        self,
        subject_id: str,
        cursor: str | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PageResult:
        """Fetch one page of a subject's timeline.

        Raises:
            TransportError: On connection failure, timeout or non-2xx status
            ParseError: If the response envelope shape is absent
        """
        params = {"subject_id": subject_id, "cursor": cursor, "page_size": page_size}
        result: PageResult = await self.fetch("user_tweets", params)
        return result

    async def fetch_user_id(self, screen_name: str) -> str:
        """Resolve a handle to its subject id.

        Raises:
            SubjectNotFoundError: If the handle does not resolve to an account
        """
        subject_id = await self.fetch("user_by_screen_name", {"screen_name": screen_name})
        if not subject_id:
            raise SubjectNotFoundError(f"No account found for handle {screen_name!r}")
        return str(subject_id)

    async def close(self) -> None:
        """Close underlying resources."""
        await self._transport.close()

    async def __aenter__(self) -> XRESTConnector:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
