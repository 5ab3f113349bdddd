"""Request and response value types for the REST runtime."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode


@dataclass(frozen=True)
class RequestSpec:
    """Fully formed description of one HTTP request.

    Attributes:
        method: HTTP method ("GET" | "POST")
        url: Absolute URL, or a path when the transport has a base URL
        params: Query parameters (already serialized to strings)
        headers: Endpoint-specific headers merged over the transport defaults
        json_body: JSON body for POST requests
    """

    method: str
    url: str
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    json_body: dict[str, Any] | None = None

    @property
    def full_url(self) -> str:
        """URL with the encoded query string appended."""
        if not self.params:
            return self.url
        return f"{self.url}?{urlencode(self.params)}"


@dataclass(frozen=True)
class RawResponse:
    """Status, headers and body of one HTTP response.

    The body is decoded JSON for 2xx responses and raw text otherwise.
    """

    status: int
    body: Any
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None
