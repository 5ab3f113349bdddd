"""X REST endpoint registry.

This module exports the endpoint specifications and adapters used by the
X connector.
"""

from __future__ import annotations

from xarchive.runtime.rest import ResponseAdapter, RestEndpointSpec

from .user_by_screen_name import SPEC as UserByScreenNameSpec  # noqa: N811
from .user_by_screen_name import Adapter as UserByScreenNameAdapter
from .user_tweets import SPEC as UserTweetsSpec  # noqa: N811
from .user_tweets import Adapter as UserTweetsAdapter
from .user_tweets import build_page_request

# Registry mapping endpoint IDs to specs and adapters
_ENDPOINT_REGISTRY: dict[str, tuple[RestEndpointSpec, type[ResponseAdapter]]] = {
    "user_tweets": (UserTweetsSpec, UserTweetsAdapter),
    "user_by_screen_name": (UserByScreenNameSpec, UserByScreenNameAdapter),
}


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    """Get endpoint specification by ID.

    Args:
        endpoint_id: Endpoint identifier (e.g., "user_tweets")

    Returns:
        RestEndpointSpec if found, None otherwise
    """
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[0] if entry else None


def get_endpoint_adapter(endpoint_id: str) -> type[ResponseAdapter] | None:
    """Get endpoint adapter class by ID.

    Args:
        endpoint_id: Endpoint identifier (e.g., "user_tweets")

    Returns:
        Adapter class if found, None otherwise
    """
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[1] if entry else None


def list_endpoints() -> list[str]:
    """List all available endpoint IDs."""
    return list(_ENDPOINT_REGISTRY.keys())


__all__ = [
    "get_endpoint_spec",
    "get_endpoint_adapter",
    "list_endpoints",
    "build_page_request",
    "UserTweetsSpec",
    "UserTweetsAdapter",
    "UserByScreenNameSpec",
    "UserByScreenNameAdapter",
]
