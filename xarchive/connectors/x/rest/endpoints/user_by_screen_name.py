"""X UserByScreenName endpoint definition and adapter.

Resolves a public handle to the numeric subject id the timeline endpoint
expects.
"""

from __future__ import annotations

import json
from typing import Any

from xarchive.connectors.x.config import (
    USER_BY_SCREEN_NAME_FEATURES,
    USER_BY_SCREEN_NAME_FIELD_TOGGLES,
    USER_BY_SCREEN_NAME_QUERY_ID,
)
from xarchive.core import ParseError, ValidationError
from xarchive.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    """Build the UserByScreenName operation path."""
    return f"/{USER_BY_SCREEN_NAME_QUERY_ID}/UserByScreenName"


def build_query(params: dict[str, Any]) -> dict[str, str]:
    """Build query parameters for the UserByScreenName endpoint."""
    screen_name = str(params.get("screen_name") or "").strip().lstrip("@")
    if not screen_name:
        raise ValidationError("screen_name is required")
    variables = {"screen_name": screen_name, "withGrokTranslatedBio": False}
    return {
        "variables": json.dumps(variables, separators=(",", ":")),
        "features": json.dumps(USER_BY_SCREEN_NAME_FEATURES, separators=(",", ":")),
        "fieldToggles": json.dumps(USER_BY_SCREEN_NAME_FIELD_TOGGLES, separators=(",", ":")),
    }


# Endpoint specification
SPEC = RestEndpointSpec(
    id="user_by_screen_name",
    method="GET",
    build_path=build_path,
    build_query=build_query,
)


class Adapter(ResponseAdapter):
    """Adapter returning the subject id, or None when the handle is unknown."""

    def parse(self, response: Any, params: dict[str, Any] | None = None) -> str | None:
        if not isinstance(response, dict) or not isinstance(response.get("data"), dict):
            keys = sorted(response.keys()) if isinstance(response, dict) else None
            raise ParseError("Response has no data section", top_level_keys=keys)

        user = response["data"].get("user")
        result = user.get("result") if isinstance(user, dict) else None
        if not isinstance(result, dict):
            return None
        # Suspended or deactivated accounts come back as UserUnavailable
        if result.get("__typename") not in (None, "User"):
            return None
        rest_id = result.get("rest_id")
        return str(rest_id) if rest_id else None
