"""REST runtime: HTTP client, credentialed transport and endpoint runner."""

from .http import HTTPClient
from .request import RawResponse, RequestSpec
from .runner import (
    ResponseAdapter,
    RestEndpointSpec,
    RestRunner,
    prepare_request,
    raise_for_status,
)
from .transport import RESTTransport

__all__ = [
    "HTTPClient",
    "RawResponse",
    "RequestSpec",
    "RESTTransport",
    "ResponseAdapter",
    "RestEndpointSpec",
    "RestRunner",
    "prepare_request",
    "raise_for_status",
]
