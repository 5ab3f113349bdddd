"""X (Twitter) web API connector implementation."""

from .rest.provider import XRESTConnector

__all__ = ["XRESTConnector"]
