"""X REST connector and endpoints."""

from .provider import XRESTConnector

__all__ = ["XRESTConnector"]
