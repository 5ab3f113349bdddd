"""Connector namespace for remote-service implementations.

Architecture:
    Connectors are organized by service: `connectors/<service>/rest`.
    Each connector is self-contained with its constants, endpoint
    definitions and adapters.
"""

from .x import XRESTConnector

__all__ = ["XRESTConnector"]
