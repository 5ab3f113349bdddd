"""Pagination layer: backoff policy and the cursor-driven fetch loop.

Architecture:
    The pagination layer consists of:
    - definitions.py: Policies and state (PaginationPolicy, BackoffPolicy, FetchState,
      PaginationResult)
    - backoff.py: Retry decisions for failed requests (BackoffController)
    - driver.py: The sequential fetch loop (PaginationDriver)
    - telemetry.py: Structured logging

Usage:
    The driver is given an async ``fetch_page(cursor, page_size)`` callable
    and knows nothing about the remote API beyond the exceptions it raises.
"""

from __future__ import annotations

from .backoff import BackoffController, classify_failure
from .definitions import (
    DEFAULT_PAGE_SIZE,
    BackoffPolicy,
    FetchState,
    PaginationPolicy,
    PaginationResult,
    RetryDecision,
)
from .driver import FetchPage, PageFailure, PaginationDriver

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "BackoffController",
    "BackoffPolicy",
    "FetchPage",
    "FetchState",
    "PageFailure",
    "PaginationDriver",
    "PaginationPolicy",
    "PaginationResult",
    "RetryDecision",
    "classify_failure",
]
