"""Structured logging for pagination runs.

This module provides telemetry hooks for the pagination driver, emitting
named events with structured ``extra`` payloads.
"""

from __future__ import annotations

import logging

from ...core.enums import FailureClass
from .definitions import FetchState, PaginationResult

logger = logging.getLogger(__name__)


def _short(cursor: str | None) -> str | None:
    return cursor[:20] if cursor else None


def log_page_completed(
    *,
    endpoint_id: str,
    page_index: int,
    items: int,
    total_items: int,
    cursor: str | None,
) -> None:
    """Log a page that parsed successfully (possibly with zero items)."""
    logger.info(
        "page_completed",
        extra={
            "endpoint_id": endpoint_id,
            "page_index": page_index,
            "items": items,
            "total_items": total_items,
            "cursor": _short(cursor),
        },
    )


def log_retry_scheduled(
    *,
    endpoint_id: str,
    failure_class: FailureClass,
    attempt: int,
    delay_ms: float,
    error_message: str,
) -> None:
    """Log a failed attempt that will be retried after a backoff delay."""
    logger.warning(
        "page_retry_scheduled",
        extra={
            "endpoint_id": endpoint_id,
            "failure_class": failure_class.value,
            "attempt": attempt + 1,
            "delay_ms": round(delay_ms),
            "error_message": error_message,
        },
    )


def log_page_failed(
    *,
    endpoint_id: str,
    page_index: int,
    error_type: str,
    error_message: str,
    consecutive_errors: int,
) -> None:
    """Log a page given up on after retries (or a non-retryable failure)."""
    logger.error(
        "page_failed",
        extra={
            "endpoint_id": endpoint_id,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
            "consecutive_errors": consecutive_errors,
        },
    )


def log_parse_error(
    *,
    endpoint_id: str,
    page_index: int,
    error_message: str,
    top_level_keys: list[str],
) -> None:
    """Log an unexpected envelope with the keys actually present."""
    logger.error(
        "parse_error",
        extra={
            "endpoint_id": endpoint_id,
            "page_index": page_index,
            "error_message": error_message,
            "top_level_keys": top_level_keys,
        },
    )


def log_pagination_stopped(
    *,
    endpoint_id: str,
    state: FetchState,
    result: PaginationResult,
) -> None:
    """Log the end of a pagination run."""
    logger.info(
        "pagination_stopped",
        extra={
            "endpoint_id": endpoint_id,
            "stop_reason": result.stop_reason.value,
            "pages_issued": state.pages_issued,
            "requests_issued": state.requests_issued,
            "retries": state.retries,
            "failed_pages": state.failed_pages,
            "raw_count": result.raw_count,
            "unique_items": result.total_items,
        },
    )
