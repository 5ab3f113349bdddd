"""Cursor-driven pagination loop.

This module provides the PaginationDriver class that fetches pages strictly
sequentially, retries failed requests with backoff, accumulates items and
decides when to stop.

Architecture:
    The driver is a small state machine:
        Fetching -> {Retrying, Accumulating} -> {Fetching, Stopped}
    - Fetching: one page request for the current cursor
    - Retrying: a rate-limit or network failure consults the backoff
      controller, sleeps, and fetches the same cursor again
    - Accumulating: items are appended and the page's cursor adopted; the
      stop conditions are evaluated in order (target, end of stream, empty
      page ceiling, error ceiling, page ceiling)
    - Stopped: the accumulated items are deduplicated and sorted

Design Decisions:
    - Sequential fetching: the remote rate limiter punishes bursts
    - Inter-page delay separate from failure backoff: successful pages are
      throttled proactively, failures back off reactively
    - Partial results are a success mode: every exit path, cancellation and
      timeout included, returns what was accumulated
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from enum import Enum

from ...core.enums import StopReason
from ...core.exceptions import ParseError, TransportError
from ...models import PageResult
from ...processing import deduplicate_and_sort
from .backoff import BackoffController, classify_failure
from .definitions import FetchState, PaginationPolicy, PaginationResult
from .telemetry import (
    log_page_completed,
    log_page_failed,
    log_pagination_stopped,
    log_parse_error,
    log_retry_scheduled,
)

FetchPage = Callable[[str | None, int], Awaitable[PageResult]]
Sleep = Callable[[float], Awaitable[None]]


class PageFailure(Enum):
    """Outcome of a page that produced no PageResult."""

    PARSE_ERROR = "parse_error"
    REQUEST_FAILED = "request_failed"


class PaginationDriver:
    """Owns the fetch loop for one stream.

    The driver is reusable, but each call to run() creates its own FetchState;
    concurrent runs share nothing mutable.
    """

    def __init__(
        self,
        fetch_page: FetchPage,
        *,
        policy: PaginationPolicy | None = None,
        backoff: BackoffController | None = None,
        sleep: Sleep = asyncio.sleep,
        jitter: Callable[[], float] = random.random,
        endpoint_id: str = "timeline",
    ) -> None:
        """Initialize pagination driver.

        Args:
            fetch_page: Async callable taking (cursor, page_size) and returning a
                PageResult; raises TransportError subclasses or ParseError
            policy: Termination and throttling policy
            backoff: Backoff controller for failed requests
            sleep: Async sleep used for every delay (seconds)
            jitter: Source of uniform values in [0, 1) for the inter-page jitter
            endpoint_id: Name used in log events
        """
        self._fetch_page = fetch_page
        self._policy = policy or PaginationPolicy()
        self._backoff = backoff or BackoffController()
        self._sleep = sleep
        self._jitter = jitter
        self._endpoint_id = endpoint_id

    @property
    def policy(self) -> PaginationPolicy:
        return self._policy

    async def run(self, target_count: int, *, timeout: float | None = None) -> PaginationResult:
        """Fetch pages until a stop condition holds.

        Args:
            target_count: Number of items wanted; the result may exceed it by up
                to one page and is never truncated here
            timeout: Optional wall-clock bound in seconds for the whole run

        Returns:
            PaginationResult with deduplicated, time-ordered items
        """
        state = FetchState()
        if target_count <= 0:
            return self._finish(state, StopReason.TARGET_REACHED)

        try:
            async with asyncio.timeout(timeout):
                reason = await self._loop(state, target_count)
        except TimeoutError:
            reason = StopReason.TIMEOUT
        except asyncio.CancelledError:
            # Accumulated pages are handed back instead of being discarded;
            # the suppressed request is withdrawn so later timeouts in this
            # task are not misread as cancellations
            task = asyncio.current_task()
            if task is not None:
                task.uncancel()
            reason = StopReason.CANCELLED
        return self._finish(state, reason)

    async def _loop(self, state: FetchState, target_count: int) -> StopReason:
        policy = self._policy
        while True:
            outcome = await self._fetch_with_retry(state)
            state.pages_issued += 1

            if isinstance(outcome, PageResult):
                state.consecutive_errors = 0
                state.accumulated.extend(outcome.items)
                state.cursor = outcome.cursor
                if outcome.is_empty:
                    state.consecutive_empty_pages += 1
                else:
                    state.consecutive_empty_pages = 0

                log_page_completed(
                    endpoint_id=self._endpoint_id,
                    page_index=state.pages_issued,
                    items=len(outcome.items),
                    total_items=len(state.accumulated),
                    cursor=state.cursor,
                )

                if len(state.accumulated) >= target_count:
                    return StopReason.TARGET_REACHED
                if state.cursor is None:
                    return StopReason.END_OF_STREAM
                if state.consecutive_empty_pages >= policy.max_consecutive_empty_pages:
                    return StopReason.EMPTY_PAGE_CEILING
                delay_ms = self._inter_page_delay()

            elif outcome is PageFailure.PARSE_ERROR:
                # Counts as an empty page; the cursor is kept so the next page
                # repeats the same position
                state.consecutive_errors = 0
                state.consecutive_empty_pages += 1
                if state.consecutive_empty_pages >= policy.max_consecutive_empty_pages:
                    return StopReason.EMPTY_PAGE_CEILING
                delay_ms = self._inter_page_delay()

            else:
                state.failed_pages += 1
                state.consecutive_errors += 1
                if state.consecutive_errors >= policy.max_consecutive_errors:
                    return StopReason.ERROR_CEILING
                delay_ms = self._inter_page_delay() * policy.error_delay_multiplier

            if state.pages_issued >= policy.max_pages:
                return StopReason.PAGE_CEILING

            await self._sleep(delay_ms / 1000.0)

    async def _fetch_with_retry(self, state: FetchState) -> PageResult | PageFailure:
        """Fetch the page at the current cursor, retrying retryable failures."""
        attempt = 0
        page_index = state.pages_issued + 1
        while True:
            state.requests_issued += 1
            try:
                return await self._fetch_page(state.cursor, self._policy.page_size)
            except ParseError as e:
                log_parse_error(
                    endpoint_id=self._endpoint_id,
                    page_index=page_index,
                    error_message=str(e),
                    top_level_keys=e.top_level_keys,
                )
                return PageFailure.PARSE_ERROR
            except TransportError as e:
                failure_class = classify_failure(e)
                decision = (
                    self._backoff.decide(failure_class, attempt)
                    if failure_class is not None
                    else None
                )
                if decision is None or not decision.should_retry:
                    log_page_failed(
                        endpoint_id=self._endpoint_id,
                        page_index=page_index,
                        error_type=type(e).__name__,
                        error_message=str(e),
                        consecutive_errors=state.consecutive_errors + 1,
                    )
                    return PageFailure.REQUEST_FAILED

                log_retry_scheduled(
                    endpoint_id=self._endpoint_id,
                    failure_class=failure_class,
                    attempt=attempt,
                    delay_ms=decision.delay_ms,
                    error_message=str(e),
                )
                state.retries += 1
                await self._sleep(decision.delay_ms / 1000.0)
                attempt += 1

    def _inter_page_delay(self) -> float:
        policy = self._policy
        return policy.inter_page_delay_ms + self._jitter() * policy.inter_page_jitter_ms

    def _finish(self, state: FetchState, reason: StopReason) -> PaginationResult:
        result = PaginationResult(
            items=deduplicate_and_sort(state.accumulated),
            stop_reason=reason,
            pages_issued=state.pages_issued,
            requests_issued=state.requests_issued,
            retries=state.retries,
            failed_pages=state.failed_pages,
            raw_count=len(state.accumulated),
            cursor=state.cursor,
        )
        log_pagination_stopped(endpoint_id=self._endpoint_id, state=state, result=result)
        return result
