"""Pagination policy, state and result structures.

This module defines the configuration consumed by the pagination driver and
the backoff controller, the per-run mutable fetch state and the result handed
back to callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...core.enums import FailureClass, StopReason
from ...models import ItemRecord

DEFAULT_PAGE_SIZE = 40


@dataclass(frozen=True)
class BackoffPolicy:
    """Exponential backoff configuration for failed page requests.

    Delay for attempt n is ``base_delay_ms * 2**n`` plus a uniform jitter in
    ``[0, max_jitter_ms)``. Retries stop once the attempt number reaches the
    ceiling for the failure class.

    Attributes:
        base_delay_ms: Delay before the first retry, without jitter
        max_jitter_ms: Upper bound of the random jitter added to every delay
        max_rate_limit_retries: Retry ceiling for HTTP 429 responses
        max_network_retries: Retry ceiling for network errors and 5xx responses
    """

    base_delay_ms: float = 2000.0
    max_jitter_ms: float = 1000.0
    max_rate_limit_retries: int = 5
    max_network_retries: int = 5

    def __post_init__(self) -> None:
        """Validate backoff configuration."""
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")
        if self.max_jitter_ms < 0:
            raise ValueError("max_jitter_ms must be >= 0")
        if self.max_rate_limit_retries < 0 or self.max_network_retries < 0:
            raise ValueError("retry ceilings must be >= 0")

    def max_retries(self, failure_class: FailureClass) -> int:
        if failure_class is FailureClass.RATE_LIMITED:
            return self.max_rate_limit_retries
        return self.max_network_retries


@dataclass(frozen=True)
class RetryDecision:
    """Outcome of the backoff policy for one failed attempt."""

    should_retry: bool
    delay_ms: float


@dataclass(frozen=True)
class PaginationPolicy:
    """Loop termination and throttling configuration.

    Attributes:
        page_size: Items requested per call, independent of the target count
        max_consecutive_empty_pages: Stop after this many empty pages in a row
        max_consecutive_errors: Stop after this many failed pages in a row
        max_pages: Hard ceiling on pages issued in one run
        inter_page_delay_ms: Fixed delay between successful pages
        inter_page_jitter_ms: Upper bound of the jitter added to the inter-page delay
        error_delay_multiplier: Inter-page delay factor applied after a failed page
    """

    page_size: int = DEFAULT_PAGE_SIZE
    max_consecutive_empty_pages: int = 15
    max_consecutive_errors: int = 10
    max_pages: int = 150
    inter_page_delay_ms: float = 1000.0
    inter_page_jitter_ms: float = 500.0
    error_delay_multiplier: float = 2.0

    def __post_init__(self) -> None:
        """Validate pagination configuration."""
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")
        if self.max_consecutive_empty_pages <= 0:
            raise ValueError("max_consecutive_empty_pages must be positive")
        if self.max_consecutive_errors <= 0:
            raise ValueError("max_consecutive_errors must be positive")
        if self.max_pages <= 0:
            raise ValueError("max_pages must be positive")
        if self.inter_page_delay_ms < 0 or self.inter_page_jitter_ms < 0:
            raise ValueError("inter-page delays must be >= 0")
        if self.error_delay_multiplier < 1:
            raise ValueError("error_delay_multiplier must be >= 1")


@dataclass
class FetchState:
    """Mutable state of a single pagination run.

    Owned by exactly one driver invocation and discarded when it returns.
    """

    accumulated: list[ItemRecord] = field(default_factory=list)
    cursor: str | None = None
    pages_issued: int = 0
    requests_issued: int = 0
    retries: int = 0
    failed_pages: int = 0
    consecutive_errors: int = 0
    consecutive_empty_pages: int = 0


@dataclass
class PaginationResult:
    """Result of a pagination run.

    Attributes:
        items: Deduplicated items sorted by creation time (not truncated)
        stop_reason: Why the loop stopped
        pages_issued: Number of pages attempted
        requests_issued: Number of network requests, retries included
        retries: Number of backoff retries performed
        failed_pages: Pages that failed after exhausting retries
        raw_count: Items accumulated before deduplication
        cursor: Cursor the run would have continued from
    """

    items: list[ItemRecord]
    stop_reason: StopReason
    pages_issued: int = 0
    requests_issued: int = 0
    retries: int = 0
    failed_pages: int = 0
    raw_count: int = 0
    cursor: str | None = None

    @property
    def total_items(self) -> int:
        return len(self.items)

    @property
    def is_partial(self) -> bool:
        return self.stop_reason.is_partial
