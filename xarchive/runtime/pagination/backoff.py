"""Backoff policy for failed page requests."""

from __future__ import annotations

import random
from collections.abc import Callable

from ...core.enums import FailureClass
from ...core.exceptions import HTTPStatusError, RateLimitError, TransportError
from .definitions import BackoffPolicy, RetryDecision


class BackoffController:
    """Decides whether and how long to wait before retrying a failed request.

    Pure function of (failure class, attempt) apart from the jitter source.
    The default jitter source is the unseeded module-level random generator;
    tests inject a deterministic callable returning values in [0, 1).
    """

    def __init__(
        self,
        policy: BackoffPolicy | None = None,
        jitter: Callable[[], float] = random.random,
    ) -> None:
        self._policy = policy or BackoffPolicy()
        self._jitter = jitter

    @property
    def policy(self) -> BackoffPolicy:
        return self._policy

    def delay_without_jitter(self, attempt: int) -> float:
        """Deterministic part of the delay for a zero-based attempt number."""
        return self._policy.base_delay_ms * (2**attempt)

    def decide(self, failure_class: FailureClass, attempt: int) -> RetryDecision:
        """Decide on the retry for a zero-based attempt number.

        Args:
            failure_class: Rate limiting or network error
            attempt: Number of retries already performed for this request

        Returns:
            RetryDecision with the delay in milliseconds
        """
        if attempt < 0:
            raise ValueError("attempt must be >= 0")
        delay = self.delay_without_jitter(attempt) + self._jitter() * self._policy.max_jitter_ms
        should_retry = attempt < self._policy.max_retries(failure_class)
        return RetryDecision(should_retry=should_retry, delay_ms=delay)


def classify_failure(error: TransportError) -> FailureClass | None:
    """Map a transport failure onto a backoff class.

    Returns None for failures that retrying cannot fix (4xx other than 429).
    """
    if isinstance(error, RateLimitError):
        return FailureClass.RATE_LIMITED
    if isinstance(error, HTTPStatusError):
        if error.status_code is not None and error.status_code >= 500:
            return FailureClass.NETWORK_ERROR
        return None
    return FailureClass.NETWORK_ERROR
