"""Custom exception hierarchy."""

from __future__ import annotations


class ArchiveError(Exception):
    """Base exception for all library errors."""

    pass


class TransportError(ArchiveError):
    """Request could not be completed (connection failure, timeout, malformed body)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class HTTPStatusError(TransportError):
    """Remote API answered with a non-2xx status other than 429."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message, status_code=status_code)


class RateLimitError(TransportError):
    """Remote API rate limit exceeded (HTTP 429)."""

    def __init__(self, message: str, retry_after: int | None = None) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class ParseError(ArchiveError):
    """Response envelope does not have the expected shape.

    The keys actually present at the top level are kept so that schema drift
    on the remote side can be diagnosed from logs.
    """

    def __init__(self, message: str, top_level_keys: list[str] | None = None) -> None:
        super().__init__(message)
        self.top_level_keys = top_level_keys or []


class CredentialMissingError(ArchiveError):
    """Session credentials (bearer or anti-forgery token) are unavailable."""

    pass


class SubjectNotFoundError(ArchiveError):
    """The subject whose timeline should be archived could not be determined."""

    pass


class UploadError(ArchiveError):
    """Delivery of a finished export payload failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ValidationError(ArchiveError):
    """Invalid caller input."""

    pass
