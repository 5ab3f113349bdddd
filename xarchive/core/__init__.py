"""Core components."""

from .enums import CursorKind, EntryKind, FailureClass, InstructionKind, StopReason
from .exceptions import (
    ArchiveError,
    CredentialMissingError,
    HTTPStatusError,
    ParseError,
    RateLimitError,
    SubjectNotFoundError,
    TransportError,
    UploadError,
    ValidationError,
)

__all__ = [
    # Enums
    "CursorKind",
    "EntryKind",
    "FailureClass",
    "InstructionKind",
    "StopReason",
    # Exceptions
    "ArchiveError",
    "CredentialMissingError",
    "HTTPStatusError",
    "ParseError",
    "RateLimitError",
    "SubjectNotFoundError",
    "TransportError",
    "UploadError",
    "ValidationError",
]
