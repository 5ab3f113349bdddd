"""xarchive - Paginated, rate-limited timeline archiving for the X web API."""

from .clients import ArchiveResult, HostSession, StaticHostSession, TimelineArchiver
from .connectors import XRESTConnector
from .core import (
    ArchiveError,
    CredentialMissingError,
    CursorKind,
    EntryKind,
    FailureClass,
    HTTPStatusError,
    InstructionKind,
    ParseError,
    RateLimitError,
    StopReason,
    SubjectNotFoundError,
    TransportError,
    UploadError,
    ValidationError,
)
from .export import Exporter, FileUploader, HTTPUploader, SubjectMeta, Uploader
from .models import (
    AuthorSummary,
    ExportPayload,
    ItemRecord,
    PageResult,
    SessionCredentials,
    UploadReceipt,
)
from .processing import deduplicate_and_sort, newest, oldest, search, truncate
from .runtime.pagination import (
    BackoffController,
    BackoffPolicy,
    PaginationDriver,
    PaginationPolicy,
    PaginationResult,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Clients
    "ArchiveResult",
    "HostSession",
    "StaticHostSession",
    "TimelineArchiver",
    # Connectors
    "XRESTConnector",
    # Core
    "ArchiveError",
    "CredentialMissingError",
    "CursorKind",
    "EntryKind",
    "FailureClass",
    "HTTPStatusError",
    "InstructionKind",
    "ParseError",
    "RateLimitError",
    "StopReason",
    "SubjectNotFoundError",
    "TransportError",
    "UploadError",
    "ValidationError",
    # Export
    "Exporter",
    "FileUploader",
    "HTTPUploader",
    "SubjectMeta",
    "Uploader",
    # Models
    "AuthorSummary",
    "ExportPayload",
    "ItemRecord",
    "PageResult",
    "SessionCredentials",
    "UploadReceipt",
    # Processing
    "deduplicate_and_sort",
    "newest",
    "oldest",
    "search",
    "truncate",
    # Pagination
    "BackoffController",
    "BackoffPolicy",
    "PaginationDriver",
    "PaginationPolicy",
    "PaginationResult",
]
