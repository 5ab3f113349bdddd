"""High-level clients for archiving a timeline."""

from .archiver import ArchiveResult, TimelineArchiver
from .host import HostSession, StaticHostSession

__all__ = ["ArchiveResult", "HostSession", "StaticHostSession", "TimelineArchiver"]
