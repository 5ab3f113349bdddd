"""Export payload construction and upload collaborators."""

from .exporter import CONTENT_TYPE, Exporter, SubjectMeta, archive_filename
from .upload import FileUploader, HTTPUploader, Uploader

__all__ = [
    "CONTENT_TYPE",
    "Exporter",
    "FileUploader",
    "HTTPUploader",
    "SubjectMeta",
    "Uploader",
    "archive_filename",
]
