"""Host-integration collaborator.

The archiver never produces credentials or discovers which subject to
archive on its own; both come from the host it runs in (a browser session,
a CLI reading the environment, a test).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import SessionCredentials


@runtime_checkable
class HostSession(Protocol):
    """Read-only view of the host session."""

    def get_current_subject_id(self) -> str | None:
        """Subject id of the stream currently in focus, if the host knows it."""
        ...

    def get_session_credentials(self) -> SessionCredentials | None:
        """Bearer and anti-forgery tokens, or None when not signed in."""
        ...


class StaticHostSession:
    """HostSession backed by fixed values."""

    def __init__(
        self,
        credentials: SessionCredentials | None = None,
        subject_id: str | None = None,
    ) -> None:
        self._credentials = credentials
        self._subject_id = subject_id

    @classmethod
    def from_tokens(
        cls,
        bearer_token: str | None,
        csrf_token: str | None,
        subject_id: str | None = None,
    ) -> StaticHostSession:
        """Build a session from raw tokens; blank tokens mean no credentials."""
        credentials = None
        if bearer_token and csrf_token:
            credentials = SessionCredentials(bearer_token=bearer_token, csrf_token=csrf_token)
        return cls(credentials=credentials, subject_id=subject_id)

    def get_current_subject_id(self) -> str | None:
        return self._subject_id

    def get_session_credentials(self) -> SessionCredentials | None:
        return self._credentials
