"""Unit tests for the host session collaborator."""

from xarchive.clients import HostSession, StaticHostSession
from xarchive.models import SessionCredentials


def test_static_host_session():
    credentials = SessionCredentials(bearer_token="b", csrf_token="c")
    host = StaticHostSession(credentials=credentials, subject_id="42")

    assert isinstance(host, HostSession)
    assert host.get_session_credentials() is credentials
    assert host.get_current_subject_id() == "42"


def test_from_tokens():
    host = StaticHostSession.from_tokens("b", "c", subject_id="42")
    credentials = host.get_session_credentials()
    assert credentials.bearer_token == "b"
    assert credentials.csrf_token == "c"


def test_from_tokens_missing_token_means_no_credentials():
    assert StaticHostSession.from_tokens("b", None).get_session_credentials() is None
    assert StaticHostSession.from_tokens("", "c").get_session_credentials() is None
