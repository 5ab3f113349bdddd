"""Unit tests for the UserByScreenName endpoint."""

import json

import pytest

from xarchive.connectors.x.rest.endpoints import (
    UserByScreenNameAdapter,
    UserByScreenNameSpec,
    get_endpoint_adapter,
    get_endpoint_spec,
    list_endpoints,
)
from xarchive.core import ParseError, ValidationError
from xarchive.runtime.rest import prepare_request


def test_query_strips_at_sign():
    request = prepare_request(UserByScreenNameSpec, {"screen_name": "@alice"})
    variables = json.loads(request.params["variables"])
    assert variables == {"screen_name": "alice", "withGrokTranslatedBio": False}
    assert json.loads(request.params["fieldToggles"]) == {"withAuxiliaryUserLabels": True}
    assert request.url.endswith("/UserByScreenName")


def test_query_requires_screen_name():
    with pytest.raises(ValidationError):
        prepare_request(UserByScreenNameSpec, {"screen_name": " "})


def test_adapter_returns_rest_id():
    body = {"data": {"user": {"result": {"__typename": "User", "rest_id": "42"}}}}
    assert UserByScreenNameAdapter().parse(body) == "42"


def test_adapter_unknown_handle():
    assert UserByScreenNameAdapter().parse({"data": {}}) is None


def test_adapter_unavailable_account():
    body = {"data": {"user": {"result": {"__typename": "UserUnavailable", "reason": "Suspended"}}}}
    assert UserByScreenNameAdapter().parse(body) is None


def test_adapter_missing_data():
    with pytest.raises(ParseError) as exc_info:
        UserByScreenNameAdapter().parse({"errors": [{"message": "nope"}]})
    assert exc_info.value.top_level_keys == ["errors"]


def test_registry():
    assert set(list_endpoints()) == {"user_tweets", "user_by_screen_name"}
    assert get_endpoint_spec("user_by_screen_name") is UserByScreenNameSpec
    assert get_endpoint_adapter("user_by_screen_name") is UserByScreenNameAdapter
    assert get_endpoint_spec("missing") is None
    assert get_endpoint_adapter("missing") is None


@pytest.mark.parametrize("data", [{"user": "gone"}, {"user": {"result": "x"}}])
def test_adapter_non_object_user_is_unknown(data):
    assert UserByScreenNameAdapter().parse({"data": data}) is None
