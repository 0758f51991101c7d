"""Tests for google_chat_connector.executor.ChatExecutor.

All tests use a MagicMock transport, so no HTTP calls are made.
Covers routing per item, run-level parameter resolution, output
flattening, and continue-on-fail behaviour.
"""

from unittest.mock import MagicMock
import pytest

import requests

from google_chat_connector.chat_client import GoogleChatClient
from google_chat_connector.exceptions import InvalidInput, TransportError
from google_chat_connector.executor import ChatExecutor
from google_chat_connector.parameters import JobParameters


def _executor(resource, operation, parameters=None, item_parameters=None,
              responses=None, continue_on_fail=False):
    transport = MagicMock()
    if responses is not None:
        transport.request.side_effect = responses
    params = JobParameters(resource, operation, parameters, item_parameters)
    return ChatExecutor(transport, params, continue_on_fail=continue_on_fail), transport


# ---------------------------------------------------------------------------
# Basic dispatch
# ---------------------------------------------------------------------------

def test_message_get_per_item():
    executor, transport = _executor(
        "message", "get",
        parameters={"spaceName": "S"},
        item_parameters=[{"messageName": "M1"}, {"messageName": "M2"}],
        responses=[{"name": "M1"}, {"name": "M2"}],
    )

    output = executor.run([{}, {}])

    assert output == [{"name": "M1"}, {"name": "M2"}]
    calls = transport.request.call_args_list
    assert calls[0].args == ("GET", "/v1/spaces/S/messages/M1", None, None)
    assert calls[1].args == ("GET", "/v1/spaces/S/messages/M2", None, None)


def test_message_create_sends_body_and_thread_key():
    executor, transport = _executor(
        "message", "create",
        parameters={"spaceName": "S", "threadKey": "t-1"},
        item_parameters=[{"messageUi": {"text": "Hello"}}],
        responses=[{"name": "spaces/S/messages/X"}],
    )

    executor.run([{}])

    transport.request.assert_called_once_with(
        "POST", "/v1/spaces/S", {"text": "Hello"}, {"threadKey": "t-1"}
    )


def test_table_miss_produces_no_output_and_no_calls():
    executor, transport = _executor("space", "delete")

    assert executor.run([{}, {}]) == []
    transport.request.assert_not_called()


def test_empty_input():
    executor, transport = _executor("space", "get")
    assert executor.run([]) == []
    transport.request.assert_not_called()


# ---------------------------------------------------------------------------
# Output shape
# ---------------------------------------------------------------------------

def test_single_page_response_kept_whole():
    page = {"spaces": [{"name": "a"}], "nextPageToken": "T1"}
    executor, transport = _executor(
        "space", "getAll",
        parameters={"returnAll": False, "additionalFields": {"pageSize": -1}},
        responses=[page],
    )

    output = executor.run([{}])

    assert output == [page]
    transport.request.assert_called_once_with(
        "GET", "/v1/spaces", None, {"pageSize": 4294967295}
    )


def test_fetch_all_flattens_pages():
    executor, transport = _executor(
        "space", "getAll",
        parameters={"returnAll": True},
        responses=[
            {"spaces": [{"name": "a"}, {"name": "b"}], "nextPageToken": "T1"},
            {"spaces": [{"name": "c"}]},
        ],
    )

    output = executor.run([{}])

    assert output == [{"name": "a"}, {"name": "b"}, {"name": "c"}]
    assert transport.request.call_count == 2


def test_return_all_resolved_from_first_item_only():
    executor, transport = _executor(
        "member", "getAll",
        parameters={"spaceName": "S"},
        item_parameters=[{"returnAll": True}, {"returnAll": False}],
        responses=[
            {"memberships": [{"name": "m1"}]},
            {"memberships": [{"name": "m2"}]},
        ],
    )

    output = executor.run([{}, {}])

    assert output == [{"name": "m1"}, {"name": "m2"}]
    for call in transport.request.call_args_list:
        assert "pageSize" not in (call.args[3] or {})


def test_resource_and_operation_resolved_from_first_item_only():
    executor, transport = _executor(
        "space", "get",
        parameters={"spaceName": "spaces/S"},
        item_parameters=[{}, {"operation": "getAll"}],
        responses=[{"name": "spaces/S"}, {"name": "spaces/S"}],
    )

    executor.run([{}, {}])

    for call in transport.request.call_args_list:
        assert call.args[:2] == ("GET", "/v1/spaces/S")


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

def test_invalid_input_makes_no_transport_call():
    executor, transport = _executor(
        "message", "create",
        parameters={"spaceName": "S", "messageUi": {"text": ""}},
    )

    with pytest.raises(InvalidInput, match="Message Text must be provided."):
        executor.run([{}])
    transport.request.assert_not_called()


def test_continue_on_fail_records_error_in_order():
    executor, transport = _executor(
        "message", "get",
        parameters={"spaceName": "S"},
        item_parameters=[{"messageName": "M1"}, {"messageName": "M2"}, {"messageName": "M3"}],
        responses=[
            {"name": "M1"},
            TransportError("Google Chat API error 404: Not found", status_code=404),
            {"name": "M3"},
        ],
        continue_on_fail=True,
    )

    output = executor.run([{}, {}, {}])

    assert output == [
        {"name": "M1"},
        {"error": "Google Chat API error 404: Not found"},
        {"name": "M3"},
    ]
    assert executor.failures == 1


def test_failure_aborts_run_without_continue_on_fail():
    error = TransportError("Google Chat API error 500: Internal", status_code=500)
    executor, transport = _executor(
        "message", "get",
        parameters={"spaceName": "S", "messageName": "M"},
        responses=[{"name": "M1"}, error, {"name": "M3"}],
    )

    with pytest.raises(TransportError) as exc_info:
        executor.run([{}, {}, {}])

    assert exc_info.value is error
    assert transport.request.call_count == 2


def test_continue_on_fail_policy_read_per_failure():
    policy = MagicMock(return_value=True)
    executor, transport = _executor(
        "message", "update",
        parameters={"spaceName": "S", "messageName": "M", "updateMask": []},
        continue_on_fail=policy,
    )

    output = executor.run([{}, {}])

    assert output == [
        {"error": "Update Mask must not be empty."},
        {"error": "Update Mask must not be empty."},
    ]
    assert policy.call_count == 2
    transport.request.assert_not_called()


def test_unexpected_errors_are_not_caught():
    executor, transport = _executor(
        "space", "get",
        parameters={"spaceName": "S"},
        responses=[KeyError("boom")],
        continue_on_fail=True,
    )

    with pytest.raises(KeyError):
        executor.run([{}])


def _http_response(body: bytes, status=200, content_type="application/json"):
    resp = requests.Response()
    resp.status_code = status
    resp._content = body
    resp.headers["Content-Type"] = content_type
    return resp


def test_malformed_api_response_recorded_with_continue_on_fail():
    auth = MagicMock()
    auth.get_token.return_value = "access-token"
    client = GoogleChatClient(auth, api_base_url="https://chat.example.com")
    client._session = MagicMock()
    client._session.headers = {}
    client._session.request.side_effect = [
        _http_response(b'{"name": "M1"}'),
        _http_response(b"<html>gateway</html>"),
        _http_response(b'{"name": "M3"}'),
    ]
    params = JobParameters(
        "message", "get",
        parameters={"spaceName": "S"},
        item_parameters=[{"messageName": "M1"}, {"messageName": "M2"}, {"messageName": "M3"}],
    )
    executor = ChatExecutor(client, params, continue_on_fail=True)

    output = executor.run([{}, {}, {}])

    assert len(output) == 3
    assert output[0] == {"name": "M1"}
    assert output[1]["error"].startswith("Google Chat API returned invalid JSON")
    assert output[2] == {"name": "M3"}
