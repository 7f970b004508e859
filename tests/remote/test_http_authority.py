"""Tests for the HTTP remote authority."""

import asyncio
import http.client
import io
import json
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError, URLError

import pytest

from presence_app.config.defaults import RemoteParams
from presence_app.errors import (
    AuthorityUnavailableError,
    MalformedSnapshotError,
    PermissionDeniedError,
    RemoteAuthorityError,
)
from presence_app.models.status import StatusKey, TransitionOutcome
from presence_app.remote.http_authority import HttpRemoteAuthority
from presence_app.state.store import Lifetime, StatusStore
from presence_app.sync.agent import SyncAgent

URLOPEN = "presence_app.remote.http_authority.urlopen"


def mock_response(body):
    response = MagicMock()
    response.read.return_value = body if isinstance(body, bytes) else json.dumps(body).encode()
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


def http_error(code, body=b""):
    return HTTPError("http://api.test/attendance/status", code, "Error", {}, io.BytesIO(body))


@pytest.fixture
def http_authority():
    return HttpRemoteAuthority(RemoteParams(base_url="http://api.test/", auth_token="tok"))


class TestConstruction:

    def test_requires_base_url(self):
        with pytest.raises(ValueError):
            HttpRemoteAuthority(RemoteParams())

    def test_rejects_invalid_url(self):
        with pytest.raises(ValueError):
            HttpRemoteAuthority(RemoteParams(base_url="not-a-url"))


class TestFetchCurrent:

    def test_fetch_current(self, http_authority, sample_payload):
        with patch(URLOPEN, return_value=mock_response(sample_payload)) as urlopen:
            snapshot = asyncio.run(http_authority.fetch_current())

        assert snapshot.status == StatusKey.BREAK
        assert snapshot.durations[StatusKey.ONLINE] == 3665

        request = urlopen.call_args[0][0]
        assert request.full_url == "http://api.test/attendance/current"
        assert request.get_method() == "GET"
        assert request.get_header("Authorization") == "Bearer tok"
        assert urlopen.call_args[1]["timeout"] == 10

    def test_invalid_json(self, http_authority):
        with patch(URLOPEN, return_value=mock_response(b"<html>")):
            with pytest.raises(MalformedSnapshotError):
                asyncio.run(http_authority.fetch_current())

    def test_network_error(self, http_authority):
        with patch(URLOPEN, side_effect=URLError("connection refused")):
            with pytest.raises(AuthorityUnavailableError):
                asyncio.run(http_authority.fetch_current())


class TestPostTransition:

    def test_posts_new_status(self, http_authority):
        echo = {"currentStatus": "Lunch Time", "durations": {"Lunch Time": 5}}
        with patch(URLOPEN, return_value=mock_response(echo)) as urlopen:
            snapshot = asyncio.run(http_authority.post_transition(StatusKey.LUNCH_TIME))

        assert snapshot.status == StatusKey.LUNCH_TIME
        request = urlopen.call_args[0][0]
        assert request.full_url == "http://api.test/attendance/status"
        assert request.get_method() == "POST"
        assert json.loads(request.data) == {"newStatus": "Lunch Time"}

    def test_forbidden_carries_server_message(self, http_authority):
        error = http_error(403, b'{"msg": "Not allowed for your role"}')
        with patch(URLOPEN, side_effect=error):
            with pytest.raises(PermissionDeniedError) as exc_info:
                asyncio.run(http_authority.post_transition(StatusKey.EVALUATION))

        assert exc_info.value.server_message == "Not allowed for your role"
        assert exc_info.value.requested_status == "Evaluation"

    def test_server_error_is_unavailable(self, http_authority):
        with patch(URLOPEN, side_effect=http_error(503)):
            with pytest.raises(AuthorityUnavailableError) as exc_info:
                asyncio.run(http_authority.post_transition(StatusKey.BREAK))

        assert exc_info.value.status_code == 503
        assert exc_info.value.server_message is None

    def test_client_error_without_json_body(self, http_authority):
        with patch(URLOPEN, side_effect=http_error(400, b"bad request")):
            with pytest.raises(RemoteAuthorityError) as exc_info:
                asyncio.run(http_authority.post_transition(StatusKey.BREAK))

        assert exc_info.value.status_code == 400
        assert exc_info.value.server_message is None


def truncated_response():
    response = mock_response(b"")
    response.read.side_effect = http.client.IncompleteRead(b"{")
    return response


class TestProtocolErrors:
    """Test that http.client protocol errors map to unavailability."""

    def test_incomplete_read_on_fetch(self, http_authority):
        with patch(URLOPEN, return_value=truncated_response()):
            with pytest.raises(AuthorityUnavailableError):
                asyncio.run(http_authority.fetch_current())

    def test_bad_status_line(self, http_authority):
        with patch(URLOPEN, side_effect=http.client.BadStatusLine("garbage")):
            with pytest.raises(AuthorityUnavailableError):
                asyncio.run(http_authority.fetch_current())

    def test_incomplete_error_body_keeps_status_code(self, http_authority):
        error = http_error(500)
        error.read = MagicMock(side_effect=http.client.IncompleteRead(b"{"))
        with patch(URLOPEN, side_effect=error):
            with pytest.raises(AuthorityUnavailableError) as exc_info:
                asyncio.run(http_authority.post_transition(StatusKey.BREAK))

        assert exc_info.value.status_code == 500
        assert exc_info.value.server_message is None

    def test_truncated_transition_echo_fails_cleanly(self, http_authority):
        store = StatusStore()
        notices = []
        agent = SyncAgent(http_authority, store, Lifetime(), notify=notices.append)

        with patch(URLOPEN, return_value=truncated_response()):
            result = asyncio.run(agent.request_transition(StatusKey.ONLINE))

        assert result.outcome == TransitionOutcome.FAILED
        assert notices == ["Failed to change status"]
        assert store.current_status() == StatusKey.OFFLINE
        assert store.busy is False

    def test_resync_heals_after_truncated_response(self, http_authority, sample_payload):
        store = StatusStore()
        agent = SyncAgent(http_authority, store, Lifetime(), resync_interval_seconds=0.01)
        responses = [truncated_response()] + [mock_response(sample_payload) for _ in range(50)]

        async def scenario():
            agent.start_periodic()
            for _ in range(100):
                await asyncio.sleep(0.01)
                if store.current_status() == StatusKey.BREAK:
                    break
            agent.cancel()

        with patch(URLOPEN, side_effect=responses):
            asyncio.run(scenario())

        assert store.current_status() == StatusKey.BREAK
