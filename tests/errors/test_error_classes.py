"""Tests for the error classification system."""

from presence_app.errors import (
    AuthorityUnavailableError,
    ConfigurationError,
    MalformedSnapshotError,
    PermissionDeniedError,
    RemoteAuthorityError,
    SyncError,
)


class TestErrorClassification:

    def test_remote_error_hierarchy(self):
        base = RemoteAuthorityError("boom")
        assert base.server_message is None
        assert base.status_code is None
        assert base.context == {}
        assert base.recoverable is True

        for error in (
            AuthorityUnavailableError("down"),
            PermissionDeniedError("no", role="HR", requested_status="On-call"),
            MalformedSnapshotError("bad", field_name="durations", raw_value=-1),
        ):
            assert isinstance(error, RemoteAuthorityError)

    def test_permission_denied_fields(self):
        error = PermissionDeniedError(
            "no", role="HR", requested_status="On-call",
            server_message="HR cannot select On-call", status_code=403
        )
        assert error.role == "HR"
        assert error.requested_status == "On-call"
        assert error.server_message == "HR cannot select On-call"
        assert error.status_code == 403

    def test_sync_error_wraps_cause(self):
        cause = AuthorityUnavailableError("down")
        error = SyncError("Failed to fetch status", phase="resync", cause=cause)
        assert error.cause is cause
        assert error.phase == "resync"
        assert error.recoverable is True

    def test_configuration_error(self):
        error = ConfigurationError("invalid", errors=["x"])
        assert error.errors == ["x"]
        assert error.recoverable is False
