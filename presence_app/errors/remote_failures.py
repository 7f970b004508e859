"""
Remote authority error classifications.

These exceptions are raised by RemoteAuthority implementations and carry
the optional human-readable message provided by the server.
"""

from typing import Any, Optional, Dict


class RemoteAuthorityError(Exception):
    """Base class for errors reported by the remote authority or its transport."""

    def __init__(self, message: str, server_message: Optional[str] = None,
                 status_code: Optional[int] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.server_message = server_message
        self.status_code = status_code
        self.context = context or {}
        self.recoverable = True


class AuthorityUnavailableError(RemoteAuthorityError):
    """Network failure, timeout or server-side error."""
    pass


class PermissionDeniedError(RemoteAuthorityError):
    """The authority refused a status the caller's role may not select."""

    def __init__(self, message: str, role: Optional[str] = None,
                 requested_status: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.role = role
        self.requested_status = requested_status


class MalformedSnapshotError(RemoteAuthorityError):
    """Payload could not be decoded into a status snapshot."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 raw_value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field_name = field_name
        self.raw_value = raw_value
