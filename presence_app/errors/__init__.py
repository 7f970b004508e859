"""
Error classification for the presence tracker.

Separates failures reported by the remote authority (transport, permission,
malformed payloads) from local failures such as invalid configuration.
"""

from .remote_failures import (
    RemoteAuthorityError,
    AuthorityUnavailableError,
    PermissionDeniedError,
    MalformedSnapshotError,
)
from .recovery import (
    SyncError,
    ConfigurationError,
)

__all__ = [
    # Remote Authority Errors
    "RemoteAuthorityError",
    "AuthorityUnavailableError",
    "PermissionDeniedError",
    "MalformedSnapshotError",
    # Local Errors
    "SyncError",
    "ConfigurationError",
]
